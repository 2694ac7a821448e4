"""Command-line entrypoint for assembling a branch deployment directory."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from branch_diff.assembly import AssemblyReport, ChangeSetAssembler
from branch_diff.config import CliOverrides, DeployConfig, load_effective_config
from branch_diff.logging import JsonlRunLogger, RunReporter
from branch_diff.metadata import MetadataParseError
from branch_diff.vcs import GitClient, GitCommandError
from branch_diff.workspace import PathBlockedError, Workspace


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for run configuration."""
    parser = argparse.ArgumentParser(
        prog="branch-diff",
        description="Copy files changed since the fork point into a deployment directory.",
    )
    parser.add_argument(
        "--directory",
        default=None,
        help="Output directory to copy modified changes into (default: deploy).",
    )
    parser.add_argument(
        "--current",
        default=None,
        help="Current commit/branch to compare against (default: HEAD).",
    )
    parser.add_argument(
        "--parent",
        default=None,
        help="Parent commit/branch to compare against (default: develop).",
    )
    parser.add_argument("--verbose", action="store_true", default=None, help="Verbose output.")
    parser.add_argument("--repo-root", default=".", help="Repository root. Defaults to cwd.")
    parser.add_argument("--run-log", default=None, help="Optional JSONL run log path.")
    return parser


def run(
    config: DeployConfig,
    reporter: RunReporter,
    git: GitClient | None = None,
) -> AssemblyReport:
    """Resolve the change set for config and assemble the output directory."""
    client = git or GitClient(config.repo_root)
    fork_point = client.resolve_fork_point(config.parent_ref, config.current_ref)
    changed_paths = client.list_changed_paths(fork_point, config.current_ref)
    for changed_path in changed_paths:
        reporter.info(f"File change found: {changed_path}")

    run_log: JsonlRunLogger | None = None
    if config.run_log is not None:
        run_log = JsonlRunLogger(config.run_log, run_id=f"run-{fork_point[:12]}")
        run_log.record("run_started", detail={"config": config.to_public_dict()})

    workspace = Workspace(config.repo_root, config.output_directory, reporter=reporter)
    assembler = ChangeSetAssembler(
        workspace,
        client,
        policy=config.policy,
        reporter=reporter,
        run_log=run_log,
    )
    report = assembler.assemble(changed_paths, fork_point)
    if run_log is not None:
        run_log.record(
            "run_finished",
            detail={"actions": len(report.actions), "changed_count": len(changed_paths)},
        )
    return report


def main(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    """Entrypoint for the branch-diff process."""
    args = build_arg_parser().parse_args(argv)
    error_stream = stream if stream is not None else sys.stderr
    overrides = CliOverrides(
        output_directory=Path(args.directory) if args.directory is not None else None,
        current_ref=args.current,
        parent_ref=args.parent,
        verbose=args.verbose,
        run_log=Path(args.run_log) if args.run_log is not None else None,
    )
    try:
        config = load_effective_config(Path(args.repo_root), overrides)
        reporter = RunReporter(verbose=config.verbose, stream=stream)
        run(config, reporter)
    except GitCommandError as exc:
        error_stream.write(f"error: git: {exc}\n")
        return 1
    except MetadataParseError as exc:
        error_stream.write(f"error: profile differential: {exc}\n")
        return 1
    except PathBlockedError as exc:
        error_stream.write(f"error: path: {exc.reason} {exc.hint}\n")
        return 1
    except UnicodeDecodeError as exc:
        error_stream.write(f"error: file read: {exc}\n")
        return 1
    except ValueError as exc:
        error_stream.write(f"error: config: {exc}\n")
        return 1
    except OSError as exc:
        error_stream.write(f"error: file operation: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
