"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILE_NAME = "branch_diff.toml"

DEFAULT_OUTPUT_DIRECTORY = "deploy"
DEFAULT_CURRENT_REF = "HEAD"
DEFAULT_PARENT_REF = "develop"

BUNDLE_COMPONENT_TYPES = frozenset({"aura", "experiences", "lwc"})
REQUIRED_PROFILE_ELEMENTS = frozenset({"custom", "description", "fullName", "userLicense"})
PROFILE_SUFFIX = ".profile-meta.xml"
SIDECAR_SUFFIX = "-meta.xml"


@dataclass(slots=True, frozen=True)
class DeployPolicy:
    """Fixed classification rules for bundles, profiles and sidecars."""

    component_types: frozenset[str] = BUNDLE_COMPONENT_TYPES
    required_elements: frozenset[str] = REQUIRED_PROFILE_ELEMENTS
    profile_suffix: str = PROFILE_SUFFIX
    sidecar_suffix: str = SIDECAR_SUFFIX


@dataclass(slots=True, frozen=True)
class DeployConfig:
    """Fully merged run configuration."""

    repo_root: Path
    output_directory: Path
    current_ref: str
    parent_ref: str
    verbose: bool
    run_log: Path | None
    policy: DeployPolicy = field(default_factory=DeployPolicy)

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for run logs."""
        return {
            "repo_root": str(self.repo_root),
            "output_directory": str(self.output_directory),
            "current_ref": self.current_ref,
            "parent_ref": self.parent_ref,
            "verbose": self.verbose,
            "run_log": str(self.run_log) if self.run_log is not None else None,
            "policy": {
                "component_types": sorted(self.policy.component_types),
                "required_elements": sorted(self.policy.required_elements),
                "profile_suffix": self.policy.profile_suffix,
                "sidecar_suffix": self.policy.sidecar_suffix,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    output_directory: Path | None = None
    current_ref: str | None = None
    parent_ref: str | None = None
    verbose: bool | None = None
    run_log: Path | None = None


def default_config(repo_root: Path) -> DeployConfig:
    """Build default config for a given repository root."""
    resolved_root = repo_root.resolve()
    return DeployConfig(
        repo_root=resolved_root,
        output_directory=resolved_root / DEFAULT_OUTPUT_DIRECTORY,
        current_ref=DEFAULT_CURRENT_REF,
        parent_ref=DEFAULT_PARENT_REF,
        verbose=False,
        run_log=None,
    )


def load_repo_config_file(repo_root: Path) -> dict[str, object]:
    """Load optional branch_diff.toml from repo root."""
    config_path = repo_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_ref(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value.strip()


def _optional_path(value: object, name: str, repo_root: Path, default: Path | None) -> Path | None:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty path string.")
    return _anchor(repo_root, Path(value))


def _anchor(repo_root: Path, candidate: Path) -> Path:
    if candidate.is_absolute():
        return candidate.resolve()
    return (repo_root / candidate).resolve()


def merge_config(
    base: DeployConfig, repo_payload: dict[str, object], overrides: CliOverrides
) -> DeployConfig:
    """Merge defaults, repo config, then CLI overrides."""
    if "policy" in repo_payload:
        policy_payload = _get_table(repo_payload, "policy")
        field_names = sorted(policy_payload.keys())
        target = f"policy.{field_names[0]}" if field_names else "policy"
        raise ValueError(
            f"Config field '{target}' is not supported; bundle and profile rules are fixed."
        )

    run_payload = _get_table(repo_payload, "run")

    verbose = base.verbose
    if "verbose" in run_payload:
        raw_verbose = run_payload["verbose"]
        if not isinstance(raw_verbose, bool):
            raise ValueError("Config field 'run.verbose' must be a boolean.")
        verbose = raw_verbose

    output_directory = _optional_path(
        run_payload.get("output_directory"),
        "run.output_directory",
        base.repo_root,
        base.output_directory,
    )
    merged = DeployConfig(
        repo_root=base.repo_root,
        output_directory=output_directory or base.output_directory,
        current_ref=_optional_ref(run_payload.get("current"), "run.current", base.current_ref),
        parent_ref=_optional_ref(run_payload.get("parent"), "run.parent", base.parent_ref),
        verbose=verbose,
        run_log=_optional_path(run_payload.get("run_log"), "run.run_log", base.repo_root, base.run_log),
        policy=base.policy,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: DeployConfig, overrides: CliOverrides) -> DeployConfig:
    """Apply startup overrides at highest precedence."""
    output_directory = config.output_directory
    if overrides.output_directory is not None:
        output_directory = _anchor(config.repo_root, overrides.output_directory)
    run_log = config.run_log
    if overrides.run_log is not None:
        run_log = _anchor(config.repo_root, overrides.run_log)
    return DeployConfig(
        repo_root=config.repo_root,
        output_directory=output_directory,
        current_ref=_optional_ref(overrides.current_ref, "overrides.current", config.current_ref),
        parent_ref=_optional_ref(overrides.parent_ref, "overrides.parent", config.parent_ref),
        verbose=overrides.verbose if overrides.verbose is not None else config.verbose,
        run_log=run_log,
        policy=config.policy,
    )


def load_effective_config(repo_root: Path, overrides: CliOverrides | None = None) -> DeployConfig:
    """Load effective config using merge order defaults -> repo config -> overrides."""
    resolved_root = repo_root.resolve()
    base = default_config(resolved_root)
    payload = load_repo_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())
