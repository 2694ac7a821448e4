from __future__ import annotations

from pathlib import Path

from branch_diff.config import (
    BUNDLE_COMPONENT_TYPES,
    REQUIRED_PROFILE_ELEMENTS,
    CliOverrides,
    DeployPolicy,
    load_effective_config,
)


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path)

    assert config.repo_root == tmp_path.resolve()
    assert config.output_directory == tmp_path.resolve() / "deploy"
    assert config.current_ref == "HEAD"
    assert config.parent_ref == "develop"
    assert config.verbose is False
    assert config.run_log is None
    assert config.policy == DeployPolicy()


def test_fixed_policy_values() -> None:
    policy = DeployPolicy()

    assert BUNDLE_COMPONENT_TYPES == frozenset({"aura", "experiences", "lwc"})
    assert REQUIRED_PROFILE_ELEMENTS == frozenset(
        {"custom", "description", "fullName", "userLicense"}
    )
    assert policy.profile_suffix == ".profile-meta.xml"
    assert policy.sidecar_suffix == "-meta.xml"


def test_merge_order_defaults_then_repo_then_cli(tmp_path: Path) -> None:
    (tmp_path / "branch_diff.toml").write_text(
        "\n".join(
            [
                "[run]",
                'output_directory = "out/deploy"',
                'parent = "main"',
                'current = "feature/x"',
                "verbose = true",
                'run_log = ".branch_diff/run.jsonl"',
            ]
        ),
        encoding="utf-8",
    )
    overrides = CliOverrides(current_ref="HEAD~1", verbose=False)

    config = load_effective_config(tmp_path, overrides)

    assert config.output_directory == tmp_path.resolve() / "out" / "deploy"
    assert config.parent_ref == "main"
    assert config.current_ref == "HEAD~1"
    assert config.verbose is False
    assert config.run_log == tmp_path.resolve() / ".branch_diff" / "run.jsonl"


def test_cli_output_directory_is_anchored_at_repo_root(tmp_path: Path) -> None:
    absolute = tmp_path / "elsewhere"

    relative_config = load_effective_config(
        tmp_path, CliOverrides(output_directory=Path("build"))
    )
    absolute_config = load_effective_config(tmp_path, CliOverrides(output_directory=absolute))

    assert relative_config.output_directory == tmp_path.resolve() / "build"
    assert absolute_config.output_directory == absolute.resolve()


def test_public_dict_is_serializable_snapshot(tmp_path: Path) -> None:
    snapshot = load_effective_config(tmp_path).to_public_dict()

    assert snapshot["parent_ref"] == "develop"
    assert snapshot["run_log"] is None
    assert snapshot["policy"] == {
        "component_types": ["aura", "experiences", "lwc"],
        "required_elements": ["custom", "description", "fullName", "userLicense"],
        "profile_suffix": ".profile-meta.xml",
        "sidecar_suffix": "-meta.xml",
    }
