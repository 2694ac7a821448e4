from __future__ import annotations

import io
from pathlib import Path

import pytest

from branch_diff.logging import RunReporter
from branch_diff.workspace import DirectoryCopyOutcome, PathBlockedError, Workspace


def _workspace(tmp_path: Path, stream: io.StringIO, verbose: bool = True) -> Workspace:
    source = tmp_path / "repo"
    source.mkdir(exist_ok=True)
    return Workspace(
        source,
        tmp_path / "deploy",
        reporter=RunReporter(verbose=verbose, stream=stream),
    )


def test_missing_directory_is_reported_and_skipped(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream, verbose=True)

    outcome = workspace.copy_directory_recursive("aura/missing")

    assert outcome is DirectoryCopyOutcome.UNAVAILABLE
    assert stream.getvalue().startswith("WARNING [os.stat(")
    assert not (tmp_path / "deploy").exists()


def test_file_in_place_of_directory_is_skipped(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream)
    (tmp_path / "repo" / "bundle").write_text("not a dir", encoding="utf-8")

    assert workspace.copy_directory_recursive("bundle") is DirectoryCopyOutcome.UNAVAILABLE
    assert "source is not a directory" in stream.getvalue()


def test_existing_destination_directory_is_left_alone(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream)
    (tmp_path / "repo" / "lwc" / "w").mkdir(parents=True)
    (tmp_path / "repo" / "lwc" / "w" / "w.js").write_text("new", encoding="utf-8")
    (tmp_path / "deploy" / "lwc" / "w").mkdir(parents=True)

    outcome = workspace.copy_directory_recursive("lwc/w")

    assert outcome is DirectoryCopyOutcome.ALREADY_PRESENT
    assert not (tmp_path / "deploy" / "lwc" / "w" / "w.js").exists()
    assert "directory already exists[skipping]" in stream.getvalue()


def test_write_output_file_creates_parents_and_encodes_utf8(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream)

    written = workspace.write_output_file("profiles/Admin.profile-meta.xml", "<a>é</a>")

    assert written == (tmp_path / "deploy" / "profiles" / "Admin.profile-meta.xml").resolve()
    assert written.read_bytes() == "<a>é</a>".encode("utf-8")
    assert f"Created file {written}" in stream.getvalue()


def test_copy_file_verbatim_preserves_bytes(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream)
    payload = b"\x00\x01binary\r\n"
    (tmp_path / "repo" / "static").mkdir()
    (tmp_path / "repo" / "static" / "logo.bin").write_bytes(payload)

    workspace.copy_file_verbatim("static/logo.bin")

    assert (tmp_path / "deploy" / "static" / "logo.bin").read_bytes() == payload


def test_existence_probes_distinguish_files_and_directories(tmp_path: Path) -> None:
    workspace = _workspace(tmp_path, io.StringIO())
    (tmp_path / "repo" / "classes").mkdir()
    (tmp_path / "repo" / "classes" / "Foo.cls").write_text("x", encoding="utf-8")

    assert workspace.path_exists_as_file("classes/Foo.cls") is True
    assert workspace.path_exists_as_file("classes") is False
    assert workspace.path_exists_as_directory("classes") is True
    assert workspace.path_exists_as_directory("classes/Foo.cls") is False
    assert workspace.path_exists_as_file("classes/Missing.cls") is False


def test_remove_output_directory_tolerates_missing_directory(tmp_path: Path) -> None:
    stream = io.StringIO()
    workspace = _workspace(tmp_path, stream)

    workspace.remove_output_directory()

    assert not (tmp_path / "deploy").exists()
    assert "Deleted directory:" in stream.getvalue()


def test_output_directory_may_not_contain_source_tree(tmp_path: Path) -> None:
    source = tmp_path / "repo"
    source.mkdir()

    with pytest.raises(PathBlockedError):
        Workspace(source, source)
    with pytest.raises(PathBlockedError):
        Workspace(source, tmp_path)


def test_output_directory_inside_source_tree_is_allowed(tmp_path: Path) -> None:
    workspace = Workspace(tmp_path, tmp_path / "deploy")

    assert workspace.output_root == (tmp_path / "deploy").resolve()
