"""Filesystem operations between the source tree and the output directory."""

from __future__ import annotations

import os
import shutil
import stat
from enum import Enum
from pathlib import Path

from branch_diff.logging import RunReporter
from branch_diff.workspace.paths import PathBlockedError, resolve_under_root


class DirectoryCopyOutcome(str, Enum):
    """Result of one recursive directory copy request."""

    COPIED = "copied"
    ALREADY_PRESENT = "already_present"
    UNAVAILABLE = "unavailable"


class Workspace:
    """Reads from the source root and writes beneath the output root."""

    def __init__(
        self,
        source_root: Path,
        output_root: Path,
        reporter: RunReporter | None = None,
    ) -> None:
        self._source_root = source_root.resolve()
        self._output_root = output_root.resolve()
        self._reporter = reporter or RunReporter()
        if self._source_root == self._output_root or self._source_root.is_relative_to(
            self._output_root
        ):
            raise PathBlockedError(
                reason="Output directory contains the source tree.",
                hint="Choose an output directory inside or beside the repository.",
            )

    @property
    def source_root(self) -> Path:
        """Return the resolved source tree root."""
        return self._source_root

    @property
    def output_root(self) -> Path:
        """Return the resolved output directory."""
        return self._output_root

    def source_path(self, relative_path: str) -> Path:
        return resolve_under_root(self._source_root, relative_path)

    def output_path(self, relative_path: str) -> Path:
        return resolve_under_root(self._output_root, relative_path)

    def remove_output_directory(self) -> None:
        """Delete the output directory and everything below it."""
        if self._output_root.is_symlink() or self._output_root.is_file():
            self._output_root.unlink()
        elif self._output_root.exists():
            shutil.rmtree(self._output_root)
        self._reporter.info(f"Deleted directory: {self._output_root}")

    def path_exists_as_file(self, relative_path: str) -> bool:
        return self.source_path(relative_path).is_file()

    def path_exists_as_directory(self, relative_path: str) -> bool:
        return self.source_path(relative_path).is_dir()

    def read_working_file(self, relative_path: str) -> str:
        """Read a working-tree file as UTF-8 text."""
        return self.source_path(relative_path).read_text(encoding="utf-8")

    def write_output_file(self, relative_path: str, content: str | bytes) -> Path:
        """Write content to the output location for relative_path."""
        destination = self.output_path(relative_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        payload = content.encode("utf-8") if isinstance(content, str) else content
        destination.write_bytes(payload)
        self._reporter.info(f"Created file {destination}")
        return destination

    def copy_file_verbatim(self, relative_path: str) -> Path:
        """Copy one source file byte-for-byte to the mirrored output path."""
        source = self.source_path(relative_path)
        destination = self.output_path(relative_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        self._reporter.info(f"Created file {destination}")
        return destination

    def copy_directory_recursive(self, relative_path: str) -> DirectoryCopyOutcome:
        """Mirror a source directory into the output, skipping symbolic links.

        A directory already present in the output is left alone. A source
        directory that cannot be probed is reported and skipped.
        """
        source = self.source_path(relative_path)
        try:
            info = os.stat(source)
        except OSError as exc:
            self._reporter.warning(f"os.stat({source}): {exc}")
            return DirectoryCopyOutcome.UNAVAILABLE
        if not stat.S_ISDIR(info.st_mode):
            self._reporter.warning(f"source is not a directory: {source}")
            return DirectoryCopyOutcome.UNAVAILABLE

        destination = self.output_path(relative_path)
        if destination.is_dir():
            self._reporter.info(f"directory already exists[skipping]: {destination}")
            return DirectoryCopyOutcome.ALREADY_PRESENT

        self._copy_tree(source, destination)
        return DirectoryCopyOutcome.COPIED

    def _copy_tree(self, source: Path, destination: Path) -> None:
        destination.mkdir(parents=True, exist_ok=True)
        with os.scandir(source) as entries:
            ordered_entries = sorted(entries, key=lambda item: item.name)
        for entry in ordered_entries:
            if entry.is_symlink():
                continue
            target = destination / entry.name
            if entry.is_dir(follow_symlinks=False):
                self._copy_tree(Path(entry.path), target)
                continue
            shutil.copyfile(entry.path, target)
            self._reporter.info(f"Created file {target}")
