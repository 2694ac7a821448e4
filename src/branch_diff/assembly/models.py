"""Typed models for change set assembly."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(slots=True, frozen=True)
class CopyUnit:
    """The file or bundle directory that stands in for one changed path."""

    path: str
    changed_path: str
    component_type: str | None = None

    @property
    def is_bundle(self) -> bool:
        return self.component_type is not None


class ActionKind(str, Enum):
    """Kinds of output produced for a changed path."""

    PROFILE_DIFFERENTIAL = "profile_differential"
    DIRECTORY_COPY = "directory_copy"
    DIRECTORY_ALREADY_PRESENT = "directory_already_present"
    DIRECTORY_SKIPPED = "directory_skipped"
    FILE_COPY = "file_copy"
    SIDECAR_COPY = "sidecar_copy"


@dataclass(slots=True, frozen=True)
class AssemblyAction:
    """One action taken while assembling the output directory."""

    kind: ActionKind
    changed_path: str
    source: str
    destination: str


@dataclass(slots=True, frozen=True)
class AssemblyReport:
    """Ordered record of everything an assembly run did."""

    fork_point: str
    output_directory: str
    changed_paths: tuple[str, ...]
    actions: tuple[AssemblyAction, ...]
