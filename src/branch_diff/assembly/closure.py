"""Bundle closure for component types deployed as whole directories."""

from __future__ import annotations

from branch_diff.assembly.models import CopyUnit
from branch_diff.config import BUNDLE_COMPONENT_TYPES
from branch_diff.workspace.paths import split_relative_path


class ClosureResolver:
    """Maps a changed file to the unit that has to be deployed with it.

    A file below `<type>/<bundle>/...` where `<type>` is a bundle component
    type resolves to the `<type>/<bundle>` directory. When several segments
    match, the one nearest the file wins.
    """

    def __init__(self, component_types: frozenset[str] = BUNDLE_COMPONENT_TYPES) -> None:
        self._component_types = frozenset(component_types)

    @property
    def component_types(self) -> frozenset[str]:
        return self._component_types

    def resolve(self, changed_path: str) -> CopyUnit:
        """Return the copy unit for changed_path."""
        segments = split_relative_path(changed_path)
        normalized = "/".join(segments)
        directory_segments = segments[:-1]

        bundle_end: int | None = None
        for position in range(len(directory_segments) - 1):
            if directory_segments[position] in self._component_types:
                bundle_end = position + 1

        if bundle_end is None:
            return CopyUnit(path=normalized, changed_path=normalized)
        return CopyUnit(
            path="/".join(directory_segments[: bundle_end + 1]),
            changed_path=normalized,
            component_type=directory_segments[bundle_end - 1],
        )
