"""Sparse profile documents built from changed and required elements."""

from __future__ import annotations

from branch_diff.config import REQUIRED_PROFILE_ELEMENTS
from branch_diff.metadata.fingerprint import PROFILE_ROOT, build_fingerprint_index
from branch_diff.metadata.models import DifferentialResult

PROFILE_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
DIFFERENTIAL_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    f'<{PROFILE_ROOT} xmlns="{PROFILE_NAMESPACE}">\n'
)
DIFFERENTIAL_FOOTER = f"</{PROFILE_ROOT}>"


class ProfileDifferential:
    """Builds additive-only profile documents.

    Elements removed since the old revision are never represented: the
    deployment target merges the result into the existing profile.
    """

    def __init__(self, required_elements: frozenset[str] = REQUIRED_PROFILE_ELEMENTS) -> None:
        self._required_elements = frozenset(required_elements)

    @property
    def required_elements(self) -> frozenset[str]:
        """Return element names emitted even when unchanged."""
        return self._required_elements

    def compute(self, old_content: str, new_content: str) -> DifferentialResult:
        """Compare two revisions of a profile and build the sparse document."""
        old_index = build_fingerprint_index(old_content, source="old")
        new_index = build_fingerprint_index(new_content, source="new")

        parts = [DIFFERENTIAL_HEADER]
        emitted: list[str] = []
        changed_count = 0
        required_count = 0
        for key in sorted(new_index.keys()):
            entry = new_index[key]
            changed = key not in old_index
            required = entry.name in self._required_elements
            if not changed and not required:
                continue
            if changed:
                changed_count += 1
            else:
                required_count += 1
            emitted.append(key)
            parts.append(f"{entry.canonical_xml}\n")
        parts.append(DIFFERENTIAL_FOOTER)

        return DifferentialResult(
            document="".join(parts),
            emitted_keys=tuple(emitted),
            changed_count=changed_count,
            required_count=required_count,
        )
