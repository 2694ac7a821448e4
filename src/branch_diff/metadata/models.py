"""Typed models for profile metadata fingerprints."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass


class MetadataParseError(Exception):
    """Raised when a metadata document is not well-formed XML."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source} metadata is not well-formed: {reason}")
        self.source = source
        self.reason = reason


@dataclass(slots=True, frozen=True)
class FingerprintEntry:
    """One top-level element identified by its name and content hash."""

    name: str
    content_hash: str
    canonical_xml: str
    element: ET.Element

    @property
    def key(self) -> str:
        """Return the composite `name|hash` index key."""
        return f"{self.name}|{self.content_hash}"


FingerprintIndex = dict[str, FingerprintEntry]


@dataclass(slots=True, frozen=True)
class DifferentialResult:
    """Sparse profile document and the keys that were emitted into it."""

    document: str
    emitted_keys: tuple[str, ...]
    changed_count: int
    required_count: int
