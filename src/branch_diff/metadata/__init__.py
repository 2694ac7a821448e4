"""Profile metadata fingerprinting and differential documents."""

from .differential import (
    DIFFERENTIAL_FOOTER,
    DIFFERENTIAL_HEADER,
    PROFILE_NAMESPACE,
    ProfileDifferential,
)
from .fingerprint import build_fingerprint_index, canonical_xml, local_name
from .models import DifferentialResult, FingerprintEntry, FingerprintIndex, MetadataParseError

__all__ = [
    "DIFFERENTIAL_FOOTER",
    "DIFFERENTIAL_HEADER",
    "DifferentialResult",
    "FingerprintEntry",
    "FingerprintIndex",
    "MetadataParseError",
    "PROFILE_NAMESPACE",
    "ProfileDifferential",
    "build_fingerprint_index",
    "canonical_xml",
    "local_name",
]
