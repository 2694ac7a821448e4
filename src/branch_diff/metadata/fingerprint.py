"""Content fingerprints for the top-level elements of a metadata document."""

from __future__ import annotations

import copy
import hashlib
import xml.etree.ElementTree as ET

from branch_diff.metadata.models import FingerprintEntry, FingerprintIndex, MetadataParseError

PROFILE_ROOT = "Profile"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
_BYTE_ORDER_MARK = "\ufeff"

ET.register_namespace("xsi", XSI_NAMESPACE)


def local_name(tag: str) -> str:
    """Strip a `{namespace}` prefix from an ElementTree tag."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


def canonical_xml(element: ET.Element) -> str:
    """Serialize one element subtree without namespace prefixes or trailing text.

    Only tags lose their namespace, so the emitted element falls under the
    default namespace of the document it is written into. Namespaced
    attributes keep theirs and the subtree root declares it; `xsi:nil`
    comes out with the conventional `xsi` prefix. The output is
    ElementTree's serialization, not the source bytes: attribute quoting is
    normalized and empty elements are written as `<name />`.
    """
    clone = copy.deepcopy(element)
    for node in clone.iter():
        node.tag = local_name(node.tag)
    clone.tail = None
    return ET.tostring(clone, encoding="unicode")


def sha256_text(content: str) -> str:
    """Compute SHA-256 over UTF-8 encoded text."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def parse_document(content: str, source: str = "document") -> ET.Element | None:
    """Parse document text; blank text is an empty document."""
    text = content.lstrip(_BYTE_ORDER_MARK)
    if not text.strip():
        return None
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise MetadataParseError(source=source, reason=str(exc)) from exc


def build_fingerprint_index(
    content: str,
    root_name: str = PROFILE_ROOT,
    source: str = "document",
) -> FingerprintIndex:
    """Map `name|sha256` to each child element of every `root_name` element.

    Children with identical name and content share a key; the later sibling
    replaces the earlier one.
    """
    document = parse_document(content, source=source)
    index: FingerprintIndex = {}
    if document is None:
        return index
    for container in document.iter():
        if local_name(container.tag) != root_name:
            continue
        for child in container:
            serialized = canonical_xml(child)
            entry = FingerprintEntry(
                name=local_name(child.tag),
                content_hash=sha256_text(serialized),
                canonical_xml=serialized,
                element=child,
            )
            index[entry.key] = entry
    return index
