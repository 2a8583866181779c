"""Parsing raw bytes into an lxml document."""

from __future__ import annotations

from lxml import etree

from xml_metrics.errors import InputError

__all__ = ["parse_document"]


def _make_parser() -> etree.XMLParser:
    # External entities and DTD fetches are never followed; huge_tree lifts
    # libxml2's nesting-depth and text-size caps.
    return etree.XMLParser(
        resolve_entities=False, no_network=True, load_dtd=False, huge_tree=True
    )


def parse_document(data: bytes) -> etree._ElementTree:
    """Parse one well-formed XML document.

    Raises:
        InputError: If ``data`` is empty or not well-formed XML.
    """
    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise InputError(f"malformed XML document: {exc}") from exc
    return root.getroottree()
