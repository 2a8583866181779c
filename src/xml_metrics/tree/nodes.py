"""Read-only accessors over lxml elements.

The rest of the package only ever looks at an element through these four
functions, so namespace handling and the treatment of comments and
processing instructions are decided in one place:

- names are local names (``{urn:x}cpu`` and ``x:cpu`` both read as ``cpu``)
- text is the character data before the first child, ``""`` when absent
- only element nodes count as descendants
"""

from __future__ import annotations

from collections.abc import Iterator

from lxml import etree

__all__ = ["attributes", "descendants", "is_element", "tag_name", "text"]


def is_element(node: object) -> bool:
    """True for real elements; False for comments, PIs, strings and numbers."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def tag_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def text(element: etree._Element) -> str:
    return element.text or ""


def attributes(element: etree._Element) -> list[tuple[str, str]]:
    """Attribute ``(name, value)`` pairs in document order."""
    return [(etree.QName(key).localname, value) for key, value in element.attrib.items()]


def descendants(element: etree._Element) -> Iterator[etree._Element]:
    """Every element below ``element`` in document order, excluding itself."""
    return element.iterdescendants(tag=etree.Element)
