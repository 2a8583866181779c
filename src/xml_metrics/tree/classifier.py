"""Classification of a single element into tags and typed fields.

An element contributes at most one entry from its own text, keyed by its tag
name, plus one entry per attribute, keyed by the attribute name.  Each key is
routed exactly once: names listed in ``ClassificationRules.tag_keys`` become
string tags, everything else becomes a field run through ``coerce``.

Blank values are dropped.  Blankness is judged on the value with newlines,
carriage returns, tabs and spaces trimmed from both ends, but the value that
gets stored (or coerced) is always the original, untrimmed string.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from xml_metrics.fields.coercion import FieldValue, coerce
from xml_metrics.tree import nodes

__all__ = ["ClassificationRules", "classify", "trim_empty_chars"]

_EMPTY_CHARS = "\n\r\t "


def trim_empty_chars(value: str) -> str:
    return value.strip(_EMPTY_CHARS)


@dataclass(frozen=True, slots=True)
class ClassificationRules:
    """How element names map onto tags versus fields.

    Attributes:
        tag_keys: Names (element or attribute) whose values become tags.
            Membership only; order is irrelevant.
        tag_node: When True, metrics carry an ``xml_node_name`` tag holding
            the selected element's own name.  Applied by the parser, not by
            ``classify``.
    """

    tag_keys: frozenset[str] = field(default_factory=frozenset)
    tag_node: bool = False

    def is_tag(self, name: str) -> bool:
        return name in self.tag_keys


def classify(
    element: etree._Element, rules: ClassificationRules
) -> tuple[dict[str, str], dict[str, FieldValue]]:
    """Split one element's own text and attributes into ``(tags, fields)``.

    Descendants are not visited.  Both returned dicts are new objects.

    Example::

        # <cpu host="a" usage="0.5">12</cpu>, tag_keys={"host"}
        classify(el, rules)
        # ({"host": "a"}, {"cpu": 12, "usage": 0.5})
    """
    tags: dict[str, str] = {}
    fields: dict[str, FieldValue] = {}

    entries = [(nodes.tag_name(element), nodes.text(element))]
    entries.extend(nodes.attributes(element))

    for name, value in entries:
        if trim_empty_chars(value) == "":
            continue
        if rules.is_tag(name):
            tags[name] = value
        else:
            fields[name] = coerce(value)

    return tags, fields
