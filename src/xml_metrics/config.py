"""ParserConfig and MergeStrategy for XML-to-metric conversion.

ParserConfig is a frozen (immutable) dataclass holding everything a parser
needs to turn one document into metrics.  MergeStrategy names the three ways
selected elements can be turned into metrics:

- ARRAY:         one metric per selected element, flattening its subtree.
- OBJECT:        one metric per selected element, its own text/attributes only.
- OBJECT_MERGED: one metric for the whole document, combining every selected
                 element's own text/attributes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any

from xml_metrics.tree.classifier import ClassificationRules
from xml_metrics.tree.query import ALL_ELEMENTS

__all__ = ["MergeStrategy", "ParserConfig"]


class MergeStrategy(StrEnum):
    """How selected elements are turned into metrics."""

    ARRAY = auto()
    OBJECT = auto()
    OBJECT_MERGED = auto()


def _freeze_tags(tags: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(tags or {}))


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for an XMLParser.

    Attributes:
        metric_name: Name given to every metric unless ``measurement`` is set.
        query: XPath selecting the root elements.  Defaults to ``"//"``
            (every element); an empty string is treated the same way.
        measurement: Optional XPath whose value becomes the metric name for
            the call.  ``"<path>/@<attr>"`` reads an attribute, anything else
            reads element text.  Empty disables dynamic naming.
        tag_keys: Element/attribute names whose values become tags.
        array: Flatten each root element's whole subtree into its own metric.
        tag_node: Add an ``xml_node_name`` tag holding the root element's name.
        merge_nodes: In object mode, merge all root elements into one metric.
        default_tags: Tags added to every metric, overriding computed tags.
    """

    metric_name: str = "xml"
    query: str = ALL_ELEMENTS
    measurement: str = ""
    tag_keys: frozenset[str] = field(default_factory=frozenset)
    array: bool = False
    tag_node: bool = False
    merge_nodes: bool = False
    default_tags: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if isinstance(self.tag_keys, str):
            msg = f"tag_keys must be a collection of names, got the string {self.tag_keys!r}"
            raise ValueError(msg)
        # frozen dataclass: normalise through object.__setattr__
        if not self.query:
            object.__setattr__(self, "query", ALL_ELEMENTS)
        object.__setattr__(self, "tag_keys", frozenset(self.tag_keys))
        object.__setattr__(self, "default_tags", _freeze_tags(self.default_tags))

        if not isinstance(self.metric_name, str):
            msg = f"metric_name must be a string, got {type(self.metric_name).__name__}"
            raise ValueError(msg)
        for key in self.tag_keys:
            if not isinstance(key, str):
                msg = f"tag_keys must contain strings, got {key!r}"
                raise ValueError(msg)
        for key, value in self.default_tags.items():
            if not isinstance(key, str) or not isinstance(value, str):
                msg = f"default_tags must map strings to strings, got {key!r}: {value!r}"
                raise ValueError(msg)

    @property
    def strategy(self) -> MergeStrategy:
        if self.array:
            return MergeStrategy.ARRAY
        if self.merge_nodes:
            return MergeStrategy.OBJECT_MERGED
        return MergeStrategy.OBJECT

    @property
    def rules(self) -> ClassificationRules:
        return ClassificationRules(tag_keys=self.tag_keys, tag_node=self.tag_node)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> ParserConfig:
        """Build a config from pipeline option names.

        Recognised keys: ``metric_name``, ``xml_query``, ``xml_measurement``,
        ``tag_keys``, ``xml_array``, ``xml_tag_node``, ``xml_merge_nodes``,
        ``default_tags``.  Unknown keys are ignored so a whole plugin section
        can be passed through unchanged.
        """
        tag_keys: Iterable[str] = options.get("tag_keys") or ()
        return cls(
            metric_name=options.get("metric_name", "xml"),
            query=options.get("xml_query", "") or ALL_ELEMENTS,
            measurement=options.get("xml_measurement", "") or "",
            tag_keys=frozenset(tag_keys),
            array=bool(options.get("xml_array", False)),
            tag_node=bool(options.get("xml_tag_node", False)),
            merge_nodes=bool(options.get("xml_merge_nodes", False)),
            default_tags=options.get("default_tags") or {},
        )
