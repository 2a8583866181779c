"""XMLParser: orchestrator that wires document parsing, queries and classification.

This is the central wiring layer between the lxml document and the emitted
metrics.

Architecture:
- parse() reads the bytes into a document, selects the root elements with the
  configured query, resolves the dynamic metric name (when a measurement query
  is configured) and hands the roots to one of two strategies.
- The resolved name is a local value passed down to the strategy; it is never
  written back to the configuration, so one parser can serve concurrent calls.
- parse_as_array() emits one metric per root element, flattening the element's
  subtree into it.  Descendants are merged first, in document order, and the
  root element itself last, so the root's own values win.
- parse_as_object() only looks at each root element's own text and attributes.
  Without merge_nodes it emits one metric per root; with merge_nodes it folds
  every root into a single metric (later roots overwrite earlier ones,
  including the ``xml_node_name`` tag).
- Default tags are merged last, once per emitted metric, so they override any
  computed tag of the same name.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from lxml import etree

from xml_metrics.config import MergeStrategy, ParserConfig
from xml_metrics.errors import NoMetricError
from xml_metrics.fields.coercion import FieldValue
from xml_metrics.fields.merge import merge_into
from xml_metrics.metric import Metric
from xml_metrics.tree import nodes
from xml_metrics.tree.classifier import classify
from xml_metrics.tree.document import parse_document
from xml_metrics.tree.query import QueryResolver

__all__ = ["NODE_NAME_TAG", "XMLParser"]

logger = logging.getLogger(__name__)

NODE_NAME_TAG = "xml_node_name"


class XMLParser:
    """Converts XML documents into metrics according to a ParserConfig.

    Example::

        from xml_metrics import ParserConfig, XMLParser

        parser = XMLParser(ParserConfig(metric_name="cpu", query="//core", tag_keys={"id"}))
        metrics = parser.parse(b'<cpu><core id="0" load="0.5"/><core id="1" load="0.7"/></cpu>')
        # two metrics: tags {"id": "0"} / {"id": "1"}, fields {"load": 0.5} / {"load": 0.7}
    """

    def __init__(self, config: ParserConfig | None = None, max_cache_size: int = 128) -> None:
        """Initialise the parser.

        Args:
            config: Conversion settings.  Defaults to ``ParserConfig()``.
            max_cache_size: Number of compiled XPath queries kept in the
                per-instance LRU cache.  Defaults to 128.
        """
        self._config: ParserConfig = config if config is not None else ParserConfig()
        self._resolver = QueryResolver(max_cache_size=max_cache_size)

    @property
    def config(self) -> ParserConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, data: bytes, timestamp: datetime | None = None) -> list[Metric]:
        """Convert one XML document into metrics.

        Args:
            data: Bytes of a single well-formed XML document.
            timestamp: Time stamped on every metric.  Defaults to now (UTC).

        Returns:
            Metrics in document order of their root elements.  Empty when the
            selection query matches nothing.

        Raises:
            InputError: Malformed document.
            QueryCompileError: Invalid selection or measurement query.
            QueryResolutionError: Measurement query matched nothing or a blank
                value.
            RecordConstructionError: A metric could not be built (for example
                an empty metric name).
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        config = self._config
        document = parse_document(data)
        roots = self._resolver.select_roots(document, config.query)

        name = config.metric_name
        if config.measurement:
            name = self._resolver.resolve_name(document, config.measurement)

        if not roots:
            return []

        if config.strategy is MergeStrategy.ARRAY:
            metrics = self.parse_as_array(roots, name, timestamp)
        else:
            metrics = self.parse_as_object(roots, name, timestamp)

        logger.debug(
            "emitted %d metric(s) named %r from %d root element(s) (%s)",
            len(metrics),
            name,
            len(roots),
            config.strategy,
        )
        return metrics

    def parse_line(self, line: str, timestamp: datetime | None = None) -> Metric:
        """Return the first metric parsed from ``line``.

        Raises:
            NoMetricError: The document produced no metrics.
        """
        metrics = self.parse(line.encode("utf-8"), timestamp=timestamp)
        if not metrics:
            raise NoMetricError
        return metrics[0]

    def set_default_tags(self, tags: Mapping[str, str]) -> None:
        """Replace the tags added to every metric this parser emits."""
        self._config = dataclasses.replace(self._config, default_tags=tags)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def parse_as_array(
        self, roots: Sequence[etree._Element], name: str, timestamp: datetime
    ) -> list[Metric]:
        """One metric per root element, built from its whole subtree."""
        rules = self._config.rules
        results: list[Metric] = []

        for root in roots:
            xml_tags: dict[str, str] = {}
            xml_fields: dict[str, FieldValue] = {}

            for element in (*nodes.descendants(root), root):
                tags, fields = classify(element, rules)
                merge_into(xml_tags, tags)
                merge_into(xml_fields, fields)

            if rules.tag_node:
                xml_tags[NODE_NAME_TAG] = nodes.tag_name(root)

            merge_into(xml_tags, self._config.default_tags)
            results.append(Metric.create(name, xml_tags, xml_fields, timestamp))

        return results

    def parse_as_object(
        self, roots: Sequence[etree._Element], name: str, timestamp: datetime
    ) -> list[Metric]:
        """Metrics from each root element's own text and attributes.

        Emits one metric per root, or a single merged metric when
        ``merge_nodes`` is set.
        """
        config = self._config
        rules = config.rules
        results: list[Metric] = []
        xml_tags: dict[str, str] = {}
        xml_fields: dict[str, FieldValue] = {}

        for root in roots:
            tags, fields = classify(root, rules)

            if rules.tag_node:
                tags[NODE_NAME_TAG] = nodes.tag_name(root)

            if config.merge_nodes:
                merge_into(xml_tags, tags)
                merge_into(xml_fields, fields)
            else:
                merge_into(tags, config.default_tags)
                results.append(Metric.create(name, tags, fields, timestamp))

        if config.merge_nodes:
            merge_into(xml_tags, config.default_tags)
            results.append(Metric.create(name, xml_tags, xml_fields, timestamp))

        return results
