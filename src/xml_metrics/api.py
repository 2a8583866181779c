"""Public API functions for xml-metrics.

This module provides the two user-facing functions: parse and parse_line.
Each call creates a fresh XMLParser so nothing is shared between calls.  Use
an ``XMLParser`` directly to reuse compiled queries across many documents.
"""

from __future__ import annotations

from datetime import datetime

from xml_metrics.config import ParserConfig
from xml_metrics.metric import Metric
from xml_metrics.parser import XMLParser

__all__ = ["parse", "parse_line"]


def parse(
    data: bytes,
    config: ParserConfig | None = None,
    timestamp: datetime | None = None,
) -> list[Metric]:
    """Convert an XML document into a list of metrics.

    Args:
        data:      Bytes of one well-formed XML document.
        config:    Conversion settings. Defaults to ``ParserConfig()`` when None.
        timestamp: Time for every metric. Defaults to now (UTC).

    Returns:
        The metrics in document order; empty if the query selects nothing.
    """
    return XMLParser(config=config).parse(data, timestamp=timestamp)


def parse_line(
    line: str,
    config: ParserConfig | None = None,
    timestamp: datetime | None = None,
) -> Metric:
    """Return the first metric of ``parse(line)``.

    Raises:
        NoMetricError: The document produced no metrics.
    """
    return XMLParser(config=config).parse_line(line, timestamp=timestamp)
