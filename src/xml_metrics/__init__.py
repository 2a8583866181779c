"""xml-metrics - convert XML documents into tagged, typed metrics."""

from __future__ import annotations

from xml_metrics.api import parse, parse_line
from xml_metrics.config import MergeStrategy, ParserConfig
from xml_metrics.errors import (
    InputError,
    NoMetricError,
    QueryCompileError,
    QueryResolutionError,
    RecordConstructionError,
    XMLMetricsError,
)
from xml_metrics.metric import Metric
from xml_metrics.parser import XMLParser

__version__: str = "0.1.0"
__all__: list[str] = [
    "InputError",
    "MergeStrategy",
    "Metric",
    "NoMetricError",
    "ParserConfig",
    "QueryCompileError",
    "QueryResolutionError",
    "RecordConstructionError",
    "XMLMetricsError",
    "XMLParser",
    "parse",
    "parse_line",
]
