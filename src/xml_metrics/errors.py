"""Exception hierarchy raised by xml-metrics.

Every failure in a parse call aborts the call and surfaces as a subclass of
``XMLMetricsError``; no partial metric lists are ever returned.  Errors from
lxml are wrapped with ``raise ... from exc`` so the original cause stays
reachable through ``__cause__``.
"""

from __future__ import annotations

__all__ = [
    "InputError",
    "NoMetricError",
    "QueryCompileError",
    "QueryResolutionError",
    "RecordConstructionError",
    "XMLMetricsError",
]


class XMLMetricsError(Exception):
    """Base class for every error raised while converting XML to metrics."""


class InputError(XMLMetricsError):
    """The input bytes are not a well-formed XML document."""


class QueryCompileError(XMLMetricsError):
    """A selection or measurement query is not valid XPath."""

    def __init__(self, query: str, reason: str) -> None:
        self.query = query
        super().__init__(f"Query {query!r} is invalid: {reason}")


class QueryResolutionError(XMLMetricsError):
    """The measurement query matched nothing or resolved to an empty value."""

    def __init__(self, query: str, message: str) -> None:
        self.query = query
        super().__init__(message)


class RecordConstructionError(XMLMetricsError):
    """The assembled name, tags or fields cannot form a valid Metric."""


class NoMetricError(XMLMetricsError):
    """``parse_line`` was given input that produced zero metrics."""

    def __init__(self) -> None:
        super().__init__("no metric in line")
