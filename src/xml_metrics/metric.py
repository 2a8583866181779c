"""Metric dataclass: the record produced for each unit of XML.

A Metric is immutable once built: its tag and field maps are read-only
proxies over private copies, so neither the parser's running accumulators nor
the caller can change an emitted metric.  ``Metric.create`` is the validating
constructor used by the parser.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from xml_metrics.errors import RecordConstructionError
from xml_metrics.fields.coercion import FieldValue

__all__ = ["Metric"]


@dataclass(frozen=True, slots=True)
class Metric:
    """One metric.

    Attributes:
        name:   Measurement name; never empty.
        tags:   String-valued tags.
        fields: Typed field values (int, float, bool or str).
        time:   Timestamp shared by every metric of one parse call.
    """

    name: str
    tags: Mapping[str, str] = field(hash=False)
    fields: Mapping[str, FieldValue] = field(hash=False)
    time: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def create(
        cls,
        name: str,
        tags: Mapping[str, str],
        fields: Mapping[str, FieldValue],
        time: datetime,
    ) -> Metric:
        """Validate the parts and build a Metric from copies of the maps.

        Raises:
            RecordConstructionError: Empty or non-string name, non-string tag
                keys or values, or field values of an unsupported type.
        """
        if not isinstance(name, str) or name == "":
            msg = f"metric name must be a non-empty string, got {name!r}"
            raise RecordConstructionError(msg)

        for key, value in tags.items():
            if not isinstance(key, str) or not isinstance(value, str):
                msg = f"metric {name!r}: tag {key!r} must map a string to a string"
                raise RecordConstructionError(msg)

        for key, value in fields.items():
            if not isinstance(key, str):
                msg = f"metric {name!r}: field key {key!r} must be a string"
                raise RecordConstructionError(msg)
            if not isinstance(value, (int, float, bool, str)):
                msg = (
                    f"metric {name!r}: field {key!r} has unsupported type "
                    f"{type(value).__name__}"
                )
                raise RecordConstructionError(msg)

        return cls(name=name, tags=tags, fields=fields, time=time)
