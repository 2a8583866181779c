"""Field value primitives.

Re-exports the public API for the fields module:
- FieldValue: union of the four typed values a metric field can hold
- coerce: converts a raw string to int, float, bool or str (in that order)
- merge_into: last-write-wins merge used for both tag and field maps
"""

from xml_metrics.fields.coercion import FieldValue, coerce
from xml_metrics.fields.merge import merge_into

__all__ = ["FieldValue", "coerce", "merge_into"]
