"""Typed coercion of raw XML strings into metric field values.

Attempts are made in a fixed order and the first one that succeeds wins:

1. base-10 signed 64-bit integer  ->  ``int``
2. 64-bit floating point          ->  ``float``
3. boolean literal                ->  ``bool``
4. anything else                  ->  the original ``str``, unmodified

The input is never trimmed here.  ``"  5  "`` is not an integer and comes
back as the string ``"  5  "``; deciding whether text is blank is the
classifier's job.
"""

from __future__ import annotations

import math
import re
from typing import Final

__all__ = ["FieldValue", "coerce", "parse_bool", "parse_float", "parse_int"]

FieldValue = int | float | bool | str

INT64_MIN: Final = -(2**63)
INT64_MAX: Final = 2**63 - 1

_INT_RE: Final = re.compile(r"[+-]?[0-9]+")
# int64 has at most 19 significant digits
_INT64_DIGITS: Final = 19
_FLOAT_RE: Final = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity)|nan",
    re.IGNORECASE,
)
_HEX_FLOAT_RE: Final = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_NON_FINITE: Final = frozenset({"inf", "infinity"})

_BOOL_LITERALS: Final[dict[str, bool]] = {
    "true": True,
    "t": True,
    "1": True,
    "false": False,
    "f": False,
    "0": False,
}


def parse_int(raw: str) -> int | None:
    """Return ``raw`` as a signed 64-bit integer, or None if it is not one."""
    # fullmatch keeps int() from accepting whitespace and underscores
    if _INT_RE.fullmatch(raw) is None:
        return None
    # long digit strings are out of range anyway and would trip int()'s
    # conversion length limit
    if len(raw.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def parse_float(raw: str) -> float | None:
    """Return ``raw`` as a float, or None if it is not a float literal.

    Finite-looking literals that overflow (``"1e400"``) are rejected; only
    the explicit ``inf``/``infinity``/``nan`` spellings produce non-finite
    values, and ``nan`` takes no sign.  Hexadecimal literals need a binary
    exponent (``"0x1p-2"`` is 0.25, ``"0x10"`` is not a float).
    """
    if _HEX_FLOAT_RE.fullmatch(raw) is not None:
        try:
            return float.fromhex(raw)
        except OverflowError:
            return None
    if _FLOAT_RE.fullmatch(raw) is None:
        return None
    value = float(raw)
    if math.isinf(value) and raw.lstrip("+-").lower() not in _NON_FINITE:
        return None
    return value


def parse_bool(raw: str) -> bool | None:
    """Return ``raw`` as a bool, or None if it is not a boolean literal."""
    return _BOOL_LITERALS.get(raw.lower())


def coerce(raw: str) -> FieldValue:
    """Convert a raw string to the narrowest matching field value.

    Total: never raises, falling back to the unmodified input string.

    Examples::

        coerce("42")     # 42
        coerce("42.0")   # 42.0
        coerce("true")   # True
        coerce("42abc")  # "42abc"
    """
    as_int = parse_int(raw)
    if as_int is not None:
        return as_int

    as_float = parse_float(raw)
    if as_float is not None:
        return as_float

    as_bool = parse_bool(raw)
    if as_bool is not None:
        return as_bool

    return raw
