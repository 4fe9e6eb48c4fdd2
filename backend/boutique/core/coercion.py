"""Field Coercion — turns loosely-typed request values into storable ones.

Invariants:
    - Every function here is PURE: no IO, no logging, no exceptions for bad input
    - Numeric coercion returns Coerced(value, error) — exactly one of the two is set
    - Coerced ints fit BSON's signed 64-bit range; coerced floats are finite
    - Flags are True only for a literal JSON true; everything else is False
    - An identifier is accepted only as 24 hexadecimal characters

Design Decisions:
    - Explicit result over raising: the shell collects every field error of a
      payload and rejects the request once, with all details
    - bool is rejected as a number even though it subclasses int in Python
    - ObjectId.is_valid() is not used for identifiers: it also accepts any
      12-character string, which would let "productnames" through as an id
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from bson import ObjectId


OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
# BSON stores integers as signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Coerced:
    """Outcome of coercing one field."""
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def coerce_float(raw: Any, *, minimum: float | None = None) -> Coerced:
    """Parse raw into a finite float, optionally bounded below."""
    if raw is None:
        return Coerced(error="is required")
    if isinstance(raw, bool):
        return Coerced(error="must be a number")
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return Coerced(error="must be a finite number")
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return Coerced(error=f"must be a number, got {raw!r}")
    else:
        return Coerced(error="must be a number")

    if not math.isfinite(value):
        return Coerced(error="must be a finite number")
    if minimum is not None and value < minimum:
        return Coerced(error=f"must be >= {minimum:g}")
    return Coerced(value=value)


def coerce_int(raw: Any, *, minimum: int | None = None) -> Coerced:
    """Parse raw into an int. Integral floats ("3.0", 3.0) are accepted."""
    if raw is None:
        return Coerced(error="is required")
    if isinstance(raw, bool):
        return Coerced(error="must be a whole number")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, (float, str)):
        as_float = coerce_float(raw)
        if not as_float.ok:
            return Coerced(error="must be a whole number")
        if not as_float.value.is_integer():
            return Coerced(error=f"must be a whole number, got {raw!r}")
        value = int(as_float.value)
    else:
        return Coerced(error="must be a whole number")

    if not INT64_MIN <= value <= INT64_MAX:
        return Coerced(error="is out of range")
    if minimum is not None and value < minimum:
        return Coerced(error=f"must be >= {minimum}")
    return Coerced(value=value)


def normalize_flag(raw: Any) -> bool:
    """Strict boolean: only a literal True survives."""
    return raw is True


def parse_object_id(raw: Any) -> ObjectId | None:
    """Return the ObjectId for a well-formed identifier, else None."""
    if not isinstance(raw, str) or not OBJECT_ID_PATTERN.match(raw):
        return None
    return ObjectId(raw)
