"""Tolerant numeric coercion for exchange payload fields."""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Union

from pydantic import StrictFloat, StrictInt, StrictStr

# A payload value that is either a quoted decimal or a bare JSON number.
NumericField = Union[StrictStr, StrictInt, StrictFloat]

# Plain ASCII decimal or exponent literal, no whitespace or digit separators.
_FLOAT_LITERAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def coerce_float(value: Union[str, int, float]) -> float:
    """Convert a textual or numeric payload value to a finite float.

    Numbers pass through unchanged. Text must be a plain ASCII float literal.
    Anything unparseable or non-finite becomes 0.0.

    Examples:
    - "0.01086000" -> 0.01086
    - 2283 -> 2283.0
    - "abc" -> 0.0
    """
    if isinstance(value, str):
        if not _FLOAT_LITERAL.fullmatch(value):
            return 0.0
        try:
            result = float(Decimal(value))
        except (InvalidOperation, ValueError, OverflowError):
            return 0.0
    else:
        try:
            result = float(value)
        except OverflowError:
            return 0.0

    if not math.isfinite(result):
        return 0.0
    return result
