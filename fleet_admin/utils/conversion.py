"""
Value conversion helpers shared by the tables and the spreadsheet bridge.
"""

import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

# Leading numeric prefix, the way a lenient float parser reads "12.5kg" as 12.5
_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def parse_float(text: Any) -> float:
    """
    Parse the leading number of ``text``.

    Returns 0.0 when nothing numeric can be read or the result is NaN.
    """
    if text is None:
        return 0.0
    match = _FLOAT_PREFIX.match(str(text))
    if not match:
        return 0.0
    value = float(match.group(1).replace("Infinity", "inf"))
    if math.isnan(value):
        return 0.0
    return value


def coerce_number(value: Any) -> float:
    """Coerce form input to a float; non-numeric input becomes 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    return parse_float(value)


def as_number(text: str) -> Optional[float]:
    """Strict numeric reading used for sorting; ``None`` if not a finite number."""
    stripped = text.strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def is_primitive(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool, Enum, date))


def to_text(value: Any) -> str:
    """Display text of a field value."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def cell_text(value: Any) -> str:
    """Text of a spreadsheet cell value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
