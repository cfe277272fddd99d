"""Parse raw patient fields into typed values.

Every parser returns the parsed value, or None when the field is invalid.
"""

import math
import re
from typing import NamedTuple, Optional

BP_RE = re.compile(r"(\d+)/(\d+)", re.ASCII)
NUMBER_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)

BP_INVALID_TOKENS = {"INVALID", "N/A", "NULL", "UNDEFINED", "ERROR"}
TEMP_INVALID_TOKENS = {"INVALID", "ERROR", "TEMP_ERROR", "N/A", "NULL", "UNDEFINED"}
AGE_INVALID_TOKENS = ("UNKNOWN", "INVALID", "ERROR", "NA", "NULL", "UNDEFINED")


class BloodPressure(NamedTuple):
    systolic: int
    diastolic: int


def parse_bp(bp_str) -> Optional[BloodPressure]:
    if not isinstance(bp_str, str) or not bp_str:
        return None
    if bp_str.upper() in BP_INVALID_TOKENS:
        return None
    match = BP_RE.fullmatch(bp_str)
    if not match:
        return None
    try:
        return BloodPressure(int(match.group(1)), int(match.group(2)))
    except ValueError:
        # past the int string conversion limit
        return None


def read_number(raw) -> Optional[float]:
    """Read a plain ASCII decimal number; float() alone also takes "9_6" and non-ASCII digits."""
    # bool is an int subclass but never a reading
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str) and not NUMBER_RE.fullmatch(raw):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError, OverflowError):
        return None


def _as_number(raw) -> Optional[float]:
    value = read_number(raw)
    if value is None:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_temp(temp) -> Optional[float]:
    if isinstance(temp, str):
        if not temp or temp.upper() in TEMP_INVALID_TOKENS:
            return None
    return _as_number(temp)


def parse_age(age) -> Optional[int]:
    if isinstance(age, str):
        upper = age.upper()
        if any(token in upper for token in AGE_INVALID_TOKENS):
            return None
        age = age.strip()
        if not age.isascii() or not age.isdigit():
            return None
    value = _as_number(age)
    if value is None:
        return None
    years = int(value)
    if years <= 0:
        return None
    return years
