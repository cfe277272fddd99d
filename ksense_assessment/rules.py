"""Risk points per vital sign.

Each scorer takes the raw field, validates it and returns a RiskComponent.
An invalid field always scores 0.
"""

from dataclasses import dataclass
from typing import Optional

from .validators import parse_age, parse_bp, parse_temp, read_number

FEVER_THRESHOLD = 99.6
HIGH_RISK_THRESHOLD = 4


@dataclass(frozen=True)
class RiskComponent:
    score: int
    invalid: bool = False


INVALID = RiskComponent(0, invalid=True)


def bp_points(systolic, diastolic):
    # first match wins when systolic and diastolic land in different bands
    if systolic >= 140 or diastolic >= 90:
        return 3  # Stage 2
    if (130 <= systolic <= 139) or (80 <= diastolic <= 89):
        return 2  # Stage 1
    if (120 <= systolic <= 129) and diastolic < 80:
        return 1  # Elevated
    return 0  # Normal


def temp_points(fahrenheit):
    if fahrenheit <= 99.5:
        return 0
    if 99.6 <= fahrenheit <= 100.9:
        return 1
    if fahrenheit >= 101.0:
        return 2
    return 0


def age_points(years):
    if years > 65:
        return 2
    if 40 <= years <= 65:
        return 1
    return 0


def score_bp(bp_str) -> RiskComponent:
    bp = parse_bp(bp_str)
    if bp is None:
        return INVALID
    return RiskComponent(bp_points(bp.systolic, bp.diastolic))


def score_temp(temp) -> RiskComponent:
    fahrenheit = parse_temp(temp)
    if fahrenheit is None:
        return INVALID
    return RiskComponent(temp_points(fahrenheit))


def score_age(age) -> RiskComponent:
    years = parse_age(age)
    if years is None:
        return INVALID
    return RiskComponent(age_points(years))


def total_score(*components: RiskComponent) -> int:
    return sum(c.score for c in components)


def fever_reading(temp) -> Optional[float]:
    """Plain numeric read of a temperature, ignoring the invalid-token rules."""
    return read_number(temp)


def is_fever(temp):
    reading = fever_reading(temp)
    return reading is not None and reading >= FEVER_THRESHOLD
