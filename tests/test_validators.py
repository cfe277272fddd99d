import pytest

from ksense_assessment.validators import BloodPressure, parse_age, parse_bp, parse_temp


def test_parse_bp_valid() -> None:
    assert parse_bp("120/80") == BloodPressure(120, 80)
    assert parse_bp("145/95").systolic == 145


@pytest.mark.parametrize(
    "raw",
    ["150/", "/90", "INVALID", "invalid", "N/A", "null", "Error", "", None, 12080,
     "120/80 ", " 120/80", "120-80", "120/80/70", "abc/80", "120 / 80", "1２0/80"],
)
def test_parse_bp_invalid(raw) -> None:
    assert parse_bp(raw) is None


def test_parse_temp_valid() -> None:
    assert parse_temp("99.9") == 99.9
    assert parse_temp(101) == 101.0
    assert parse_temp(" 98.6 ") == 98.6


@pytest.mark.parametrize(
    "raw",
    ["", None, "TEMP_ERROR", "temp_error", "INVALID", "ERROR", "N/A", "NULL",
     "undefined", "hot", "nan", "inf", True, [99.9],
     "99_6", "１０１", "99.9abc", "1e999", 10 ** 400],
)
def test_parse_temp_invalid(raw) -> None:
    assert parse_temp(raw) is None


def test_parse_age_valid() -> None:
    assert parse_age("70") == 70
    assert parse_age(" 45 ") == 45
    assert parse_age(39) == 39
    assert parse_age(52.8) == 52


@pytest.mark.parametrize(
    "raw",
    ["unknown", "UNKNOWN", "N/A", "na", "null", "Undefined", "error", "invalid",
     "fifty-three", "", "   ", "-5", "4.5", "0", 0, -3, None, False, "٤٥"],
)
def test_parse_age_invalid(raw) -> None:
    assert parse_age(raw) is None


def test_parse_bp_oversized_digits_is_invalid(int_digit_limit) -> None:
    assert parse_bp("1" * 5000 + "/80") is None
    assert parse_bp("120/" + "9" * 5000) is None
