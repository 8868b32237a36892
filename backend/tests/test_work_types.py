"""Tests for work type names and codes."""

import pytest

from workorders.services.work_types import (
    WORK_TYPE_CODES,
    WORK_TYPES,
    InvalidWorkTypeError,
    derive_work_type_code,
    is_work_type,
    to_proper_case,
)


@pytest.mark.parametrize(
    ("work_type", "code"),
    [
        ("Electrical", "E"),
        ("Mechanical", "M"),
        ("Schedule Check", "SC"),
        ("Electrical Repair", "ER"),
        ("Customer Request", "CR"),
    ],
)
def test_known_work_types(work_type: str, code: str) -> None:
    assert derive_work_type_code(work_type) == code


def test_lookup_ignores_case_and_extra_whitespace() -> None:
    assert derive_work_type_code("  electrical   repair ") == "ER"


def test_unknown_work_type_is_abbreviated() -> None:
    assert derive_work_type_code("Air Conditioning") == "AC"
    assert derive_work_type_code("tyre change / wheel alignment") == "TCWA"
    assert derive_work_type_code("Welding") == "W"


@pytest.mark.parametrize("work_type", ["", "   ", "---", "/ &"])
def test_work_type_without_letters_is_rejected(work_type: str) -> None:
    with pytest.raises(InvalidWorkTypeError):
        derive_work_type_code(work_type)


def test_every_work_type_has_a_code() -> None:
    assert set(WORK_TYPES) == set(WORK_TYPE_CODES)
    assert len(set(WORK_TYPE_CODES.values())) == len(WORK_TYPE_CODES)


def test_is_work_type() -> None:
    assert is_work_type("Painting")
    assert not is_work_type("painting")
    assert not is_work_type("Welding")


def test_to_proper_case() -> None:
    assert to_proper_case("OIL LEAK near pump") == "Oil Leak Near Pump"
    assert to_proper_case("") == ""


def test_abbreviation_longer_than_code_column_is_rejected() -> None:
    assert derive_work_type_code(" ".join("abcdefghijklmnopqrst")) == "ABCDEFGHIJKLMNOPQRST"

    with pytest.raises(InvalidWorkTypeError, match="longer than 20"):
        derive_work_type_code(" ".join("abcdefghijklmnopqrstuvwxy"))
