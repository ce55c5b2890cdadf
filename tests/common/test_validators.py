from __future__ import annotations

from datetime import date

import pytest

from teacher_attendance.common.datetime_utils import parse_date_field
from teacher_attendance.common.validators import (
    optional_int,
    require_amount,
    require_enum,
    require_int,
    require_month,
    require_non_empty,
)
from teacher_attendance.core.enums import PaymentType
from teacher_attendance.core.exceptions import ValidationError


def test_require_non_empty_strips_and_rejects_blank():
    assert require_non_empty("  Ana  ", "name") == "Ana"
    with pytest.raises(ValidationError, match="name is required"):
        require_non_empty("   ", "name")


def test_require_int_rejects_booleans():
    assert require_int("42", "id") == 42
    with pytest.raises(ValidationError):
        require_int(True, "id")


def test_optional_int_treats_blank_as_missing():
    assert optional_int("", "classId") is None
    assert optional_int(None, "classId") is None
    assert optional_int("7", "classId") == 7


@pytest.mark.parametrize("value", [0, 13, "x"])
def test_require_month_bounds(value):
    with pytest.raises(ValidationError):
        require_month(value)


def test_require_amount_rejects_negative():
    assert require_amount("12.5") == 12.5
    with pytest.raises(ValidationError, match="must not be negative"):
        require_amount(-1)


def test_require_enum_lists_allowed_values():
    assert require_enum("half", PaymentType, "type") is PaymentType.HALF
    with pytest.raises(ValidationError, match="full, half, free"):
        require_enum("monthly", PaymentType, "type")


def test_parse_date_field_accepts_plain_and_iso_datetime():
    assert parse_date_field("2026-02-03") == date(2026, 2, 3)
    assert parse_date_field("2026-02-03T17:45:00.000Z") == date(2026, 2, 3)
    with pytest.raises(ValidationError, match="date is required"):
        parse_date_field(None)
    with pytest.raises(ValidationError, match="ISO date"):
        parse_date_field("03/02/2026")
