from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import PaymentType


@dataclass(frozen=True)
class Payment:
    """Domain entity: a fee payment by a student for a class."""

    payment_id: int
    student_id: int
    class_id: int
    amount: float
    type: PaymentType
    date: date
    month: int
    year: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.payment_id,
            "studentId": self.student_id,
            "classId": self.class_id,
            "amount": self.amount,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "month": self.month,
            "year": self.year,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }


@dataclass(frozen=True)
class MonthlyEarning:
    """Read-model: payment total for one class in one month."""

    class_id: int
    year: int
    month: int
    total_amount: float
    payment_count: int
