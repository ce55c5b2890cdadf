from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentType
from .model import MonthlyEarning, Payment


class PaymentRepository(Protocol):
    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Payment]:
        """Newest payment date first."""
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        class_id: int,
        amount: float,
        type: PaymentType,
        date: date,
        month: int,
        year: int,
    ) -> int:
        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError

    def monthly_totals(
        self,
        class_ids: Sequence[int],
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Sequence[MonthlyEarning]:
        """Totals grouped by (class, year, month), newest month first."""
        raise NotImplementedError
