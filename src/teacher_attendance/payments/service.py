from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_date_field
from ..common.validators import require_amount, require_enum, require_int, require_month
from ..core.enums import PaymentType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Payment
from .repository import PaymentRepository


class PaymentService:
    def __init__(self, payments: PaymentRepository):
        self._payments = payments

    def list_payments(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Payment]:
        return self._payments.list(student_id=student_id, class_id=class_id, teacher_id=teacher_id)

    def get_payment(self, payment_id: int) -> Payment:
        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    def record_payment(
        self,
        *,
        student_id: Any,
        class_id: Any,
        amount: Any,
        type: Any,
        date: Any,
        month: Any = None,
        year: Any = None,
    ) -> Payment:
        for value, name in ((student_id, "studentId"), (class_id, "classId"), (amount, "amount")):
            if value is None or value == "":
                raise ValidationError(f"{name} is required")

        paid_on = parse_date_field(date, "date")
        payment_id = self._payments.create(
            student_id=require_int(student_id, "studentId"),
            class_id=require_int(class_id, "classId"),
            amount=require_amount(amount),
            type=require_enum(type, PaymentType, "type"),
            date=paid_on,
            month=require_month(month) if month is not None else paid_on.month,
            year=require_int(year, "year") if year is not None else paid_on.year,
        )
        return self.get_payment(payment_id)

    def delete_payment(self, payment_id: int) -> None:
        if not self._payments.delete_by_id(int(payment_id)):
            raise NotFoundError("Payment not found")
