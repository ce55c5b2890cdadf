from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, to_float, where_clause
from .model import MonthlyEarning, Payment
from .repository import PaymentRepository

_SELECT = """
    SELECT p.id, p.student_id, p.class_id, p.amount, p.type, p.date, p.month, p.year, p.created_at, p.updated_at
    FROM payments p
"""


def _row_to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["id"]),
        student_id=int(r["student_id"]),
        class_id=int(r["class_id"]),
        amount=to_float(r["amount"]),
        type=PaymentType(r["type"]),
        date=r["date"],
        month=int(r["month"]),
        year=int(r["year"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
    ) -> Sequence[Payment]:
        join = ""
        clauses: list[str] = []
        params: list[object] = []

        if student_id is not None:
            clauses.append("p.student_id=%s")
            params.append(int(student_id))
        if class_id is not None:
            clauses.append("p.class_id=%s")
            params.append(int(class_id))
        if teacher_id is not None:
            join = "JOIN classes c ON c.id = p.class_id"
            clauses.append("c.teacher_id=%s")
            params.append(int(teacher_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                {join}
                {where_clause(clauses)}
                ORDER BY p.date DESC, p.id DESC
                """,
                tuple(params),
            )
            return [_row_to_payment(r) for r in fetchall(cur)]

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.id=%s", (int(payment_id),))
            row = fetchone(cur)
            return _row_to_payment(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(student_id, class_id, amount, type, date, month, year)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (student_id, class_id, amount, type.value, date, month, year),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE id=%s", (int(payment_id),))
            return cur.rowcount > 0

    def monthly_totals(
        self,
        class_ids: Sequence[int],
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Sequence[MonthlyEarning]:
        if not class_ids:
            return []

        clauses = [f"class_id IN ({in_clause(class_ids)})"]
        params: list[object] = [int(c) for c in class_ids]
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT class_id, year, month, SUM(amount) AS total_amount, COUNT(*) AS payment_count
                FROM payments
                {where_clause(clauses)}
                GROUP BY class_id, year, month
                ORDER BY year DESC, month DESC
                """,
                tuple(params),
            )
            return [
                MonthlyEarning(
                    class_id=int(r["class_id"]),
                    year=int(r["year"]),
                    month=int(r["month"]),
                    total_amount=to_float(r["total_amount"]),
                    payment_count=int(r["payment_count"]),
                )
                for r in fetchall(cur)
            ]
