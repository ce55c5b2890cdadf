from __future__ import annotations

from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.validators import optional_int, require_int, require_month
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..payments.repository import PaymentRepository
from ..students.repository import StudentRepository

_STATUS_KEYS = tuple(s.value for s in AttendanceStatus)


def _empty_tally() -> dict:
    tally = {key: 0 for key in _STATUS_KEYS}
    tally["total"] = 0
    return tally


def parse_period(month: Any, year: Any) -> tuple[int, int]:
    if month in (None, "") or year in (None, ""):
        raise ValidationError("month and year are required")
    return require_month(month), require_int(year, "year")


class ReportService:
    """Aggregations over attendance and payments for the dashboards."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        payments: PaymentRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._payments = payments

    def attendance_summary(self, *, month: int, year: int, teacher_id: Optional[int] = None) -> list[dict]:
        """Present/absent/late counts per session for one month."""

        by_session: dict[str, dict] = {}
        for row in self._attendance.count_by_session_and_status(month=month, year=year, teacher_id=teacher_id):
            entry = by_session.setdefault(row.session, {"session": row.session, **{k: 0 for k in _STATUS_KEYS}})
            entry[row.status.value] += row.count

        return [by_session[s] for s in sorted(by_session)]

    def student_reports(self, *, month: int, year: int, teacher_id: Optional[int] = None) -> list[dict]:
        students = self._students.list(teacher_id=teacher_id)
        records = self._attendance.list_for_students(
            [s.student_id for s in students],
            month=month,
            year=year,
        )

        tallies: dict[int, dict] = {}
        for r in records:
            tally = tallies.setdefault(r.student_id, _empty_tally())
            tally[r.status.value] += 1
            tally["total"] += 1

        return [
            {
                "id": s.student_id,
                "studentId": s.student_code,
                "name": s.name,
                "classId": s.class_id,
                **tallies.get(s.student_id, _empty_tally()),
            }
            for s in students
        ]

    def class_student_details(self, *, class_id: Any, month: int, year: int) -> dict:
        if class_id in (None, ""):
            raise ValidationError("Class ID is required")
        cls = self._classes.get_by_id(require_int(class_id, "classId"))
        if not cls:
            raise NotFoundError("Class not found")

        students = self._students.list(class_id=cls.class_id)
        records = self._attendance.list_for_students([s.student_id for s in students], month=month, year=year)

        by_student: dict[int, list[dict]] = {}
        for r in records:
            by_student.setdefault(r.student_id, []).append(
                {"date": r.date.isoformat(), "session": r.session, "status": r.status.value}
            )

        return {
            "class": cls.to_dict(),
            "students": [
                {
                    "id": s.student_id,
                    "studentId": s.student_code,
                    "name": s.name,
                    "attendance": by_student.get(s.student_id, []),
                }
                for s in students
            ],
        }

    def monthly_earnings_by_class(self, *, teacher_id: Any, year: Any = None, month: Any = None) -> list[dict]:
        if teacher_id in (None, ""):
            raise ValidationError("Teacher ID is required")

        classes = self._classes.list(teacher_id=require_int(teacher_id, "teacherId"))
        if not classes:
            return []

        month_i = optional_int(month, "month")
        if month_i is not None:
            month_i = require_month(month_i)
        totals = self._payments.monthly_totals(
            [c.class_id for c in classes],
            year=optional_int(year, "year"),
            month=month_i,
        )

        breakdown: dict[int, list[dict]] = {}
        for t in sorted(totals, key=lambda x: (x.year, x.month), reverse=True):
            breakdown.setdefault(t.class_id, []).append(
                {
                    "month": t.month,
                    "year": t.year,
                    "amount": t.total_amount,
                    "paymentCount": t.payment_count,
                }
            )

        return [
            {
                "classId": c.class_id,
                "className": c.name,
                "monthlyBreakdown": breakdown.get(c.class_id, []),
            }
            for c in classes
        ]
