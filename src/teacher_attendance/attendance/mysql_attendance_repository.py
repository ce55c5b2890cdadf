from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone, in_clause, where_clause
from .model import AttendanceRecord, NewAttendance, SessionStatusCount
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.id, a.student_id, a.date, a.session, a.status, a.month, a.year, a.created_at, a.updated_at
    FROM attendance a
"""

_INSERT = """
    INSERT INTO attendance(student_id, date, session, status, month, year)
    VALUES(%s,%s,%s,%s,%s,%s)
"""

_UPDATABLE = {
    "student_id": "student_id",
    "date": "date",
    "session": "session",
    "status": "status",
    "month": "month",
    "year": "year",
}


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        student_id=int(r["student_id"]),
        date=r["date"],
        session=r["session"],
        status=AttendanceStatus(r["status"]),
        month=int(r["month"]),
        year=int(r["year"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _insert_params(rec: NewAttendance) -> tuple:
    return (rec.student_id, rec.date, rec.session, rec.status.value, rec.month, rec.year)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        student_id: Optional[int] = None,
        class_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        joins: list[str] = []
        clauses: list[str] = []
        params: list[object] = []

        if class_id is not None or teacher_id is not None:
            joins.append("JOIN students s ON s.id = a.student_id")
        if teacher_id is not None:
            joins.append("JOIN classes c ON c.id = s.class_id")
            clauses.append("c.teacher_id=%s")
            params.append(int(teacher_id))
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))
        if student_id is not None:
            clauses.append("a.student_id=%s")
            params.append(int(student_id))
        if month is not None:
            clauses.append("a.month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("a.year=%s")
            params.append(int(year))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                {' '.join(joins)}
                {where_clause(clauses)}
                ORDER BY a.date DESC, a.id DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_students(self, student_ids: Sequence[int], *, month: int, year: int) -> Sequence[AttendanceRecord]:
        if not student_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.student_id IN ({in_clause(student_ids)}) AND a.year=%s AND a.month=%s
                ORDER BY a.date ASC, a.id ASC
                """,
                (*[int(s) for s in student_ids], int(year), int(month)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.id=%s", (int(attendance_id),))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def create(self, record: NewAttendance) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _insert_params(record))
            return int(cur.lastrowid)

    def create_many(self, records: Sequence[NewAttendance]) -> list[int]:
        ids: list[int] = []
        # single connection: db_cursor commits once, or rolls everything back
        with db_cursor(self._conn_factory) as (_, cur):
            for rec in records:
                cur.execute(_INSERT, _insert_params(rec))
                ids.append(int(cur.lastrowid))
        return ids

    def update(self, attendance_id: int, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        assignments, params = build_update(_UPDATABLE, fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE attendance SET {assignments} WHERE id=%s", (*params, int(attendance_id)))

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def count_by_session_and_status(
        self,
        *,
        month: int,
        year: int,
        teacher_id: Optional[int] = None,
    ) -> Sequence[SessionStatusCount]:
        joins = ""
        clauses = ["a.month=%s", "a.year=%s"]
        params: list[object] = [int(month), int(year)]
        if teacher_id is not None:
            joins = "JOIN students s ON s.id = a.student_id JOIN classes c ON c.id = s.class_id"
            clauses.append("c.teacher_id=%s")
            params.append(int(teacher_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.session, a.status, COUNT(*) AS cnt
                FROM attendance a
                {joins}
                {where_clause(clauses)}
                GROUP BY a.session, a.status
                """,
                tuple(params),
            )
            return [
                SessionStatusCount(session=r["session"], status=AttendanceStatus(r["status"]), count=int(r["cnt"]))
                for r in fetchall(cur)
            ]
