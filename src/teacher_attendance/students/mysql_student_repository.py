from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone, where_clause
from .model import Student
from .repository import StudentRepository

_UPDATABLE = {
    "name": "name",
    "email": "email",
    "student_code": "student_code",
    "class_id": "class_id",
}


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        name=r["name"],
        student_code=r["student_code"],
        email=r.get("email"),
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, teacher_id: Optional[int] = None, class_id: Optional[int] = None) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        join = ""

        if teacher_id is not None:
            join = "JOIN classes c ON c.id = s.class_id"
            clauses.append("c.teacher_id=%s")
            params.append(int(teacher_id))
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.name, s.email, s.student_code, s.class_id, s.created_at, s.updated_at
                FROM students s
                {join}
                {where_clause(clauses)}
                ORDER BY s.created_at DESC, s.id DESC
                """,
                tuple(params),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def _get_one(self, column: str, value: Any) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, name, email, student_code, class_id, created_at, updated_at
                FROM students
                WHERE {column}=%s
                """,
                (value,),
            )
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._get_one("id", int(student_id))

    def get_by_code(self, student_code: str) -> Optional[Student]:
        return self._get_one("student_code", student_code)

    def create(self, *, name: str, student_code: str, email: Optional[str], class_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO students(name, email, student_code, class_id) VALUES(%s,%s,%s,%s)",
                (name, email, student_code, class_id),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        assignments, params = build_update(_UPDATABLE, fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {assignments} WHERE id=%s", (*params, int(student_id)))

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
