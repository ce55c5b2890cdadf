from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import TeacherStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone, in_clause
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = """
    id, name, email, phone, teacher_code, status, profile_picture, company_id, created_at, updated_at
"""

_UPDATABLE = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "teacher_code": "teacher_code",
    "status": "status",
    "profile_picture": "profile_picture",
    "company_id": "company_id",
}


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["id"]),
        name=r["name"],
        email=r["email"],
        teacher_code=r["teacher_code"],
        status=TeacherStatus(r["status"]),
        phone=r.get("phone"),
        profile_picture=r.get("profile_picture"),
        company_id=r.get("company_id"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, company_id: Optional[str] = None) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            if company_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY created_at DESC, id DESC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM teachers WHERE company_id=%s ORDER BY created_at DESC, id DESC",
                    (company_id,),
                )
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def list_by_ids(self, teacher_ids: Sequence[int]) -> Sequence[Teacher]:
        if not teacher_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teachers WHERE id IN ({in_clause(teacher_ids)}) ORDER BY name",
                tuple(int(t) for t in teacher_ids),
            )
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def _get_one(self, where: str, value: Any) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_teacher(row) if row else None

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._get_one("id", int(teacher_id))

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return self._get_one("email", email)

    def get_by_code(self, teacher_code: str) -> Optional[Teacher]:
        return self._get_one("teacher_code", teacher_code)

    def create(
        self,
        *,
        name: str,
        email: str,
        teacher_code: str,
        status: TeacherStatus,
        phone: Optional[str],
        profile_picture: Optional[str],
        company_id: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(name, email, phone, teacher_code, status, profile_picture, company_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, email, phone, teacher_code, status.value, profile_picture, company_id),
            )
            return int(cur.lastrowid)

    def update(self, teacher_id: int, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        assignments, params = build_update(_UPDATABLE, fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE teachers SET {assignments} WHERE id=%s", (*params, int(teacher_id)))

    def delete_by_id(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE id=%s", (int(teacher_id),))
            return cur.rowcount > 0
