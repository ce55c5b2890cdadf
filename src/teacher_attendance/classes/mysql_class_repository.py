from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_update, db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository

_UPDATABLE = {"name": "name", "teacher_id": "teacher_id"}


def _row_to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(r["id"]),
        name=r["name"],
        teacher_id=int(r["teacher_id"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, teacher_id: Optional[int] = None) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            if teacher_id is None:
                cur.execute(
                    "SELECT id, name, teacher_id, created_at, updated_at FROM classes "
                    "ORDER BY created_at DESC, id DESC"
                )
            else:
                cur.execute(
                    "SELECT id, name, teacher_id, created_at, updated_at FROM classes "
                    "WHERE teacher_id=%s ORDER BY created_at DESC, id DESC",
                    (int(teacher_id),),
                )
            return [_row_to_class(r) for r in fetchall(cur)]

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, teacher_id, created_at, updated_at FROM classes WHERE id=%s",
                (int(class_id),),
            )
            row = fetchone(cur)
            return _row_to_class(row) if row else None

    def create(self, *, name: str, teacher_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(name, teacher_id) VALUES(%s,%s)", (name, int(teacher_id)))
            return int(cur.lastrowid)

    def update(self, class_id: int, fields: Mapping[str, Any]) -> None:
        if not fields:
            return
        assignments, params = build_update(_UPDATABLE, fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE classes SET {assignments} WHERE id=%s", (*params, int(class_id)))

    def delete_by_id(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE id=%s", (int(class_id),))
            return cur.rowcount > 0
