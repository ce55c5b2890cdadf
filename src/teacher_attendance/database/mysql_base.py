from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_float(value: Any) -> float:
    """DECIMAL columns come back as ``Decimal``; JSON wants floats."""
    if value is None:
        return 0.0
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def build_update(columns: Mapping[str, str], fields: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """Translate ``{field: value}`` into ``col=%s, ...`` for whitelisted columns.

    ``columns`` maps the domain field name to its SQL column.
    """

    assignments: list[str] = []
    params: list[Any] = []
    for field, value in fields.items():
        column = columns.get(field)
        if not column:
            raise KeyError(f"Column not updatable: {field}")
        assignments.append(f"{column}=%s")
        params.append(value.value if isinstance(value, Enum) else value)
    return ", ".join(assignments), params


def in_clause(values: Sequence[Any]) -> str:
    return ", ".join(["%s"] * len(values))


def where_clause(clauses: Iterable[str]) -> str:
    clauses = list(clauses)
    return ("WHERE " + " AND ".join(clauses)) if clauses else ""
