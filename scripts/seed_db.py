from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import load_settings

from teacher_attendance.database.bootstrap import apply_schema, ensure_demo_admin
from teacher_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn)
    ensure_demo_admin(
        conn,
        email=settings.DEMO_ADMIN_EMAIL,
        password=settings.DEMO_ADMIN_PASSWORD,
    )
    print(f"OK: Seeded demo admin {settings.DEMO_ADMIN_EMAIL} -> {conn.config.describe()}")


if __name__ == "__main__":
    main()
