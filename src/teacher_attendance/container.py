from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AdminAuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_TOKEN_HOURS, DEFAULT_WEB_SESSION_TTL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService
from .web_sessions.mysql_web_session_repository import MySQLWebSessionRepository
from .web_sessions.repository import WebSessionRepository
from .web_sessions.service import WebSessionService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    admins_repo: AdminRepository
    teachers_repo: TeacherRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository
    web_sessions_repo: WebSessionRepository

    token_service: TokenService
    admin_service: AdminAuthService
    teacher_service: TeacherService
    class_service: ClassService
    student_service: StudentService
    attendance_service: AttendanceService
    payment_service: PaymentService
    report_service: ReportService
    web_session_service: WebSessionService


def assemble(
    *,
    admins_repo: AdminRepository,
    teachers_repo: TeacherRepository,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    web_sessions_repo: WebSessionRepository,
    token_service: TokenService,
    web_session_ttl_seconds: int = DEFAULT_WEB_SESSION_TTL_SECONDS,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of the given repositories."""
    return Container(
        conn=conn,
        admins_repo=admins_repo,
        teachers_repo=teachers_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        web_sessions_repo=web_sessions_repo,
        token_service=token_service,
        admin_service=AdminAuthService(admins_repo, token_service),
        teacher_service=TeacherService(teachers_repo),
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo),
        payment_service=PaymentService(payments_repo),
        report_service=ReportService(attendance_repo, students_repo, classes_repo, payments_repo),
        web_session_service=WebSessionService(
            web_sessions_repo,
            teachers_repo,
            token_service,
            ttl_seconds=web_session_ttl_seconds,
            clock=clock,
        ),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    token_service = TokenService(
        getattr(settings, "JWT_SECRET", None) or getattr(settings, "SECRET_KEY", ""),
        expires_hours=getattr(settings, "TOKEN_EXPIRES_HOURS", DEFAULT_TOKEN_HOURS),
    )

    return assemble(
        conn=conn,
        admins_repo=MySQLAdminRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        web_sessions_repo=MySQLWebSessionRepository(conn),
        token_service=token_service,
        web_session_ttl_seconds=getattr(settings, "WEB_SESSION_TTL_SECONDS", DEFAULT_WEB_SESSION_TTL_SECONDS),
    )
