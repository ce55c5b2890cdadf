from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from teacher_attendance.admins.model import Admin
from teacher_attendance.attendance.model import AttendanceRecord, SessionStatusCount
from teacher_attendance.auth.tokens import TokenService
from teacher_attendance.classes.model import SchoolClass
from teacher_attendance.container import assemble
from teacher_attendance.core.enums import TokenType, WebSessionStatus
from teacher_attendance.payments.model import MonthlyEarning, Payment
from teacher_attendance.students.model import Student
from teacher_attendance.teachers.model import Teacher
from teacher_attendance.web_sessions.model import WebSession


class FakeClock:
    def __init__(self, now: datetime = datetime(2026, 3, 10, 9, 0, 0)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class _Store:
    """Dict-backed storage; newer rows get larger ids and later timestamps."""

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    @staticmethod
    def _stamp(new_id: int) -> datetime:
        return datetime(2026, 1, 1) + timedelta(minutes=new_id)

    def get_by_id(self, row_id):
        return self.rows.get(int(row_id))

    def delete_by_id(self, row_id) -> bool:
        return self.rows.pop(int(row_id), None) is not None

    def newest_first(self):
        return sorted(self.rows.values(), key=lambda r: r.created_at, reverse=True)


class FakeTeachers(_Store):
    def list(self, *, company_id=None):
        return [t for t in self.newest_first() if company_id is None or t.company_id == company_id]

    def list_by_ids(self, teacher_ids):
        return [self.rows[i] for i in teacher_ids if i in self.rows]

    def get_by_email(self, email):
        return next((t for t in self.rows.values() if t.email == email), None)

    def get_by_code(self, teacher_code):
        return next((t for t in self.rows.values() if t.teacher_code == teacher_code), None)

    def create(self, *, name, email, teacher_code, status, phone, profile_picture, company_id):
        new_id = self._new_id()
        self.rows[new_id] = Teacher(
            teacher_id=new_id,
            name=name,
            email=email,
            teacher_code=teacher_code,
            status=status,
            phone=phone,
            profile_picture=profile_picture,
            company_id=company_id,
            created_at=self._stamp(new_id),
        )
        return new_id

    def update(self, teacher_id, fields):
        self.rows[teacher_id] = replace(self.rows[teacher_id], **fields)


class FakeClasses(_Store):
    def list(self, *, teacher_id=None):
        return [c for c in self.newest_first() if teacher_id is None or c.teacher_id == teacher_id]

    def create(self, *, name, teacher_id):
        new_id = self._new_id()
        self.rows[new_id] = SchoolClass(class_id=new_id, name=name, teacher_id=teacher_id, created_at=self._stamp(new_id))
        return new_id

    def update(self, class_id, fields):
        self.rows[class_id] = replace(self.rows[class_id], **fields)


class FakeStudents(_Store):
    def __init__(self, classes: FakeClasses):
        super().__init__()
        self._classes = classes

    def _teacher_of(self, student: Student):
        cls = self._classes.get_by_id(student.class_id) if student.class_id else None
        return cls.teacher_id if cls else None

    def list(self, *, teacher_id=None, class_id=None):
        return [
            s
            for s in self.newest_first()
            if (class_id is None or s.class_id == class_id)
            and (teacher_id is None or self._teacher_of(s) == teacher_id)
        ]

    def get_by_code(self, student_code):
        return next((s for s in self.rows.values() if s.student_code == student_code), None)

    def create(self, *, name, student_code, email, class_id):
        new_id = self._new_id()
        self.rows[new_id] = Student(
            student_id=new_id,
            name=name,
            student_code=student_code,
            email=email,
            class_id=class_id,
            created_at=self._stamp(new_id),
        )
        return new_id

    def update(self, student_id, fields):
        self.rows[student_id] = replace(self.rows[student_id], **fields)


class FakeAttendance(_Store):
    def __init__(self, students: FakeStudents):
        super().__init__()
        self._students = students
        self.fail_on_create_many = False

    def _matches_owner(self, record, class_id, teacher_id) -> bool:
        if class_id is None and teacher_id is None:
            return True
        student = self._students.get_by_id(record.student_id)
        if not student:
            return False
        if class_id is not None and student.class_id != class_id:
            return False
        if teacher_id is not None and self._students._teacher_of(student) != teacher_id:
            return False
        return True

    def list(self, *, student_id=None, class_id=None, teacher_id=None, month=None, year=None):
        rows = [
            r
            for r in self.rows.values()
            if (student_id is None or r.student_id == student_id)
            and (month is None or r.month == month)
            and (year is None or r.year == year)
            and self._matches_owner(r, class_id, teacher_id)
        ]
        return sorted(rows, key=lambda r: (r.date, r.attendance_id), reverse=True)

    def list_for_students(self, student_ids, *, month, year):
        rows = [r for r in self.rows.values() if r.student_id in student_ids and r.month == month and r.year == year]
        return sorted(rows, key=lambda r: (r.date, r.session))

    def create(self, record):
        new_id = self._new_id()
        self.rows[new_id] = AttendanceRecord(
            attendance_id=new_id,
            student_id=record.student_id,
            date=record.date,
            session=record.session,
            status=record.status,
            month=record.month,
            year=record.year,
            created_at=self._stamp(new_id),
        )
        return new_id

    def create_many(self, records):
        if self.fail_on_create_many:
            raise RuntimeError("database unavailable")
        return [self.create(r) for r in records]

    def update(self, attendance_id, fields):
        self.rows[attendance_id] = replace(self.rows[attendance_id], **fields)

    def count_by_session_and_status(self, *, month, year, teacher_id=None):
        counts: dict[tuple, int] = defaultdict(int)
        for r in self.list(month=month, year=year, teacher_id=teacher_id):
            counts[(r.session, r.status)] += 1
        return [SessionStatusCount(session=s, status=st, count=n) for (s, st), n in counts.items()]


class FakePayments(_Store):
    def __init__(self, classes: FakeClasses):
        super().__init__()
        self._classes = classes

    def list(self, *, student_id=None, class_id=None, teacher_id=None):
        teacher_classes = None
        if teacher_id is not None:
            teacher_classes = {c.class_id for c in self._classes.list(teacher_id=teacher_id)}
        rows = [
            p
            for p in self.rows.values()
            if (student_id is None or p.student_id == student_id)
            and (class_id is None or p.class_id == class_id)
            and (teacher_classes is None or p.class_id in teacher_classes)
        ]
        return sorted(rows, key=lambda p: (p.date, p.payment_id), reverse=True)

    def create(self, *, student_id, class_id, amount, type, date, month, year):
        new_id = self._new_id()
        self.rows[new_id] = Payment(
            payment_id=new_id,
            student_id=student_id,
            class_id=class_id,
            amount=amount,
            type=type,
            date=date,
            month=month,
            year=year,
            created_at=self._stamp(new_id),
        )
        return new_id

    def monthly_totals(self, class_ids, *, year=None, month=None):
        groups: dict[tuple, list] = defaultdict(list)
        for p in self.rows.values():
            if p.class_id not in class_ids:
                continue
            if (year is not None and p.year != year) or (month is not None and p.month != month):
                continue
            groups[(p.class_id, p.year, p.month)].append(p.amount)
        totals = [
            MonthlyEarning(class_id=c, year=y, month=m, total_amount=sum(a), payment_count=len(a))
            for (c, y, m), a in groups.items()
        ]
        return sorted(totals, key=lambda t: (t.year, t.month), reverse=True)


class FakeAdmins(_Store):
    def get_by_email(self, email):
        return next((a for a in self.rows.values() if a.email == email), None)

    def create(self, *, email, password_hash, name, company_name):
        new_id = self._new_id()
        self.rows[new_id] = Admin(
            admin_id=new_id,
            email=email,
            password_hash=password_hash,
            name=name,
            company_name=company_name,
            created_at=self._stamp(new_id),
        )
        return new_id

    def update_profile(self, admin_id, fields):
        self.rows[admin_id] = replace(self.rows[admin_id], **fields)

    def update_password(self, admin_id, password_hash):
        self.rows[admin_id] = replace(self.rows[admin_id], password_hash=password_hash)

    def save_preferences(self, admin_id, preferences):
        self.rows[admin_id] = replace(self.rows[admin_id], preferences=dict(preferences))


class FakeWebSessions:
    def __init__(self):
        self.rows: dict[str, WebSession] = {}

    def create(self, *, session_id, company_id, expires_at):
        self.rows[session_id] = WebSession(
            session_id=session_id,
            status=WebSessionStatus.PENDING,
            expires_at=expires_at,
            company_id=company_id,
        )

    def get(self, session_id):
        return self.rows.get(session_id)

    def mark_authenticated(self, session_id, *, teacher_id, company_id, token, authenticated_at, expires_at):
        self.rows[session_id] = replace(
            self.rows[session_id],
            status=WebSessionStatus.AUTHENTICATED,
            teacher_id=teacher_id,
            company_id=company_id,
            token=token,
            authenticated_at=authenticated_at,
            expires_at=expires_at,
        )

    def mark_disconnected(self, session_id):
        self.rows[session_id] = replace(self.rows[session_id], status=WebSessionStatus.DISCONNECTED, token=None)

    def list_active(self, *, company_id, now):
        return [
            s
            for s in self.rows.values()
            if s.status == WebSessionStatus.AUTHENTICATED
            and s.expires_at > now
            and (company_id is None or s.company_id == company_id)
        ]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tokens():
    return TokenService("test-secret")


@pytest.fixture
def teachers_repo():
    return FakeTeachers()


@pytest.fixture
def classes_repo():
    return FakeClasses()


@pytest.fixture
def students_repo(classes_repo):
    return FakeStudents(classes_repo)


@pytest.fixture
def attendance_repo(students_repo):
    return FakeAttendance(students_repo)


@pytest.fixture
def payments_repo(classes_repo):
    return FakePayments(classes_repo)


@pytest.fixture
def admins_repo():
    return FakeAdmins()


@pytest.fixture
def web_sessions_repo():
    return FakeWebSessions()


@pytest.fixture
def container(
    admins_repo,
    teachers_repo,
    classes_repo,
    students_repo,
    attendance_repo,
    payments_repo,
    web_sessions_repo,
    tokens,
    clock,
):
    return assemble(
        admins_repo=admins_repo,
        teachers_repo=teachers_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        web_sessions_repo=web_sessions_repo,
        token_service=tokens,
        clock=clock,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from teacher_attendance.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(tokens):
    token = tokens.issue_admin_token(admin_id=1, email="owner@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def web_headers(tokens):
    token = tokens.issue_web_token(session_id="s" * 32, teacher_id=1, company_id="1")
    assert tokens.decode(token)["type"] == TokenType.WEB.value
    return {"Authorization": f"Bearer {token}"}
