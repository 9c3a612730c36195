import os
from datetime import timedelta

TEST_DB_FILE = "test_course_platform.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before app.main builds its engine
os.environ["DATABASE_URL"] = TEST_DB_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.deps import get_db  # noqa: E402
from app.core.security import hash_password, token_for_user  # noqa: E402
from app.core.timeutil import utcnow  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import make_engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.assignment import Assignment  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.enrollment import Enrollment  # noqa: E402
from app.models.student_progress import StudentProgress  # noqa: E402
from app.models.user import User  # noqa: E402

PASSWORD = "password123"
# hashed once; bcrypt is deliberately slow
PASSWORD_HASH = hash_password(PASSWORD)

engine = make_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


def _user(email: str, role: str, first_name: str, last_name: str = "Tester") -> User:
    return User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        role=role,
        hashed_password=PASSWORD_HASH,
        is_active=True,
    )


@pytest.fixture(autouse=True)
def seed():
    """
    Seed a clean minimal dataset for each test.

    educator owns one published course; student is enrolled (with a progress
    record), other_student is not; ta has role ta but no assignment yet.
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()

        users = {
            "educator": _user("educator@example.com", "educator", "Eda"),
            "other_educator": _user("educator2@example.com", "educator", "Ed"),
            "student": _user("student1@example.com", "student", "Stu"),
            "other_student": _user("student2@example.com", "student", "Sam"),
            "ta": _user("ta1@example.com", "ta", "Tara"),
            "expert": _user("expert@example.com", "industry_expert", "Ivy"),
        }
        db.add_all(users.values())
        db.commit()

        course = Course(
            title="Python 101",
            description="Intro to Python",
            category="programming",
            difficulty="beginner",
            price=0,
            educator_id=users["educator"].id,
            is_published=True,
        )
        db.add(course)
        db.commit()

        db.add(Enrollment(student_id=users["student"].id, course_id=course.id, progress=0))
        db.add(
            StudentProgress(
                student_id=users["student"].id,
                course_id=course.id,
                overall_progress=0,
                total_time_spent=0,
            )
        )
        db.commit()

        data = {name: u.id for name, u in users.items()}
        data["course"] = course.id
        data["tokens"] = {name: token_for_user(u) for name, u in users.items()}
        yield data
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth(seed):
    """auth("student") -> Authorization header for that seeded user."""

    def _header(name: str) -> dict:
        return {"Authorization": f"Bearer {seed['tokens'][name]}"}

    return _header


@pytest.fixture()
def make_assignment(db, seed):
    def _make(due_in: timedelta = timedelta(days=1), published: bool = True, max_marks: float = 100):
        a = Assignment(
            course_id=seed["course"],
            title="HW1",
            description="First homework",
            due_date=utcnow() + due_in,
            max_marks=max_marks,
            attachments=[],
            is_published=published,
        )
        db.add(a)
        db.commit()
        db.refresh(a)
        return a.id

    return _make
