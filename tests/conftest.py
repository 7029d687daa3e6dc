"""Pytest fixtures for testing"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import date
from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from university_erp.api.main import create_app
from university_erp.infrastructure.database.models import Base, Employee, Program, Student
from university_erp.infrastructure.database.session import get_db
from university_erp.infrastructure.security import create_access_token


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def headers_for() -> Callable[..., Dict[str, str]]:
    """Build an Authorization header for a caller with the given role"""

    def build(role: str, user_id: str = None) -> Dict[str, str]:
        token = create_access_token(user_id or str(uuid.uuid4()), f"{role}@uni.edu", role)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def admin_headers(headers_for) -> Dict[str, str]:
    return headers_for("admin")


@pytest.fixture
def staff_headers(headers_for) -> Dict[str, str]:
    return headers_for("staff")


@pytest.fixture
def student_headers(headers_for) -> Dict[str, str]:
    return headers_for("student")


@pytest.fixture
def program(db: Session) -> Program:
    """A BS Computer Science program"""
    program = Program(code="BSCS", name="BS Computer Science", department="Computing", duration_years=4)
    db.add(program)
    db.commit()
    return program


@pytest.fixture
def student(db: Session, program: Program) -> Student:
    """An active student enrolled in the program"""
    student = Student(
        roll_number="2024-CS-001",
        first_name="Ayesha",
        last_name="Khan",
        email="ayesha@uni.edu",
        program_id=program.id,
        batch="2024-Fall",
        admission_date=date(2024, 9, 1),
    )
    db.add(student)
    db.commit()
    return student


@pytest.fixture
def employee(db: Session) -> Employee:
    """A permanent faculty member"""
    employee = Employee(
        employee_code="EMP-001",
        first_name="Bilal",
        last_name="Ahmed",
        email="bilal@uni.edu",
        designation="Lecturer",
        department="Computing",
        joining_date=date(2020, 1, 15),
    )
    db.add(employee)
    db.commit()
    return employee
