import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from dayflow.database import Base, get_db
from dayflow.main import app
from dayflow.models.employee import Employee, EmployeeRole
from dayflow.models.leave_type import LeaveType
from dayflow.services import auth as auth_service
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "Password123!"

# Hashing is the slow part of fixtures; hash once per session
_PASSWORD_HASH = None


def _password_hash():
    global _PASSWORD_HASH
    if _PASSWORD_HASH is None:
        _PASSWORD_HASH = auth_service.get_password_hash(DEFAULT_PASSWORD)
    return _PASSWORD_HASH


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Get a database session for each test function.
    Services commit on their own, so rows are wiped after each test instead
    of relying on an outer transaction rollback.
    """
    session = TestingSessionLocal()

    yield session

    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def make_employee(db_session):
    """Factory creating active employees with the default password."""
    counter = {"n": 0}

    def _make_employee(role=EmployeeRole.EMPLOYEE, first_name="Test", last_name="User", **kwargs):
        counter["n"] += 1
        n = counter["n"]
        employee = Employee(
            login_id=f"DFTES2025{n:04d}",
            email=f"user{n}@dayflow.test",
            hashed_password=_password_hash(),
            first_name=first_name,
            last_name=last_name,
            role=role.value if hasattr(role, "value") else role,
            joining_date=kwargs.pop("joining_date", date(2025, 1, 6)),
            must_change_password=kwargs.pop("must_change_password", False),
            is_active=kwargs.pop("is_active", True),
            **kwargs
        )
        db_session.add(employee)
        db_session.commit()
        db_session.refresh(employee)
        return employee

    return _make_employee


@pytest.fixture(scope="function")
def admin_user(make_employee):
    return make_employee(EmployeeRole.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture(scope="function")
def hr_user(make_employee):
    return make_employee(EmployeeRole.HR, first_name="Harper", last_name="Reyes")


@pytest.fixture(scope="function")
def employee_user(make_employee):
    return make_employee(EmployeeRole.EMPLOYEE, first_name="Emil", last_name="Novak")


@pytest.fixture(scope="function")
def leave_types(db_session):
    paid = LeaveType(name="Paid Time Off", is_paid=True, max_days_per_year=12, requires_attachment=False)
    sick = LeaveType(name="Sick Leave", is_paid=True, max_days_per_year=7, requires_attachment=True)
    db_session.add_all([paid, sick])
    db_session.commit()
    return {"paid": paid, "sick": sick}


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens for an employee."""
    def _get_token(employee):
        return auth_service.create_access_token(data={
            "sub": employee.id,
            "role": employee.role,
        })
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(employee):
        return {"Authorization": f"Bearer {get_token(employee)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
