import re
from datetime import timedelta

import pytest
from dayflow.services import auth as auth_service
from dayflow.services import employee_service
from dayflow.core.exceptions import AuthenticationError, ValidationError
from conftest import DEFAULT_PASSWORD

def test_password_hashing():
    """Test that password hashing and verification works correctly."""
    password = "MySecurePassword123!"
    hashed = auth_service.get_password_hash(password)
    assert hashed != password
    assert auth_service.verify_password(password, hashed)
    assert not auth_service.verify_password("WrongPassword", hashed)

def test_access_token_roundtrip():
    token = auth_service.create_access_token(data={"sub": 42, "role": "hr"})
    payload = auth_service.decode_access_token(token)
    assert payload["sub"] == "42"
    assert payload["role"] == "hr"
    assert payload["type"] == "access"

def test_expired_token_is_reported():
    token = auth_service.create_access_token(data={"sub": 1}, expires_delta=timedelta(seconds=-5))
    assert auth_service.decode_access_token(token) == {"error": "TOKEN_EXPIRED"}

def test_garbage_token_is_rejected():
    assert auth_service.decode_access_token("not-a-token") is None

def test_login_id_format():
    assert auth_service.generate_login_id("DF", "John", "Doe", 2025, 7) == "DFJDO20250007"
    assert auth_service.generate_login_id("DF", "amara", "li", 2024, 123) == "DFALI20240123"

def test_generated_passwords_are_random():
    first = auth_service.generate_random_password()
    second = auth_service.generate_random_password()
    assert len(first) == auth_service.TEMP_PASSWORD_LENGTH
    assert first != second
    assert re.fullmatch(r"[A-Za-z0-9@#$%]+", first)

def test_authenticate_checks_password_and_active_flag(db_session, make_employee):
    employee = make_employee()
    assert employee_service.authenticate(db_session, employee.login_id, DEFAULT_PASSWORD).id == employee.id

    with pytest.raises(AuthenticationError):
        employee_service.authenticate(db_session, employee.login_id, "wrong-password")

    inactive = make_employee(is_active=False)
    with pytest.raises(AuthenticationError):
        employee_service.authenticate(db_session, inactive.login_id, DEFAULT_PASSWORD)

def test_change_password(db_session, make_employee):
    employee = make_employee(must_change_password=True)

    with pytest.raises(ValidationError):
        employee_service.change_password(db_session, employee, "wrong-password", "NewPassword1!")
    with pytest.raises(ValidationError):
        employee_service.change_password(db_session, employee, DEFAULT_PASSWORD, "short")

    employee_service.change_password(db_session, employee, DEFAULT_PASSWORD, "NewPassword1!")
    assert auth_service.verify_password("NewPassword1!", employee.hashed_password)
    assert employee.must_change_password is False
