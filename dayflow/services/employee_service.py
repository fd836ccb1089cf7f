"""
Employee Service Layer

Hiring, profile updates, soft deactivation and login. Sensitive identifiers
(bank account, PAN, Aadhaar) are encrypted at rest and decrypted only when
serialized for a caller allowed to see them.
"""
from datetime import date
from typing import Any, Dict, List, Tuple
import logging

from sqlalchemy import extract
from sqlalchemy.orm import Session

from dayflow.core.config import settings
from dayflow.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from dayflow.core.permissions import ensure_admin_or_hr, is_admin_or_hr
from dayflow.core.security import decrypt_data, encrypt_data, sanitize_input
from dayflow.models.employee import Employee, EmployeeRole
from dayflow.services import auth as auth_service
from dayflow.services.leave_service import seed_leave_balances

logger = logging.getLogger(__name__)

ENCRYPTED_FIELDS = ("bank_account_number", "pan_number", "aadhaar_number")

EMPLOYEE_EDITABLE_FIELDS = (
    "phone", "address", "city", "state", "country", "postal_code",
    "emergency_contact_name", "emergency_contact_phone", "profile_picture",
)

ADMIN_EDITABLE_FIELDS = EMPLOYEE_EDITABLE_FIELDS + (
    "email", "first_name", "last_name", "department", "designation", "role",
    "date_of_birth", "gender", "marital_status",
    "bank_name", "bank_account_number", "ifsc_code", "pan_number", "aadhaar_number",
    "resume_url", "is_active",
)

# NOT NULL columns reachable through an update
NON_NULLABLE_FIELDS = ("email", "first_name", "last_name", "role", "is_active")

CREATE_FIELDS = (
    "department", "designation", "phone", "address", "city", "state", "country", "postal_code",
)


def get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def employee_to_dict(employee: Employee, include_sensitive: bool = True) -> Dict[str, Any]:
    """Serialize without the password hash; optionally without sensitive identifiers."""
    data = {
        column.name: getattr(employee, column.name)
        for column in Employee.__table__.columns
        if column.name != "hashed_password"
    }
    for field in ENCRYPTED_FIELDS:
        if include_sensitive:
            data[field] = decrypt_data(data[field])
        else:
            data.pop(field)
    return data


def create_employee(db: Session, caller: Employee, values: Dict[str, Any]) -> Tuple[Employee, Dict[str, str]]:
    """
    Hire an employee. Returns (employee, credentials) where credentials hold
    the generated login id and the one-time temporary password.
    """
    ensure_admin_or_hr(caller)

    required = ("email", "first_name", "last_name", "joining_date")
    missing = [f for f in required if not values.get(f)]
    if missing:
        raise ValidationError("Required fields missing", details={"missing": missing})

    role = values.get("role") or EmployeeRole.EMPLOYEE.value
    if role not in {r.value for r in EmployeeRole}:
        raise ValidationError("Invalid role")
    if role == EmployeeRole.ADMIN.value and caller.role != EmployeeRole.ADMIN.value:
        raise AuthorizationError("Only admins can create admins")

    if db.query(Employee.id).filter(Employee.email == values["email"]).first():
        raise ValidationError("An employee with this email already exists")

    joining_date: date = values["joining_date"]
    joined_same_year = db.query(Employee.id).filter(
        extract("year", Employee.joining_date) == joining_date.year
    ).count()
    login_id = auth_service.generate_login_id(
        settings.company_code,
        values["first_name"],
        values["last_name"],
        joining_date.year,
        joined_same_year + 1
    )
    temp_password = auth_service.generate_random_password()

    employee = Employee(
        login_id=login_id,
        email=values["email"],
        hashed_password=auth_service.get_password_hash(temp_password),
        first_name=values["first_name"],
        last_name=values["last_name"],
        role=role,
        joining_date=joining_date,
        must_change_password=True,
        is_active=True,
        **{f: sanitize_input(values.get(f)) for f in CREATE_FIELDS if values.get(f) is not None}
    )
    db.add(employee)
    try:
        db.flush()
        seed_leave_balances(db, employee, date.today().year)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info("Employee created", extra={"employee_id": employee.id, "login_id": login_id, "created_by": caller.id})
    return employee, {"login_id": login_id, "temp_password": temp_password}


def list_employees(db: Session, include_inactive: bool = False) -> List[Employee]:
    query = db.query(Employee)
    if not include_inactive:
        query = query.filter(Employee.is_active.is_(True))
    return query.order_by(Employee.first_name, Employee.id).all()


def get_employee(db: Session, caller: Employee, employee_id: int) -> Dict[str, Any]:
    employee = get_employee_or_404(db, employee_id)
    can_see_sensitive = is_admin_or_hr(caller) or caller.id == employee.id
    return employee_to_dict(employee, include_sensitive=can_see_sensitive)


def update_employee(db: Session, caller: Employee, employee_id: int, values: Dict[str, Any]) -> Employee:
    if is_admin_or_hr(caller):
        allowed = ADMIN_EDITABLE_FIELDS
    elif caller.id == employee_id:
        allowed = EMPLOYEE_EDITABLE_FIELDS
    else:
        raise AuthorizationError()

    employee = get_employee_or_404(db, employee_id)

    nulled = [f for f in NON_NULLABLE_FIELDS if f in allowed and f in values and values[f] is None]
    if nulled:
        raise ValidationError("Fields cannot be empty", details={"fields": nulled})

    role = values.get("role")
    if role is not None:
        if role not in {r.value for r in EmployeeRole}:
            raise ValidationError("Invalid role")
        if EmployeeRole.ADMIN.value in (role, employee.role) and caller.role != EmployeeRole.ADMIN.value:
            raise AuthorizationError("Only admins can change admin roles")

    changed = []
    for field in allowed:
        if field not in values:
            continue
        value = values[field]
        if field in ENCRYPTED_FIELDS:
            value = encrypt_data(value)
        elif isinstance(value, str):
            value = sanitize_input(value)
        setattr(employee, field, value)
        changed.append(field)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info("Employee updated", extra={"employee_id": employee.id, "fields": changed, "updated_by": caller.id})
    return employee


def deactivate_employee(db: Session, caller: Employee, employee_id: int) -> Employee:
    ensure_admin_or_hr(caller)
    employee = get_employee_or_404(db, employee_id)
    employee.is_active = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Employee deactivated", extra={"employee_id": employee.id, "deactivated_by": caller.id})
    return employee


def authenticate(db: Session, login_id: str, password: str) -> Employee:
    employee = db.query(Employee).filter(
        Employee.login_id == login_id,
        Employee.is_active.is_(True)
    ).first()
    if not employee or not auth_service.verify_password(password, employee.hashed_password):
        logger.warning("Failed login", extra={"login_id": login_id})
        raise AuthenticationError("Invalid credentials")
    return employee


def change_password(db: Session, employee: Employee, current_password: str, new_password: str) -> Employee:
    if not auth_service.verify_password(current_password, employee.hashed_password):
        raise ValidationError("Current password is incorrect")
    if len(new_password) < 8:
        raise ValidationError("New password must be at least 8 characters")
    employee.hashed_password = auth_service.get_password_hash(new_password)
    employee.must_change_password = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return employee
