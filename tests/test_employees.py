import pytest
from datetime import date

from dayflow.core.exceptions import AuthorizationError, ValidationError
from dayflow.core.security import encrypt_data
from dayflow.models.leave_balance import LeaveBalance
from dayflow.services import employee_service


NEW_HIRE = {
    "email": "john.doe@example.com",
    "first_name": "John",
    "last_name": "Doe",
    "joining_date": date(2025, 3, 3),
    "department": "Engineering",
}


def test_create_employee_issues_credentials(db_session, hr_user, leave_types):
    employee, credentials = employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE))

    # hr_user joined in 2025 too, so this is the second hire of the year
    assert credentials["login_id"] == "DFJDO20250002"
    assert employee.login_id == credentials["login_id"]
    assert employee.must_change_password is True
    assert employee.role == "employee"
    assert employee_service.authenticate(db_session, credentials["login_id"], credentials["temp_password"]).id == employee.id


def test_create_employee_seeds_leave_balances(db_session, hr_user, leave_types):
    employee, _ = employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE))

    balances = db_session.query(LeaveBalance).filter(LeaveBalance.employee_id == employee.id).all()
    assert {b.leave_type_id: b.total_days for b in balances} == {
        leave_types["paid"].id: 12,
        leave_types["sick"].id: 7,
    }
    assert all(b.year == date.today().year and b.used_days == 0 for b in balances)


def test_create_employee_validation(db_session, hr_user):
    with pytest.raises(ValidationError, match="Required fields missing"):
        employee_service.create_employee(db_session, hr_user, {"email": "x@example.com"})

    with pytest.raises(ValidationError, match="Invalid role"):
        employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE, role="ceo"))

    employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE))
    with pytest.raises(ValidationError, match="already exists"):
        employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE))


def test_only_admins_create_admins(db_session, admin_user, hr_user):
    with pytest.raises(AuthorizationError):
        employee_service.create_employee(db_session, hr_user, dict(NEW_HIRE, role="admin"))

    employee, _ = employee_service.create_employee(db_session, admin_user, dict(NEW_HIRE, role="admin"))
    assert employee.role == "admin"


def test_employees_cannot_hire(db_session, employee_user):
    with pytest.raises(AuthorizationError):
        employee_service.create_employee(db_session, employee_user, dict(NEW_HIRE))


def test_sensitive_fields_are_encrypted_and_masked(db_session, make_employee, hr_user, employee_user):
    employee_service.update_employee(db_session, hr_user, employee_user.id, {"pan_number": "ABCDE1234F"})
    assert employee_user.pan_number != "ABCDE1234F"

    as_hr = employee_service.get_employee(db_session, hr_user, employee_user.id)
    as_self = employee_service.get_employee(db_session, employee_user, employee_user.id)
    as_colleague = employee_service.get_employee(db_session, make_employee(), employee_user.id)

    assert as_hr["pan_number"] == "ABCDE1234F"
    assert as_self["pan_number"] == "ABCDE1234F"
    assert "pan_number" not in as_colleague
    assert "hashed_password" not in as_hr


def test_employee_edits_only_contact_fields(db_session, employee_user):
    updated = employee_service.update_employee(
        db_session, employee_user, employee_user.id, {"phone": "+91 98765 43210", "department": "Finance"}
    )
    assert updated.phone == "+91 98765 43210"
    assert updated.department is None


@pytest.mark.parametrize("field", ["first_name", "last_name", "email", "role", "is_active"])
def test_required_columns_cannot_be_nulled(db_session, hr_user, employee_user, field):
    with pytest.raises(ValidationError, match="Fields cannot be empty"):
        employee_service.update_employee(db_session, hr_user, employee_user.id, {field: None})

    db_session.refresh(employee_user)
    assert employee_user.first_name == "Emil"
    assert employee_user.is_active is True


def test_optional_columns_can_be_cleared(db_session, hr_user, employee_user):
    employee_service.update_employee(db_session, hr_user, employee_user.id, {"department": "Sales"})
    updated = employee_service.update_employee(db_session, hr_user, employee_user.id, {"department": None})
    assert updated.department is None


def test_employee_cannot_edit_colleague(db_session, make_employee, employee_user):
    colleague = make_employee()
    with pytest.raises(AuthorizationError):
        employee_service.update_employee(db_session, employee_user, colleague.id, {"phone": "123"})


def test_hr_cannot_promote_to_admin(db_session, hr_user, employee_user):
    with pytest.raises(AuthorizationError):
        employee_service.update_employee(db_session, hr_user, employee_user.id, {"role": "admin"})


def test_deactivate_keeps_the_row(db_session, hr_user, employee_user):
    employee_service.deactivate_employee(db_session, hr_user, employee_user.id)

    assert employee_user.is_active is False
    assert employee_user.id not in [e.id for e in employee_service.list_employees(db_session)]
    assert employee_user.id in [e.id for e in employee_service.list_employees(db_session, include_inactive=True)]


class TestEmployeeApi:
    def test_hr_creates_employee(self, client, hr_user, leave_types, auth_headers):
        payload = dict(NEW_HIRE, joining_date="2025-03-03")
        response = client.post("/api/employees", headers=auth_headers(hr_user), json=payload)
        assert response.status_code == 201
        data = response.json()
        assert data["credentials"]["login_id"] == "DFJDO20250002"
        assert data["employee"]["department"] == "Engineering"

        login = client.post("/api/auth/login", json={
            "login_id": data["credentials"]["login_id"],
            "password": data["credentials"]["temp_password"],
        })
        assert login.status_code == 200
        assert login.json()["user"]["must_change_password"] is True

    def test_missing_fields(self, client, hr_user, auth_headers):
        response = client.post("/api/employees", headers=auth_headers(hr_user), json={"first_name": "Jo"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["details"]["missing"] == ["email", "last_name", "joining_date"]

    def test_employee_cannot_create(self, client, employee_user, auth_headers):
        response = client.post("/api/employees", headers=auth_headers(employee_user), json=dict(NEW_HIRE, joining_date="2025-03-03"))
        assert response.status_code == 403

    def test_colleague_view_omits_sensitive_fields(self, client, db_session, make_employee, employee_user, auth_headers):
        employee_user.aadhaar_number = encrypt_data("1234 5678 9012")
        db_session.commit()
        colleague = make_employee()

        response = client.get(f"/api/employees/{employee_user.id}", headers=auth_headers(colleague))
        assert response.status_code == 200
        assert "aadhaar_number" not in response.json()["employee"]

        response = client.get(f"/api/employees/{employee_user.id}", headers=auth_headers(employee_user))
        assert response.json()["employee"]["aadhaar_number"] == "1234 5678 9012"

    def test_unknown_employee(self, client, hr_user, auth_headers):
        response = client.get("/api/employees/9999", headers=auth_headers(hr_user))
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "NOT_FOUND"

    def test_null_first_name_is_rejected(self, client, hr_user, employee_user, auth_headers):
        response = client.patch(
            f"/api/employees/{employee_user.id}",
            headers=auth_headers(hr_user),
            json={"first_name": None}
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["details"]["fields"] == ["first_name"]

    def test_deactivate(self, client, hr_user, employee_user, auth_headers):
        response = client.delete(f"/api/employees/{employee_user.id}", headers=auth_headers(hr_user))
        assert response.status_code == 200

        listed = client.get("/api/employees", headers=auth_headers(hr_user)).json()["employees"]
        assert employee_user.id not in [e["id"] for e in listed]
