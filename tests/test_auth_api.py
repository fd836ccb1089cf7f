from fastapi import status
from conftest import DEFAULT_PASSWORD

def test_login_success(client, admin_user):
    """Test successful login with valid credentials."""
    login_data = {
        "login_id": admin_user.login_id,
        "password": DEFAULT_PASSWORD
    }

    response = client.post("/api/auth/login", json=login_data)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["login_id"] == admin_user.login_id
    assert data["user"]["role"] == "admin"
    assert "hashed_password" not in data["user"]

def test_login_invalid_credentials(client, admin_user):
    """Test login failure with wrong password."""
    response = client.post("/api/auth/login", json={"login_id": admin_user.login_id, "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["msg"] == "Invalid credentials"

def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"login_id": "DFXXX20250001", "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"login_id": "DFXXX20250001"})
    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "password"

def test_me_returns_current_employee(client, employee_user, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == employee_user.id

def test_missing_token_is_unauthorized(client):
    response = client.get("/api/auth/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["errors"][0]["code"] == "AUTH_FAILED"

def test_invalid_token_is_unauthorized(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_inactive_employee_token_is_rejected(client, db_session, employee_user, auth_headers):
    headers = auth_headers(employee_user)
    employee_user.is_active = False
    db_session.commit()

    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["errors"][0]["msg"] == "User is inactive"

def test_change_password_then_login(client, employee_user, auth_headers):
    response = client.post(
        "/api/auth/change-password",
        headers=auth_headers(employee_user),
        json={"current_password": DEFAULT_PASSWORD, "new_password": "BrandNewPass9!"}
    )
    assert response.status_code == status.HTTP_200_OK

    old = client.post("/api/auth/login", json={"login_id": employee_user.login_id, "password": DEFAULT_PASSWORD})
    assert old.status_code == status.HTTP_401_UNAUTHORIZED
    new = client.post("/api/auth/login", json={"login_id": employee_user.login_id, "password": "BrandNewPass9!"})
    assert new.status_code == status.HTTP_200_OK
