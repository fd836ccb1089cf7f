"""
Identity and authorization dependencies for FastAPI endpoints.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from dayflow.core.exceptions import AuthenticationError
from dayflow.core.permissions import ensure_admin_or_hr
from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.services import auth as auth_service

logger = logging.getLogger(__name__)

# auto_error=False so a missing token goes through our own error envelope
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Employee:
    """
    Resolves the calling employee from the bearer token.
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    payload = auth_service.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise AuthenticationError("Could not validate credentials")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise AuthenticationError("TOKEN_EXPIRED")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise AuthenticationError("Invalid token type")

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        logger.warning("Authentication failed: Missing subject in token")
        raise AuthenticationError("Missing subject in token")

    employee = db.get(Employee, int(subject))

    if employee is None:
        logger.warning(f"Authentication failed: Employee {subject} not found in database")
        raise AuthenticationError("User not found")
    if not employee.is_active:
        logger.warning(f"Authentication failed: Employee {subject} is inactive")
        raise AuthenticationError("User is inactive")
    return employee


def require_admin_or_hr(current_user: Employee = Depends(get_current_user)) -> Employee:
    """Dependency form of the admin/HR capability check."""
    return ensure_admin_or_hr(current_user)
