from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging

from dayflow.core.config import settings
from dayflow.core.limiter import limiter
from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.routers.auth_deps import get_current_user
from dayflow.schemas.auth import CurrentUser, LoginRequest, PasswordChange, Token
from dayflow.services import auth as auth_service
from dayflow.services import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/login", response_model=Token)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    employee = employee_service.authenticate(db, login_data.login_id, login_data.password)

    access_token = auth_service.create_access_token(data={
        "sub": employee.id,
        "role": employee.role,
        "login_id": employee.login_id,
    })
    logger.info("Login", extra={"employee_id": employee.id})
    return Token(
        access_token=access_token,
        token_type="bearer",
        user=CurrentUser.model_validate(employee)
    )


@router.get("/me", response_model=CurrentUser)
def read_current_user(current_user: Employee = Depends(get_current_user)):
    return current_user


@router.post("/change-password", response_model=CurrentUser)
def change_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return employee_service.change_password(db, current_user, payload.current_password, payload.new_password)
