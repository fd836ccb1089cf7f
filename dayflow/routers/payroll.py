"""
Payroll Router

Handles HTTP endpoints for payroll operations.
All business logic is delegated to the payroll service layer.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.routers.auth_deps import get_current_user
from dayflow.schemas.payroll import PayrollGenerateRequest, PayrollGenerated, PayrollList
from dayflow.services import payroll_service

router = APIRouter(
    prefix="/payroll",
    tags=["payroll"]
)


@router.get("", response_model=PayrollList)
def list_payroll(
    month: Optional[int] = None,
    year: Optional[int] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return {"payroll": payroll_service.list_payroll(db, current_user, month, year, employee_id)}


@router.post("", response_model=PayrollGenerated, status_code=status.HTTP_201_CREATED)
def generate_payroll(
    request: PayrollGenerateRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """
    Generate draft payslips for all active employees for the month.
    Safe to re-run: existing payslips are never touched.
    """
    payrolls = payroll_service.generate_payroll(db, current_user, request.month, request.year)
    return {"generated": len(payrolls), "payroll": payrolls}
