from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.routers.auth_deps import get_current_user
from dayflow.schemas.leave import (
    LeaveBalanceList, LeaveRequestCreate, LeaveRequestEnvelope,
    LeaveRequestList, LeaveReview, LeaveTypeList,
)
from dayflow.services import leave_service
from dayflow.services.leave_settlement import review_leave_request

router = APIRouter(tags=["leave"])


@router.get("/leave", response_model=LeaveRequestList)
def list_leave_requests(
    status: Optional[str] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    requests = leave_service.list_leave_requests(db, current_user, status=status, employee_id=employee_id)
    return {"leave_requests": requests}


@router.post("/leave", response_model=LeaveRequestEnvelope, status_code=status.HTTP_201_CREATED)
def submit_leave_request(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    leave_request = leave_service.create_leave_request(
        db,
        current_user,
        leave_type_id=payload.leave_type_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        reason=payload.reason,
        attachment_url=payload.attachment_url
    )
    return {"leave_request": leave_request}


@router.api_route("/leave/{request_id}", methods=["POST", "PATCH"], response_model=LeaveRequestEnvelope)
def review_leave(
    request_id: int,
    review: LeaveReview,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Approve or reject a pending request. Approval settles balance and attendance."""
    leave_request = review_leave_request(db, request_id, review.status, current_user)
    return {"leave_request": leave_request}


@router.get("/leave-types", response_model=LeaveTypeList)
def list_leave_types(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return {"leave_types": leave_service.list_leave_types(db)}


@router.get("/leave-balances", response_model=LeaveBalanceList)
def list_leave_balances(
    employee_id: Optional[int] = None,
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    balances = leave_service.list_leave_balances(db, current_user, employee_id=employee_id, year=year)
    return {"leave_balances": balances}
