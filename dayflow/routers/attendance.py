from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.routers.auth_deps import get_current_user
from dayflow.schemas.attendance import AttendanceAction, AttendanceEnvelope, AttendanceList, AttendanceSummary
from dayflow.services import attendance_service

router = APIRouter(
    prefix="/attendance",
    tags=["attendance"]
)


@router.get("", response_model=AttendanceList)
def list_attendance(
    day: Optional[date] = Query(default=None, alias="date"),
    month: Optional[int] = None,
    year: Optional[int] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    records = attendance_service.list_attendance(
        db, current_user, day=day, month=month, year=year, employee_id=employee_id
    )
    return {"attendance": records}


@router.post("", response_model=AttendanceEnvelope)
def record_attendance(
    payload: AttendanceAction,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    record, created = attendance_service.record_action(db, current_user, payload.action)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return {"attendance": record}


@router.get("/summary", response_model=AttendanceSummary)
def get_attendance_summary(
    month: int,
    year: int,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return attendance_service.attendance_summary(db, current_user, month, year, employee_id)
