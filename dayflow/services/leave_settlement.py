"""
Leave settlement: the side effects of reviewing a pending leave request.

Approval charges the employee's leave balance and marks every covered
calendar day as leave in attendance. The status transition and both side
effects commit together or not at all.
"""
from datetime import date, datetime, timezone
from typing import Optional
import logging

from sqlalchemy.orm import Session, joinedload

from dayflow.core.dates import iter_dates
from dayflow.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from dayflow.core.permissions import ensure_admin_or_hr
from dayflow.models.attendance import Attendance, AttendanceStatus
from dayflow.models.employee import Employee
from dayflow.models.leave_balance import LeaveBalance
from dayflow.models.leave_request import LeaveRequest, LeaveStatus

logger = logging.getLogger(__name__)

REVIEW_DECISIONS = (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value)


def resolve_balance_year(leave_request: LeaveRequest, today: Optional[date] = None) -> int:
    """
    Year of the balance bucket charged for a leave request.

    This is the calendar year at processing time, not the year of the leave
    dates: a December leave approved in January is charged to the new year.
    """
    return (today or date.today()).year


def apply_balance(db: Session, leave_request: LeaveRequest, year: int) -> Optional[LeaveBalance]:
    balance = db.query(LeaveBalance).filter(
        LeaveBalance.employee_id == leave_request.employee_id,
        LeaveBalance.leave_type_id == leave_request.leave_type_id,
        LeaveBalance.year == year
    ).first()

    if balance is None:
        logger.warning(
            "No leave balance to charge",
            extra={"leave_request_id": leave_request.id, "employee_id": leave_request.employee_id, "year": year}
        )
        return None

    balance.used_days = (balance.used_days or 0) + leave_request.days
    if balance.used_days > balance.total_days:
        logger.warning(
            "Leave balance overdrawn on approval",
            extra={
                "leave_request_id": leave_request.id,
                "employee_id": leave_request.employee_id,
                "used_days": balance.used_days,
                "total_days": balance.total_days,
            }
        )
    return balance


def mark_leave_days(db: Session, leave_request: LeaveRequest) -> int:
    """Set attendance to leave for each date of the request, weekends included."""
    existing = {
        row.date: row
        for row in db.query(Attendance).filter(
            Attendance.employee_id == leave_request.employee_id,
            Attendance.date >= leave_request.start_date,
            Attendance.date <= leave_request.end_date
        )
    }

    marked = 0
    for day in iter_dates(leave_request.start_date, leave_request.end_date):
        record = existing.get(day)
        if record is not None:
            record.status = AttendanceStatus.LEAVE.value
        else:
            db.add(Attendance(
                employee_id=leave_request.employee_id,
                date=day,
                status=AttendanceStatus.LEAVE.value
            ))
        marked += 1
    return marked


def review_leave_request(
    db: Session,
    request_id: int,
    decision: Optional[str],
    reviewer: Employee,
    today: Optional[date] = None
) -> LeaveRequest:
    """Approve or reject a pending leave request and settle its effects."""
    ensure_admin_or_hr(reviewer)

    if decision not in REVIEW_DECISIONS:
        raise ValidationError("Invalid status", details={"allowed": list(REVIEW_DECISIONS)})

    leave_request = db.query(LeaveRequest).options(
        joinedload(LeaveRequest.leave_type)
    ).filter(LeaveRequest.id == request_id).first()

    if not leave_request:
        raise NotFoundError("Leave request not found")

    if leave_request.status != LeaveStatus.PENDING.value:
        raise InvalidStateError("Leave request has already been processed")

    try:
        leave_request.status = decision
        leave_request.reviewed_by = reviewer.id
        leave_request.reviewed_at = datetime.now(timezone.utc)

        if decision == LeaveStatus.APPROVED.value:
            apply_balance(db, leave_request, resolve_balance_year(leave_request, today))
            mark_leave_days(db, leave_request)

        db.commit()
    except Exception:
        db.rollback()
        logger.error("Leave settlement rolled back", extra={"leave_request_id": request_id}, exc_info=True)
        raise

    db.refresh(leave_request)
    logger.info(
        f"Leave request {decision}",
        extra={"leave_request_id": leave_request.id, "employee_id": leave_request.employee_id, "reviewed_by": reviewer.id}
    )
    return leave_request
