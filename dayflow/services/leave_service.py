"""
Leave request intake and read models (requests, types, balances).
Review and settlement live in leave_settlement.
"""
from datetime import date
from typing import List, Optional
import logging

from sqlalchemy.orm import Session, joinedload

from dayflow.core.dates import inclusive_day_count
from dayflow.core.exceptions import NotFoundError, ValidationError
from dayflow.core.permissions import ensure_self_or_admin_or_hr, is_admin_or_hr
from dayflow.core.security import sanitize_input
from dayflow.models.employee import Employee
from dayflow.models.leave_balance import LeaveBalance
from dayflow.models.leave_request import LeaveRequest, LeaveStatus
from dayflow.models.leave_type import LeaveType
from dayflow.services.leave_settlement import resolve_balance_year

logger = logging.getLogger(__name__)


def create_leave_request(
    db: Session,
    employee: Employee,
    leave_type_id: int,
    start_date: date,
    end_date: date,
    reason: Optional[str] = None,
    attachment_url: Optional[str] = None,
    today: Optional[date] = None
) -> LeaveRequest:
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")

    leave_type = db.get(LeaveType, leave_type_id)
    if not leave_type:
        raise NotFoundError("Leave type not found")

    if leave_type.requires_attachment and not attachment_url:
        raise ValidationError("Attachment is required for this leave type")

    days = inclusive_day_count(start_date, end_date)

    new_request = LeaveRequest(
        employee_id=employee.id,
        leave_type_id=leave_type_id,
        start_date=start_date,
        end_date=end_date,
        days=days,
        reason=sanitize_input(reason),
        attachment_url=attachment_url,
        status=LeaveStatus.PENDING.value
    )

    # Advisory check only; approval does not re-check the balance
    balance = db.query(LeaveBalance).filter(
        LeaveBalance.employee_id == employee.id,
        LeaveBalance.leave_type_id == leave_type_id,
        LeaveBalance.year == resolve_balance_year(new_request, today)
    ).first()
    if balance is not None and days > balance.remaining_days:
        raise ValidationError(
            f"Insufficient leave balance. You have {balance.remaining_days:g} days remaining.",
            details={"requested": days, "remaining": balance.remaining_days}
        )

    db.add(new_request)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_request)
    logger.info("Leave requested", extra={"leave_request_id": new_request.id, "employee_id": employee.id, "days": days})
    return new_request


def list_leave_requests(
    db: Session,
    caller: Employee,
    status: Optional[str] = None,
    employee_id: Optional[int] = None
) -> List[LeaveRequest]:
    query = db.query(LeaveRequest).options(
        joinedload(LeaveRequest.leave_type),
        joinedload(LeaveRequest.employee)
    )
    if status:
        query = query.filter(LeaveRequest.status == status)

    if not is_admin_or_hr(caller):
        # Employees only ever see their own requests
        query = query.filter(LeaveRequest.employee_id == caller.id)
    elif employee_id:
        query = query.filter(LeaveRequest.employee_id == employee_id)

    return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()


def list_leave_types(db: Session) -> List[LeaveType]:
    return db.query(LeaveType).order_by(LeaveType.name).all()


def list_leave_balances(
    db: Session,
    caller: Employee,
    employee_id: Optional[int] = None,
    year: Optional[int] = None
) -> List[LeaveBalance]:
    target_id = employee_id or caller.id
    ensure_self_or_admin_or_hr(caller, target_id)
    year = year or date.today().year
    return db.query(LeaveBalance).options(
        joinedload(LeaveBalance.leave_type)
    ).filter(
        LeaveBalance.employee_id == target_id,
        LeaveBalance.year == year
    ).order_by(LeaveBalance.leave_type_id).all()


def seed_leave_balances(db: Session, employee: Employee, year: int) -> List[LeaveBalance]:
    """One balance per leave type, sized to the type's yearly allowance. Caller commits."""
    balances = [
        LeaveBalance(
            employee_id=employee.id,
            leave_type_id=leave_type.id,
            year=year,
            total_days=leave_type.max_days_per_year,
            used_days=0
        )
        for leave_type in db.query(LeaveType).all()
    ]
    db.add_all(balances)
    return balances
