"""
Attendance check-in/out and reporting.
"""
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from dayflow.core.config import settings
from dayflow.core.dates import month_bounds, working_days_in_month
from dayflow.core.exceptions import InvalidStateError, ValidationError
from dayflow.core.permissions import ensure_self_or_admin_or_hr, is_admin_or_hr
from dayflow.models.attendance import Attendance, AttendanceStatus
from dayflow.models.employee import Employee
from dayflow.services.payroll_service import validate_period

logger = logging.getLogger(__name__)

CHECK_IN = "check_in"
CHECK_OUT = "check_out"


def _round_hours(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def get_day_record(db: Session, employee_id: int, day: date) -> Optional[Attendance]:
    return db.query(Attendance).filter(
        Attendance.employee_id == employee_id,
        Attendance.date == day
    ).first()


def check_in(db: Session, employee: Employee, now: Optional[datetime] = None) -> Tuple[Attendance, bool]:
    """Returns (record, created)."""
    now = now or datetime.now(timezone.utc)
    existing = get_day_record(db, employee.id, now.date())

    if existing is not None and existing.check_in:
        raise InvalidStateError("Already checked in today")

    created = existing is None
    if created:
        record = Attendance(
            employee_id=employee.id,
            date=now.date(),
            check_in=now,
            status=AttendanceStatus.PRESENT.value
        )
        db.add(record)
    else:
        record = existing
        record.check_in = now
        record.status = AttendanceStatus.PRESENT.value

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    logger.info("Checked in", extra={"employee_id": employee.id, "attendance_id": record.id})
    return record, created


def check_out(db: Session, employee: Employee, now: Optional[datetime] = None) -> Attendance:
    now = now or datetime.now(timezone.utc)
    record = get_day_record(db, employee.id, now.date())

    if record is None or not record.check_in:
        raise InvalidStateError("Not checked in yet")
    if record.check_out:
        raise InvalidStateError("Already checked out today")

    work_hours = (now - _as_utc(record.check_in)).total_seconds() / 3600
    record.check_out = now
    record.work_hours = _round_hours(work_hours)
    record.extra_hours = _round_hours(max(0.0, work_hours - settings.standard_work_hours))

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    logger.info("Checked out", extra={"employee_id": employee.id, "work_hours": record.work_hours})
    return record


def record_action(db: Session, employee: Employee, action: Optional[str], now: Optional[datetime] = None) -> Tuple[Attendance, bool]:
    if action == CHECK_IN:
        return check_in(db, employee, now)
    if action == CHECK_OUT:
        return check_out(db, employee, now), False
    raise ValidationError("Invalid action", details={"allowed": [CHECK_IN, CHECK_OUT]})


def list_attendance(
    db: Session,
    caller: Employee,
    day: Optional[date] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
    employee_id: Optional[int] = None
) -> List[Attendance]:
    query = db.query(Attendance)
    if day:
        query = query.filter(Attendance.date == day)
    if month is not None and year is not None:
        validate_period(month, year)
        first_day, last_day = month_bounds(year, month)
        query = query.filter(Attendance.date >= first_day, Attendance.date <= last_day)

    if not is_admin_or_hr(caller):
        query = query.filter(Attendance.employee_id == caller.id)
    elif employee_id:
        query = query.filter(Attendance.employee_id == employee_id)

    return query.order_by(Attendance.date.desc(), Attendance.id.desc()).all()


def attendance_summary(
    db: Session,
    caller: Employee,
    month: int,
    year: int,
    employee_id: Optional[int] = None
) -> Dict[str, Any]:
    """Per-status counts for a month, against Monday-Friday working days."""
    target_id = employee_id or caller.id
    ensure_self_or_admin_or_hr(caller, target_id)
    validate_period(month, year)

    first_day, last_day = month_bounds(year, month)
    rows = db.query(Attendance).filter(
        Attendance.employee_id == target_id,
        Attendance.date >= first_day,
        Attendance.date <= last_day
    ).all()

    counts = {status.value: 0 for status in AttendanceStatus}
    for row in rows:
        counts[row.status] = counts.get(row.status, 0) + 1

    return {
        "employee_id": target_id,
        "month": month,
        "year": year,
        "working_days": working_days_in_month(year, month),
        "days_present": counts[AttendanceStatus.PRESENT.value],
        "days_absent": counts[AttendanceStatus.ABSENT.value],
        "days_on_leave": counts[AttendanceStatus.LEAVE.value],
        "half_days": counts[AttendanceStatus.HALF_DAY.value],
        "total_work_hours": _round_hours(sum(r.work_hours or 0.0 for r in rows)),
        "total_extra_hours": _round_hours(sum(r.extra_hours or 0.0 for r in rows)),
    }
