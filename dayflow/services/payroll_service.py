"""
Payroll Service Layer

Business logic for monthly payroll generation and payroll listing. The
router only maps HTTP to these functions.

Generation rules:
- one payslip per (employee, month, year), never overwritten
- employees without a salary structure are skipped
- attendance is counted over the true calendar month
- working days are calendar days (weekends included)
- each employee is committed on its own, so an interrupted batch is
  completed by simply running the generation again
"""
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dayflow.core.dates import days_in_month, month_bounds
from dayflow.core.exceptions import EmptyResultError, ValidationError
from dayflow.core.permissions import ensure_admin_or_hr
from dayflow.models.attendance import Attendance
from dayflow.models.employee import Employee
from dayflow.models.payroll import Payroll, PayrollStatus
from dayflow.services.payroll_calculator import AttendanceCounts, compute_payslip
from dayflow.services.salary_service import get_current_salary_structure

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 9999


def validate_period(month: Optional[int], year: Optional[int]) -> None:
    if month is None or year is None:
        raise ValidationError("Month and year are required")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12", details={"month": month})
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}", details={"year": year})


def get_attendance_counts(db: Session, employee_id: int, month: int, year: int) -> AttendanceCounts:
    first_day, last_day = month_bounds(year, month)
    statuses = [
        row.status
        for row in db.query(Attendance.status).filter(
            Attendance.employee_id == employee_id,
            Attendance.date >= first_day,
            Attendance.date <= last_day
        )
    ]
    return AttendanceCounts.from_statuses(statuses, working_days=days_in_month(year, month))


def payroll_exists(db: Session, employee_id: int, month: int, year: int) -> bool:
    return db.query(Payroll.id).filter(
        Payroll.employee_id == employee_id,
        Payroll.month == month,
        Payroll.year == year
    ).first() is not None


def _generate_for_employee(db: Session, employee: Employee, month: int, year: int) -> Optional[Payroll]:
    if payroll_exists(db, employee.id, month, year):
        return None

    structure = get_current_salary_structure(db, employee.id)
    if structure is None:
        logger.info("Skipping payroll: no salary structure", extra={"employee_id": employee.id})
        return None

    counts = get_attendance_counts(db, employee.id, month, year)
    figures = compute_payslip(structure, counts)

    payroll = Payroll(
        employee_id=employee.id,
        month=month,
        year=year,
        status=PayrollStatus.DRAFT.value,
        **figures.to_dict()
    )
    db.add(payroll)
    db.commit()
    db.refresh(payroll)
    return payroll


def generate_payroll(db: Session, caller: Employee, month: Optional[int], year: Optional[int]) -> List[Payroll]:
    """
    Generate draft payslips for every active employee for the period.

    Returns only the payslips created by this call; employees that already
    have one, lack a salary structure, or fail to persist are left out.
    """
    ensure_admin_or_hr(caller)
    validate_period(month, year)

    employees = db.query(Employee).filter(
        Employee.is_active.is_(True)
    ).order_by(Employee.id).all()

    if not employees:
        raise EmptyResultError("No active employees found")

    results: List[Payroll] = []
    for emp in employees:
        try:
            payroll = _generate_for_employee(db, emp, month, year)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Payroll generation failed for employee {emp.id}: {e}",
                extra={"employee_id": emp.id, "month": month, "year": year}
            )
            continue
        if payroll is not None:
            results.append(payroll)

    logger.info(
        "Payroll generated",
        extra={
            "month": month,
            "year": year,
            "generated": len(results),
            "active_employees": len(employees),
            "generated_by": caller.id,
        }
    )
    return results


def list_payroll(
    db: Session,
    caller: Employee,
    month: Optional[int] = None,
    year: Optional[int] = None,
    employee_id: Optional[int] = None
) -> List[Payroll]:
    ensure_admin_or_hr(caller)
    query = db.query(Payroll)
    if month:
        query = query.filter(Payroll.month == month)
    if year:
        query = query.filter(Payroll.year == year)
    if employee_id:
        query = query.filter(Payroll.employee_id == employee_id)
    return query.order_by(Payroll.year.desc(), Payroll.month.desc(), Payroll.id).all()
