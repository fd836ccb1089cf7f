"""
Salary Structure Service

Salary structures are an append-only history per employee. The latest
effective_from is the current wage basis; PATCH edits only that latest row.
"""
from datetime import date
from typing import Any, Dict, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from dayflow.core.exceptions import NotFoundError
from dayflow.models.employee import Employee
from dayflow.models.salary_structure import SalaryStructure

logger = logging.getLogger(__name__)

SALARY_FIELDS = (
    "wage",
    "basic_salary_percentage",
    "hra_percentage",
    "standard_allowance",
    "performance_bonus",
    "lta",
    "fixed_allowance",
    "pf_employee_percentage",
    "pf_employer_percentage",
    "professional_tax",
)


def get_current_salary_structure(db: Session, employee_id: int) -> Optional[SalaryStructure]:
    return db.query(SalaryStructure).filter(
        SalaryStructure.employee_id == employee_id
    ).order_by(
        SalaryStructure.effective_from.desc(),
        SalaryStructure.id.desc()
    ).first()


def _ensure_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def create_salary_structure(
    db: Session,
    employee_id: int,
    values: Dict[str, Any],
    effective_from: Optional[date] = None
) -> SalaryStructure:
    """Append a new structure effective today; earlier rows stay as history."""
    _ensure_employee(db, employee_id)
    structure = SalaryStructure(
        employee_id=employee_id,
        effective_from=effective_from or date.today(),
        **{k: v for k, v in values.items() if k in SALARY_FIELDS and v is not None}
    )
    db.add(structure)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(structure)
    logger.info("Salary structure created", extra={"employee_id": employee_id, "salary_structure_id": structure.id})
    return structure


def update_salary_structure(
    db: Session,
    employee_id: int,
    values: Dict[str, Any]
) -> Tuple[SalaryStructure, bool]:
    """
    Patch the current structure in place.

    Returns (structure, created); a structure is created when the employee
    has none yet.
    """
    current = get_current_salary_structure(db, employee_id)
    if current is None:
        return create_salary_structure(db, employee_id, values), True

    for field in SALARY_FIELDS:
        if field in values and values[field] is not None:
            setattr(current, field, values[field])
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(current)
    return current, False
