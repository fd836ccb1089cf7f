from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dayflow.database import get_db
from dayflow.models.employee import Employee
from dayflow.routers.auth_deps import get_current_user, require_admin_or_hr
from dayflow.schemas.employee import (
    Credentials, EmployeeCreate, EmployeeCreated, EmployeeEnvelope,
    EmployeeList, EmployeeResponse, EmployeeUpdate,
)
from dayflow.services import employee_service

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)


@router.get("", response_model=EmployeeList)
def list_employees(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return {"employees": employee_service.list_employees(db, include_inactive=include_inactive)}


@router.post("", response_model=EmployeeCreated, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin_or_hr)
):
    employee, credentials = employee_service.create_employee(db, current_user, payload.model_dump())
    return EmployeeCreated(
        employee=EmployeeResponse.model_validate(employee),
        credentials=Credentials(**credentials)
    )


@router.get("/{employee_id}", response_model=EmployeeEnvelope, response_model_exclude_unset=True)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return {"employee": employee_service.get_employee(db, current_user, employee_id)}


@router.patch("/{employee_id}", response_model=EmployeeEnvelope, response_model_exclude_unset=True)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    employee = employee_service.update_employee(
        db, current_user, employee_id, payload.model_dump(exclude_unset=True)
    )
    return {"employee": employee_service.get_employee(db, current_user, employee.id)}


@router.delete("/{employee_id}")
def deactivate_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin_or_hr)
):
    employee_service.deactivate_employee(db, current_user, employee_id)
    return {"success": True}
