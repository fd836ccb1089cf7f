from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from dayflow.database import get_db
from dayflow.routers.auth_deps import require_admin_or_hr
from dayflow.schemas.salary import SalaryEnvelope, SalaryStructureInput
from dayflow.services import salary_service

router = APIRouter(
    prefix="/salary",
    tags=["salary"],
    dependencies=[Depends(require_admin_or_hr)]
)


@router.get("/{employee_id}", response_model=SalaryEnvelope)
def get_current_salary(employee_id: int, db: Session = Depends(get_db)):
    return {"salary": salary_service.get_current_salary_structure(db, employee_id)}


@router.post("/{employee_id}", response_model=SalaryEnvelope, status_code=status.HTTP_201_CREATED)
def create_salary_structure(
    employee_id: int,
    payload: SalaryStructureInput,
    db: Session = Depends(get_db)
):
    structure = salary_service.create_salary_structure(db, employee_id, payload.model_dump(exclude_unset=True))
    return {"salary": structure}


@router.patch("/{employee_id}", response_model=SalaryEnvelope)
def update_salary_structure(
    employee_id: int,
    payload: SalaryStructureInput,
    response: Response,
    db: Session = Depends(get_db)
):
    structure, created = salary_service.update_salary_structure(
        db, employee_id, payload.model_dump(exclude_unset=True)
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return {"salary": structure}
