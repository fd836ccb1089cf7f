from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Optional


class SalaryStructureInput(BaseModel):
    wage: Optional[float] = Field(default=None, ge=0)
    basic_salary_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    hra_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    standard_allowance: Optional[float] = Field(default=None, ge=0)
    performance_bonus: Optional[float] = Field(default=None, ge=0)
    lta: Optional[float] = Field(default=None, ge=0)
    fixed_allowance: Optional[float] = Field(default=None, ge=0)
    pf_employee_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    pf_employer_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    professional_tax: Optional[float] = Field(default=None, ge=0)


class SalaryStructureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    wage: float
    basic_salary_percentage: float
    hra_percentage: float
    standard_allowance: float
    performance_bonus: float
    lta: float
    fixed_allowance: float
    pf_employee_percentage: float
    pf_employer_percentage: float
    professional_tax: float
    effective_from: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SalaryEnvelope(BaseModel):
    salary: Optional[SalaryStructureResponse] = None
