from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional


class PayrollGenerateRequest(BaseModel):
    # Optional so a missing value surfaces as "Month and year are required"
    month: Optional[int] = None
    year: Optional[int] = None


class PayrollResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    month: int
    year: int
    working_days: int
    days_present: int
    paid_leave_days: int
    unpaid_leave_days: int
    basic_salary: int
    hra: int
    standard_allowance: int
    performance_bonus: int
    lta: int
    fixed_allowance: int
    gross_salary: int
    pf_employee: int
    pf_employer: int
    professional_tax: int
    total_deductions: int
    net_salary: int
    status: str
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class PayrollGenerated(BaseModel):
    generated: int
    payroll: List[PayrollResponse]


class PayrollList(BaseModel):
    payroll: List[PayrollResponse]
