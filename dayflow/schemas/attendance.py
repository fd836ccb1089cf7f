from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import List, Optional


class AttendanceAction(BaseModel):
    action: Optional[str] = None  # "check_in" | "check_out"


class AttendanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    work_hours: float
    extra_hours: float
    break_minutes: int
    status: str


class AttendanceEnvelope(BaseModel):
    attendance: AttendanceResponse


class AttendanceList(BaseModel):
    attendance: List[AttendanceResponse]


class AttendanceSummary(BaseModel):
    employee_id: int
    month: int
    year: int
    working_days: int
    days_present: int
    days_absent: int
    days_on_leave: int
    half_days: int
    total_work_hours: float
    total_extra_hours: float
