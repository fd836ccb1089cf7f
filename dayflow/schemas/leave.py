from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import List, Optional


class LeaveTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_paid: bool
    max_days_per_year: int
    requires_attachment: bool


class LeaveEmployee(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    profile_picture: Optional[str] = None
    department: Optional[str] = None


class LeaveRequestCreate(BaseModel):
    leave_type_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None
    attachment_url: Optional[str] = None


class LeaveReview(BaseModel):
    # Plain string: unknown decisions are rejected by the settlement service
    status: Optional[str] = None


class LeaveRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    days: int
    reason: Optional[str] = None
    attachment_url: Optional[str] = None
    status: str
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    leave_type: Optional[LeaveTypeResponse] = None
    employee: Optional[LeaveEmployee] = None


class LeaveBalanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type_id: int
    year: int
    total_days: float
    used_days: float
    remaining_days: float
    leave_type: Optional[LeaveTypeResponse] = None


class LeaveRequestEnvelope(BaseModel):
    leave_request: LeaveRequestResponse


class LeaveRequestList(BaseModel):
    leave_requests: List[LeaveRequestResponse]


class LeaveTypeList(BaseModel):
    leave_types: List[LeaveTypeResponse]


class LeaveBalanceList(BaseModel):
    leave_balances: List[LeaveBalanceResponse]
