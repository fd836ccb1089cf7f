from pydantic import BaseModel, ConfigDict, EmailStr
from datetime import date, datetime
from typing import List, Optional


class EmployeeCreate(BaseModel):
    # Business-required fields are checked by the service so the caller gets
    # a single "Required fields missing" error
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    joining_date: Optional[date] = None
    role: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class EmployeeUpdate(BaseModel):
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    profile_picture: Optional[str] = None
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    role: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    pan_number: Optional[str] = None
    aadhaar_number: Optional[str] = None
    resume_url: Optional[str] = None
    is_active: Optional[bool] = None


class EmployeeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    department: Optional[str] = None
    designation: Optional[str] = None
    profile_picture: Optional[str] = None
    joining_date: date
    is_active: bool


class EmployeeResponse(EmployeeSummary):
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    bank_name: Optional[str] = None
    ifsc_code: Optional[str] = None
    resume_url: Optional[str] = None
    must_change_password: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmployeeDetail(EmployeeResponse):
    # Absent from the payload when the caller may not see them
    bank_account_number: Optional[str] = None
    pan_number: Optional[str] = None
    aadhaar_number: Optional[str] = None


class Credentials(BaseModel):
    login_id: str
    temp_password: str


class EmployeeCreated(BaseModel):
    employee: EmployeeResponse
    credentials: Credentials


class EmployeeList(BaseModel):
    employees: List[EmployeeSummary]


class EmployeeEnvelope(BaseModel):
    employee: EmployeeDetail
