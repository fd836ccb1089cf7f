# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    employee, salary_structure, attendance,
    leave_type, leave_balance, leave_request,
    payroll,
)

# Explicit class exports for cleaner imports
from .employee import Employee, EmployeeRole
from .salary_structure import SalaryStructure
from .attendance import Attendance, AttendanceStatus
from .leave_type import LeaveType
from .leave_balance import LeaveBalance
from .leave_request import LeaveRequest, LeaveStatus
from .payroll import Payroll, PayrollStatus

__all__ = [
    "Employee",
    "EmployeeRole",
    "SalaryStructure",
    "Attendance",
    "AttendanceStatus",
    "LeaveType",
    "LeaveBalance",
    "LeaveRequest",
    "LeaveStatus",
    "Payroll",
    "PayrollStatus",
]
