from fastapi import APIRouter
from dayflow.routers import auth, employees, salary, attendance, leave, payroll

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(salary.router, tags=["Salary"])
api_router.include_router(attendance.router, tags=["Attendance"])
api_router.include_router(leave.router, tags=["Leave"])
api_router.include_router(payroll.router, tags=["Payroll"])
