from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dayflow.database import Base
import enum

class PayrollStatus(str, enum.Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"

class Payroll(Base):
    """One payslip per employee per month. Money columns hold whole currency units."""
    __tablename__ = "payroll"
    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="uq_payroll_employee_period"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    working_days = Column(Integer, nullable=False)
    days_present = Column(Integer, nullable=False, default=0)
    paid_leave_days = Column(Integer, nullable=False, default=0)
    unpaid_leave_days = Column(Integer, nullable=False, default=0)

    basic_salary = Column(Integer, nullable=False, default=0)
    hra = Column(Integer, nullable=False, default=0)
    standard_allowance = Column(Integer, nullable=False, default=0)
    performance_bonus = Column(Integer, nullable=False, default=0)
    lta = Column(Integer, nullable=False, default=0)
    fixed_allowance = Column(Integer, nullable=False, default=0)
    gross_salary = Column(Integer, nullable=False, default=0)
    pf_employee = Column(Integer, nullable=False, default=0)
    pf_employer = Column(Integer, nullable=False, default=0)
    professional_tax = Column(Integer, nullable=False, default=0)
    total_deductions = Column(Integer, nullable=False, default=0)
    net_salary = Column(Integer, nullable=False, default=0)

    status = Column(String, default=PayrollStatus.DRAFT.value, nullable=False)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="payrolls")
