from sqlalchemy import Column, Integer, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from dayflow.database import Base

class SalaryStructure(Base):
    """
    Versioned wage basis for an employee.
    The row with the latest effective_from is the current one; older rows are history.
    """
    __tablename__ = "salary_structures"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    wage = Column(Float, nullable=False, default=0.0)
    basic_salary_percentage = Column(Float, nullable=False, default=50.0)
    hra_percentage = Column(Float, nullable=False, default=50.0)  # of basic
    standard_allowance = Column(Float, nullable=False, default=0.0)
    performance_bonus = Column(Float, nullable=False, default=0.0)
    lta = Column(Float, nullable=False, default=0.0)
    fixed_allowance = Column(Float, nullable=False, default=0.0)
    pf_employee_percentage = Column(Float, nullable=False, default=12.0)  # of basic
    pf_employer_percentage = Column(Float, nullable=False, default=12.0)  # of basic
    professional_tax = Column(Float, nullable=False, default=200.0)
    effective_from = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="salary_structures")
