from sqlalchemy import Column, Integer, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from dayflow.database import Base

class LeaveBalance(Base):
    __tablename__ = "leave_balances"
    __table_args__ = (
        UniqueConstraint("employee_id", "leave_type_id", "year", name="uq_leave_balance_employee_type_year"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    leave_type_id = Column(Integer, ForeignKey("leave_types.id"), index=True, nullable=False)
    year = Column(Integer, nullable=False)
    total_days = Column(Float, default=0.0, nullable=False)
    # Not capped at total_days; approvals write through without a guard
    used_days = Column(Float, default=0.0, nullable=False)

    employee = relationship("Employee", back_populates="leave_balances")
    leave_type = relationship("LeaveType")

    @property
    def remaining_days(self) -> float:
        return self.total_days - self.used_days
