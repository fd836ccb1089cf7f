from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from dayflow.database import Base

class LeaveType(Base):
    __tablename__ = "leave_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)  # e.g. "Paid Time Off", "Sick Leave"
    is_paid = Column(Boolean, default=True, nullable=False)
    max_days_per_year = Column(Integer, default=0, nullable=False)
    requires_attachment = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
