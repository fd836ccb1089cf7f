"""
Bootstrap a fresh database: default leave types and one admin account.

    python -m scripts.seed_admin
"""
import os
from datetime import date

from dayflow.database import SessionLocal, init_db
from dayflow.models.employee import Employee, EmployeeRole
from dayflow.models.leave_type import LeaveType
from dayflow.services import auth as auth_service
from dayflow.services.leave_service import seed_leave_balances

DEFAULT_LEAVE_TYPES = [
    {"name": "Paid Time Off", "is_paid": True, "max_days_per_year": 24, "requires_attachment": False},
    {"name": "Sick Leave", "is_paid": True, "max_days_per_year": 7, "requires_attachment": True},
    {"name": "Unpaid Leave", "is_paid": False, "max_days_per_year": 30, "requires_attachment": False},
]

ADMIN_LOGIN_ID = os.getenv("ADMIN_LOGIN_ID", "DFADMIN00000001")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@dayflow.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "ChangeMe123!")


def seed():
    init_db()
    db = SessionLocal()
    try:
        # 1. Leave type catalog
        for values in DEFAULT_LEAVE_TYPES:
            if not db.query(LeaveType).filter(LeaveType.name == values["name"]).first():
                db.add(LeaveType(**values))
                print(f"Created leave type: {values['name']}")
        db.commit()

        # 2. Admin account
        admin = db.query(Employee).filter(Employee.login_id == ADMIN_LOGIN_ID).first()
        if not admin:
            admin = Employee(
                login_id=ADMIN_LOGIN_ID,
                email=ADMIN_EMAIL,
                hashed_password=auth_service.get_password_hash(ADMIN_PASSWORD),
                first_name="System",
                last_name="Admin",
                role=EmployeeRole.ADMIN.value,
                joining_date=date.today(),
                must_change_password=True,
                is_active=True
            )
            db.add(admin)
            db.flush()
            seed_leave_balances(db, admin, date.today().year)
            db.commit()
            print(f"Admin {ADMIN_LOGIN_ID} created. Change the password after first login.")
        else:
            print(f"Admin {ADMIN_LOGIN_ID} already exists.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
