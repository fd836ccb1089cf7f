"""
Single authorization capability used at every operation entry.
"""
from typing import Optional

from dayflow.core.exceptions import AuthenticationError, AuthorizationError
from dayflow.models.employee import Employee, EmployeeRole

ADMIN_OR_HR_ROLES = (EmployeeRole.ADMIN.value, EmployeeRole.HR.value)


def is_admin_or_hr(caller: Optional[Employee]) -> bool:
    return caller is not None and caller.role in ADMIN_OR_HR_ROLES


def ensure_admin_or_hr(caller: Optional[Employee]) -> Employee:
    if caller is None:
        raise AuthenticationError()
    if caller.role not in ADMIN_OR_HR_ROLES:
        raise AuthorizationError()
    return caller


def ensure_self_or_admin_or_hr(caller: Optional[Employee], employee_id: int) -> Employee:
    """Employees may act on their own records; admin/HR on anyone's."""
    if caller is None:
        raise AuthenticationError()
    if caller.id != employee_id and caller.role not in ADMIN_OR_HR_ROLES:
        raise AuthorizationError()
    return caller
