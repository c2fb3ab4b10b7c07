"""Role to view mapping.

Each role sees a fixed, ordered set of top-level views. A client without a
session sees only the login view.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple, Union

from ...domain.enums.clinic import Role


class View(str, Enum):
    LOGIN = "login"
    USER_MANAGEMENT = "user_management"
    DOCTOR_REGISTRATION = "doctor_registration"
    SERVICE_CATALOG = "service_catalog"
    BILL_HISTORY = "bill_history"
    PATIENT_REGISTRATION = "patient_registration"
    BILLING = "billing"
    PRESCRIPTION = "prescription"


ROLE_VIEWS: Dict[Role, Tuple[View, ...]] = {
    Role.ADMIN: (
        View.USER_MANAGEMENT,
        View.DOCTOR_REGISTRATION,
        View.SERVICE_CATALOG,
        View.BILL_HISTORY,
    ),
    Role.RECEPTIONIST: (
        View.PATIENT_REGISTRATION,
        View.BILLING,
        View.PRESCRIPTION,
    ),
    Role.DOCTOR: (
        View.PRESCRIPTION,
        View.BILL_HISTORY,
    ),
}

ANONYMOUS_VIEWS: Tuple[View, ...] = (View.LOGIN,)


def views_for(role: Optional[Union[Role, str]]) -> Tuple[View, ...]:
    """Ordered views for ``role``; ``None`` or an unknown role gets the login view."""
    if role is None:
        return ANONYMOUS_VIEWS
    try:
        role = Role(role)
    except ValueError:
        return ANONYMOUS_VIEWS
    return ROLE_VIEWS[role]


def can_access(role: Optional[Union[Role, str]], views: Iterable[View]) -> bool:
    """True when ``role`` may open at least one of ``views``."""
    allowed = views_for(role)
    return any(view in allowed for view in views)
