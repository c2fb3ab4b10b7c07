"""
Role to view mapping.
"""

import pytest

from clinicdesk.application.access.role_router import View, can_access, views_for
from clinicdesk.domain.enums.clinic import Role


def test_admin_views_in_order():
    assert views_for(Role.ADMIN) == (
        View.USER_MANAGEMENT,
        View.DOCTOR_REGISTRATION,
        View.SERVICE_CATALOG,
        View.BILL_HISTORY,
    )


def test_receptionist_views_in_order():
    assert views_for("receptionist") == (View.PATIENT_REGISTRATION, View.BILLING, View.PRESCRIPTION)


def test_doctor_views_in_order():
    assert views_for("doctor") == (View.PRESCRIPTION, View.BILL_HISTORY)


@pytest.mark.parametrize("role", [None, "", "nurse"])
def test_anonymous_or_unknown_role_sees_login_only(role):
    assert views_for(role) == (View.LOGIN,)


def test_can_access_any_of_the_views():
    assert can_access("doctor", [View.BILLING, View.BILL_HISTORY])
    assert not can_access("doctor", [View.BILLING])
    assert not can_access(None, [View.BILL_HISTORY])


@pytest.mark.parametrize("view", [View.USER_MANAGEMENT, View.SERVICE_CATALOG, View.DOCTOR_REGISTRATION])
def test_doctor_never_sees_admin_views(view):
    assert not can_access("doctor", [view])
    assert not can_access(Role.DOCTOR, [view])
