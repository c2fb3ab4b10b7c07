"""
ClinicDesk: clinic front-desk management service

Patient and doctor registration, a service price catalog, billing with
printable invoices, prescription previews, user management and role-based
views for admin, receptionist and doctor sessions.
"""

__version__ = "0.1.0"
__author__ = "ClinicDesk Team"
__description__ = "Clinic front-desk management service"
