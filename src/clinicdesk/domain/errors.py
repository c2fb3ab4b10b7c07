"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class FormValidationError(DomainError):
    """Form input failed a validation rule.

    Carries the single user-visible message for the whole form.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class OperationFailedError(DomainError):
    """A persistence call failed; the cause is logged, not exposed."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message, "OPERATION_FAILED", {"operation": operation})


class InvalidCredentialsError(DomainError):
    """Login rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "INVALID_CREDENTIALS")


class PatientNotFoundError(DomainError):
    """Patient not found."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient with ID '{patient_id}' not found"
        super().__init__(message, "PATIENT_NOT_FOUND", {"patient_id": patient_id})


class DoctorNotFoundError(DomainError):
    """Doctor not found."""

    def __init__(self, doctor_id: str) -> None:
        message = f"Doctor with ID '{doctor_id}' not found"
        super().__init__(message, "DOCTOR_NOT_FOUND", {"doctor_id": doctor_id})


class BillNotFoundError(DomainError):
    """Bill not found."""

    def __init__(self, bill_number: str) -> None:
        message = f"Bill '{bill_number}' not found"
        super().__init__(message, "BILL_NOT_FOUND", {"bill_number": bill_number})


class UserNotFoundError(DomainError):
    """User account not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found.", "USER_NOT_FOUND", {"user_id": user_id})


class DuplicateUserError(DomainError):
    """User ID already taken."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User ID already exists.", "DUPLICATE_USER", {"user_id": user_id})


class DuplicatePatientError(DomainError):
    """Patient already exists."""

    def __init__(self, patient_id: str) -> None:
        message = f"Patient with ID '{patient_id}' already exists"
        super().__init__(message, "DUPLICATE_PATIENT", {"patient_id": patient_id})


class DuplicateDoctorError(DomainError):
    """Doctor already exists."""

    def __init__(self, doctor_id: str) -> None:
        message = f"Doctor with ID '{doctor_id}' already exists"
        super().__init__(message, "DUPLICATE_DOCTOR", {"doctor_id": doctor_id})


class ReceptionistAlreadyExistsError(DomainError):
    """A second receptionist account was requested."""

    def __init__(self) -> None:
        super().__init__("Only one Receptionist is allowed.", "RECEPTIONIST_EXISTS")
