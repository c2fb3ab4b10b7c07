"""User management use cases (admin only)."""

import logging
from dataclasses import asdict
from typing import List

from ...core.exceptions import DatabaseError, UniqueConstraintError
from ...core.structured_logger import audit_logger
from ...core.utils.crypto_utils import hash_password
from ...domain.entities.user import User
from ...domain.enums.clinic import Role, Table
from ...domain.errors import (
    DuplicateUserError,
    OperationFailedError,
    ReceptionistAlreadyExistsError,
    UserNotFoundError,
)
from ..dto.user_dto import (
    ChangePasswordRequest,
    ChangePasswordResponse,
    CreateUserRequest,
    CreateUserResponse,
)
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, enum_value, required

logger = logging.getLogger(__name__)

PUBLIC_USER_FIELDS = ("id", "user_id", "role", "department", "created_at")

USER_FORM = FormValidator(
    required("user_id", "password", "role", "department"),
    enum_value("role", Role, "Please select a valid role."),
)
CHANGE_PASSWORD_FORM = FormValidator(
    required("user_id", "password", message="User ID and new password are required."),
)


class CreateUserUseCase:
    """Create a login account.

    Only one receptionist may exist. The pre-check gives the friendly
    message; the gateway's uniqueness constraint settles concurrent creates.
    """

    def __init__(self, gateway: DataGateway, hash_iterations: int = 120_000):
        self._gateway = gateway
        self._hash_iterations = hash_iterations

    async def execute(self, request: CreateUserRequest) -> CreateUserResponse:
        USER_FORM.validate(asdict(request))
        role = Role(request.role)
        user_id = request.user_id.strip()

        try:
            if role == Role.RECEPTIONIST:
                existing = await self._gateway.select(
                    Table.USERS, {"role": Role.RECEPTIONIST.value}, projection=["user_id"]
                )
                if existing:
                    raise ReceptionistAlreadyExistsError()

            stored = await self._gateway.insert(
                Table.USERS,
                {
                    "user_id": user_id,
                    "password": hash_password(request.password, self._hash_iterations),
                    "role": role.value,
                    "department": request.department.strip(),
                },
            )
        except UniqueConstraintError as e:
            if e.field == "role":
                raise ReceptionistAlreadyExistsError()
            raise DuplicateUserError(user_id)
        except DatabaseError as e:
            logger.error(f"User insert failed: {e}")
            raise OperationFailedError("Failed to add user.", "create_user")

        user = User.from_record(stored)
        audit_logger.info("user_created", user_id=user.user_id, role=user.role.value)
        return CreateUserResponse(user=user, message="User created successfully!")


class ChangePasswordUseCase:
    """Admin reset of another account's password."""

    def __init__(self, gateway: DataGateway, hash_iterations: int = 120_000):
        self._gateway = gateway
        self._hash_iterations = hash_iterations

    async def execute(self, request: ChangePasswordRequest) -> ChangePasswordResponse:
        CHANGE_PASSWORD_FORM.validate(asdict(request))
        user_id = request.user_id.strip()

        try:
            matched = await self._gateway.update(
                Table.USERS,
                {"password": hash_password(request.password, self._hash_iterations)},
                {"user_id": user_id},
            )
        except DatabaseError as e:
            logger.error(f"Password update failed: {e}")
            raise OperationFailedError("Failed to change password.", "change_password")

        if matched == 0:
            raise UserNotFoundError(user_id)

        audit_logger.info("password_changed", user_id=user_id)
        return ChangePasswordResponse(user_id=user_id, message="Password changed successfully.")


class ListUsersUseCase:
    """All accounts without their password hashes."""

    def __init__(self, gateway: DataGateway):
        self._gateway = gateway

    async def execute(self) -> List[User]:
        try:
            records = await self._gateway.select(
                Table.USERS, projection=PUBLIC_USER_FIELDS, order_by="user_id"
            )
        except DatabaseError as e:
            logger.error(f"User listing failed: {e}")
            raise OperationFailedError("Failed to load users.", "list_users")
        return [User.from_record(record) for record in records]


async def ensure_admin(
    gateway: DataGateway,
    user_id: str,
    password: str,
    department: str = "Administration",
    hash_iterations: int = 120_000,
) -> bool:
    """Seed an admin account when none exists. Returns True when one was created."""
    admins = await gateway.select(Table.USERS, {"role": Role.ADMIN.value}, projection=["user_id"])
    if admins:
        return False
    try:
        await gateway.insert(
            Table.USERS,
            {
                "user_id": user_id,
                "password": hash_password(password, hash_iterations),
                "role": Role.ADMIN.value,
                "department": department,
            },
        )
    except UniqueConstraintError:
        logger.warning(f"Bootstrap admin '{user_id}' not created: user ID already taken")
        return False
    audit_logger.info("bootstrap_admin_created", user_id=user_id)
    return True
