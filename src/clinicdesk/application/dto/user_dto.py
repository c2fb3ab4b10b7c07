"""User management and login DTOs."""

from dataclasses import dataclass
from typing import Any, Dict, List

from ...core.auth import Session
from ...domain.entities.user import User


@dataclass
class CreateUserRequest:
    """Request DTO for creating a user account."""

    user_id: str = ""
    password: str = ""
    role: str = ""
    department: str = ""


@dataclass
class CreateUserResponse:
    user: User
    message: str


@dataclass
class ChangePasswordRequest:
    """Request DTO for an admin password reset."""

    user_id: str = ""
    password: str = ""


@dataclass
class ChangePasswordResponse:
    user_id: str
    message: str


@dataclass
class LoginRequest:
    user_id: str = ""
    password: str = ""


@dataclass
class LoginResponse:
    """Opened session plus the views its role may open."""

    session: Session
    views: List[str]
    message: str

    @property
    def user(self) -> Dict[str, Any]:
        return self.session.user
