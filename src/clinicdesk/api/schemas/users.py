"""
User management and session schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ...domain.entities.user import User


class CreateUserRequest(BaseModel):
    user_id: str = Field("", description="Login ID")
    password: str = Field("", description="Initial password")
    role: str = Field("", description="admin, receptionist or doctor")
    department: str = Field("", description="Department name")


class ChangePasswordRequest(BaseModel):
    password: str = Field("", description="New password")


class UserOut(BaseModel):
    """Account as shown to admins; never carries the password."""

    user_id: str
    role: str
    department: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        record = user.to_public_record()
        return cls(**record)


class LoginRequest(BaseModel):
    user_id: str = Field("", description="Login ID")
    password: str = Field("", description="Password")


class SessionOut(BaseModel):
    token: Optional[str] = None
    user_id: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    views: List[str]
