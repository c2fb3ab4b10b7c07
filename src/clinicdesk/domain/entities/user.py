"""User account entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ...core.utils.datetime_utils import get_current_timestamp
from ..enums.clinic import Role


@dataclass
class User:
    """A login account with a role and department."""

    user_id: str
    role: Role
    department: str
    created_at: datetime = field(default_factory=get_current_timestamp)
    id: Optional[str] = None

    def to_public_record(self) -> Dict[str, Any]:
        """Record safe to hand back to callers (never includes the password)."""
        return {
            "user_id": self.user_id,
            "role": self.role.value,
            "department": self.department,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        return cls(
            id=record.get("id"),
            user_id=record["user_id"],
            role=Role(record["role"]),
            department=record.get("department", ""),
            created_at=record.get("created_at") or get_current_timestamp(),
        )
