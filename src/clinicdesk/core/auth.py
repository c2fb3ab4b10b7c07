"""
Session store for logged-in users.

Sessions are held in process memory only: a restart logs everybody out.
Each session maps an opaque token to the authenticated user record (never
including the password) and expires after a period of inactivity.
"""

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from .utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """One authenticated client session."""

    token: str
    user: Dict[str, Any]
    created_at: datetime = field(default_factory=get_current_timestamp)
    last_seen: datetime = field(default_factory=get_current_timestamp)

    @property
    def user_id(self) -> str:
        return self.user.get("user_id", "")

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role")


class SessionStore:
    """Token -> Session mapping with idle expiry."""

    def __init__(
        self,
        ttl_minutes: int = 480,
        clock: Callable[[], datetime] = get_current_timestamp,
    ):
        self._sessions: Dict[str, Session] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def login(self, user: Dict[str, Any]) -> Session:
        """Open a session for ``user`` and return it."""
        public_user = {k: v for k, v in user.items() if k != "password"}
        now = self._clock()
        self._evict_expired(now)
        session = Session(
            token=secrets.token_urlsafe(32),
            user=public_user,
            created_at=now,
            last_seen=now,
        )
        self._sessions[session.token] = session
        logger.debug(f"Session opened for user: {session.user_id}")
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for ``token`` and refresh its idle timer."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        now = self._clock()
        if self._is_expired(session, now):
            del self._sessions[token]
            logger.info(f"Session expired for user: {session.user_id}")
            return None
        session.last_seen = now
        return session

    def logout(self, token: Optional[str]) -> bool:
        """Drop the session; returns False when there was nothing to drop."""
        if not token:
            return False
        return self._sessions.pop(token, None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def _is_expired(self, session: Session, now: datetime) -> bool:
        return now - session.last_seen > self._ttl

    def _evict_expired(self, now: datetime) -> None:
        expired = [token for token, session in self._sessions.items() if self._is_expired(session, now)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info(f"Evicted {len(expired)} expired session(s)")


def extract_token(authorization: Optional[str], session_header: Optional[str]) -> Optional[str]:
    """Pick the session token from ``X-Session-Token`` or ``Authorization: Bearer``."""
    if session_header:
        return session_header.strip()
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return None

