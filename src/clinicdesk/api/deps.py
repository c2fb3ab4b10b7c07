"""FastAPI dependency providers.

The gateway and session store are created once per app (see ``app.py``)
and read from ``app.state``.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends, Header, Request

from ..application.access.role_router import View, can_access
from ..application.ports.data_gateway import DataGateway
from ..core.auth import Session, SessionStore, extract_token
from ..core.config import Settings, get_settings
from ..core.structured_logger import audit_logger
from .errors import ForbiddenError, UnauthorizedError


def get_gateway(request: Request) -> DataGateway:
    """Get the data gateway bound to this app."""
    return request.app.state.gateway


def get_session_store(request: Request) -> SessionStore:
    """Get the session store bound to this app."""
    return request.app.state.sessions


def get_app_settings() -> Settings:
    return get_settings()


def get_session_token(
    authorization: Annotated[Optional[str], Header()] = None,
    x_session_token: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """Token from ``X-Session-Token`` or ``Authorization: Bearer``."""
    return extract_token(authorization, x_session_token)


def get_optional_session(
    sessions: Annotated[SessionStore, Depends(get_session_store)],
    token: Annotated[Optional[str], Depends(get_session_token)],
) -> Optional[Session]:
    return sessions.get(token)


def get_current_session(
    session: Annotated[Optional[Session], Depends(get_optional_session)],
) -> Session:
    """Require a live session."""
    if session is None:
        raise UnauthorizedError()
    return session


def require_view(*views: View) -> Callable[..., Session]:
    """Dependency factory: the session's role must open one of ``views``."""
    allowed = tuple(views)

    def dependency(
        request: Request,
        session: Annotated[Session, Depends(get_current_session)],
    ) -> Session:
        if not can_access(session.role, allowed):
            audit_logger.warning(
                "view_denied",
                user_id=session.user_id,
                role=session.role,
                path=request.url.path,
                views=[view.value for view in allowed],
            )
            raise ForbiddenError(details={"views": [view.value for view in allowed]})
        return session

    return dependency


GatewayDep = Annotated[DataGateway, Depends(get_gateway)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
