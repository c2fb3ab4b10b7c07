"""Login, logout and session endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request

from ...application.access.role_router import views_for
from ...application.dto.user_dto import LoginRequest as LoginRequestDTO
from ...application.use_cases.login import LoginUseCase
from ...core.auth import Session
from ...core.structured_logger import audit_logger
from ..deps import (
    GatewayDep,
    SessionStoreDep,
    get_current_session,
    get_optional_session,
    get_session_token,
)
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.users import LoginRequest, SessionOut
from ..utils.responses import ok

router = APIRouter(prefix="/auth", tags=["Authentication"])

def _session_out(session: Session, include_token: bool = False) -> SessionOut:
    return SessionOut(
        token=session.token if include_token else None,
        user_id=session.user_id,
        role=session.role,
        department=session.user.get("department"),
        views=[view.value for view in views_for(session.role)],
    )


@router.post(
    "/login",
    response_model=ApiResponse[SessionOut],
    summary="Log in and open a session",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid User ID or password"},
        422: {"model": ErrorResponse, "description": "Missing credentials"},
    },
)
async def login(request: Request, body: LoginRequest, gateway: GatewayDep, sessions: SessionStoreDep):
    """Check credentials; the returned token goes in ``Authorization: Bearer``."""
    result = await LoginUseCase(gateway, sessions).execute(
        LoginRequestDTO(user_id=body.user_id, password=body.password)
    )
    return ok(request, data=_session_out(result.session, include_token=True), message=result.message)


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
    sessions: SessionStoreDep,
    token: Annotated[Optional[str], Depends(get_session_token)],
):
    sessions.logout(token)
    audit_logger.info("logout", user_id=session.user_id)
    return ok(request, data={"views": [view.value for view in views_for(None)]}, message="Logged out.")


@router.get("/session", response_model=ApiResponse[SessionOut])
async def current_session(
    request: Request,
    session: Annotated[Session, Depends(get_current_session)],
):
    return ok(request, data=_session_out(session), message="OK")


@router.get("/views", response_model=ApiResponse[SessionOut])
async def available_views(
    request: Request,
    session: Annotated[Optional[Session], Depends(get_optional_session)],
):
    """Views for the caller's role; ``login`` only when there is no session."""
    if session is None:
        return ok(request, data=SessionOut(views=[view.value for view in views_for(None)]), message="OK")
    return ok(request, data=_session_out(session), message="OK")
