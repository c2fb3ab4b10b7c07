"""Login use case."""

import logging
from dataclasses import asdict

from ...core.auth import SessionStore
from ...core.exceptions import AuthenticationError, DatabaseError, RecordNotFoundError
from ...core.structured_logger import audit_logger
from ...domain.errors import InvalidCredentialsError, OperationFailedError
from ..access.role_router import views_for
from ..dto.user_dto import LoginRequest, LoginResponse
from ..ports.data_gateway import DataGateway
from ..utils.form_validation import FormValidator, required

logger = logging.getLogger(__name__)

LOGIN_FORM = FormValidator(
    required("user_id", "password", message="User ID and password are required."),
)


class LoginUseCase:
    """Check credentials and open a session."""

    def __init__(self, gateway: DataGateway, sessions: SessionStore):
        self._gateway = gateway
        self._sessions = sessions

    async def execute(self, request: LoginRequest) -> LoginResponse:
        LOGIN_FORM.validate(asdict(request))
        user_id = request.user_id.strip()

        try:
            user = await self._gateway.authenticate(user_id, request.password)
        except RecordNotFoundError:
            audit_logger.warning("login_failed", user_id=user_id, reason="unknown_user")
            raise InvalidCredentialsError("Invalid User ID")
        except AuthenticationError:
            audit_logger.warning("login_failed", user_id=user_id, reason="bad_password")
            raise InvalidCredentialsError("Invalid Password")
        except DatabaseError as e:
            logger.error(f"Login lookup failed: {e}")
            raise OperationFailedError("Login failed.", "login")

        session = self._sessions.login(user)
        audit_logger.info("login_succeeded", user_id=session.user_id, role=session.role)
        return LoginResponse(
            session=session,
            views=[view.value for view in views_for(session.role)],
            message="Login successful.",
        )
