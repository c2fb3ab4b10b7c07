"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .adapters.db.memory.gateway import InMemoryDataGateway
from .api.errors import APIError
from .api.routers import auth, bills, doctors, health, patients, prescriptions, services, users
from .api.utils.responses import fail
from .application.ports.data_gateway import DataGateway
from .application.use_cases.manage_users import ensure_admin
from .core.auth import SessionStore
from .core.config import Settings, get_settings
from .core.structured_logger import configure_logging
from .domain.errors import (
    BillNotFoundError,
    DoctorNotFoundError,
    DomainError,
    DuplicateDoctorError,
    DuplicatePatientError,
    DuplicateUserError,
    FormValidationError,
    InvalidCredentialsError,
    OperationFailedError,
    PatientNotFoundError,
    ReceptionistAlreadyExistsError,
    UserNotFoundError,
)
from .middleware.request_middleware import PerformanceMiddleware, RequestIDMiddleware

logger = logging.getLogger("clinicdesk")

DOMAIN_ERROR_STATUS: Dict[Type[DomainError], int] = {
    FormValidationError: 422,
    InvalidCredentialsError: 401,
    PatientNotFoundError: 404,
    DoctorNotFoundError: 404,
    BillNotFoundError: 404,
    UserNotFoundError: 404,
    DuplicatePatientError: 409,
    DuplicateDoctorError: 409,
    DuplicateUserError: 409,
    ReceptionistAlreadyExistsError: 409,
    OperationFailedError: 500,
}


def domain_error_status(exc: DomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in DOMAIN_ERROR_STATUS:
            return DOMAIN_ERROR_STATUS[error_type]
    return 400


async def build_gateway(settings: Settings) -> DataGateway:
    """Gateway for the configured backend."""
    if settings.database.backend == "memory":
        logger.info("Using in-memory data gateway")
        return InMemoryDataGateway()

    from .adapters.db.mongo.gateway import connect_mongo_gateway

    return await connect_mongo_gateway(settings.database)


def create_app(gateway: Optional[DataGateway] = None) -> FastAPI:
    """Create and configure FastAPI application.

    ``gateway`` overrides the configured backend (used by tests).
    """
    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.app_env})")
        try:
            app.state.gateway = gateway if gateway is not None else await build_gateway(settings)
        except Exception as e:
            logger.error(f"Database connection failed: {type(e).__name__}: {e}")
            raise
        logger.info("Database connection established")

        if settings.bootstrap.enabled:
            created = await ensure_admin(
                app.state.gateway,
                settings.bootstrap.admin_user_id,
                settings.bootstrap.admin_password,
                settings.bootstrap.admin_department,
                settings.security.password_hash_iterations,
            )
            if created:
                logger.info(f"Seeded admin account '{settings.bootstrap.admin_user_id}'")

        yield

        logger.info(f"Shutting down {settings.app_name}")
        app.state.sessions.clear()
        await app.state.gateway.close()

    app = FastAPI(
        title=settings.app_name,
        description="Clinic desk API: registration, service catalog, billing and prescriptions",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.sessions = SessionStore(ttl_minutes=settings.security.session_ttl_minutes)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=False,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
        expose_headers=["X-Request-ID", "X-Process-Time"],
        max_age=600,
    )
    app.add_middleware(PerformanceMiddleware)
    # Registered last so it runs first and the request id is set for everything below
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(patients.router)
    app.include_router(doctors.router)
    app.include_router(services.router)
    app.include_router(bills.router)
    app.include_router(prescriptions.router)
    app.include_router(users.router)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = domain_error_status(exc)
        if status_code >= 500:
            logger.error(f"DomainError: {exc.error_code} {exc.message} | details={exc.details}")
        return fail(
            request,
            status_code,
            error=exc.error_code or "DOMAIN_ERROR",
            message=exc.message,
            details=exc.details,
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        req_id = getattr(request.state, "request_id", None)
        logger.warning(f"APIError: {exc.code} ({exc.http_status}) {exc.message} | request_id={req_id}")
        return fail(request, exc.http_status, error=exc.code, message=exc.message, details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def pydantic_error_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        error_messages = []
        for error in error_details:
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            error_messages.append(f"{loc}: {error.get('msg', 'Validation error')}")
        return fail(
            request,
            422,
            error="INVALID_INPUT",
            message=f"Input validation failed: {'; '.join(error_messages)}",
            details={
                "errors": [
                    {"loc": list(error.get("loc", [])), "msg": error.get("msg"), "type": error.get("type")}
                    for error in error_details
                ],
                "path": request.url.path,
            },
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.exception(f"Unhandled error: {type(exc).__name__} | request_id={req_id}")
        return fail(
            request,
            500,
            error="INTERNAL_ERROR",
            message="An unexpected error has occurred. Please try again later.",
        )

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "login": "POST /auth/login",
                "logout": "POST /auth/logout",
                "views": "GET /auth/views",
                "register_patient": "POST /patients",
                "register_doctor": "POST /doctors",
                "services": "GET|POST /services",
                "preview_bill": "POST /bills/preview",
                "create_bill": "POST /bills",
                "bill_history": "GET /bills?q=",
                "invoice": "GET /bills/{bill_number}/invoice",
                "prescription": "POST /prescriptions",
                "users": "GET|POST /users",
                "change_password": "PUT /users/{user_id}/password",
            },
        }

    return app


# Create the app instance
app = create_app()
