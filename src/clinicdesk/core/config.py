"""
Configuration management for ClinicDesk application.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

import os
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    backend: str = Field(default="mongo", description="Data gateway backend (mongo or memory)")
    uri: str = Field(default="", description="MongoDB connection URI")
    db_name: str = Field(default="clinicdesk", description="MongoDB database name")
    server_selection_timeout_ms: int = Field(
        default=15000, description="MongoDB server selection timeout"
    )

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate gateway backend."""
        valid_backends = ["mongo", "memory"]
        if v.lower() not in valid_backends:
            raise ValueError(f"Database backend must be one of: {valid_backends}")
        return v.lower()

    @model_validator(mode="after")
    def validate_mongo_uri(self) -> "DatabaseSettings":
        """A MongoDB URI is only required for the mongo backend."""
        if self.backend != "mongo":
            return self
        if not self.uri:
            raise ValueError("MongoDB URI is required. Please set MONGO_URI environment variable.")
        if not self.uri.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return self


class SecuritySettings(BaseSettings):
    """Security configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    session_ttl_minutes: int = Field(
        default=480, description="Idle minutes before a login session expires"
    )
    password_hash_iterations: int = Field(
        default=120_000, description="PBKDF2 iterations for stored passwords"
    )

    @field_validator("session_ttl_minutes")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        """Validate session lifetime."""
        if v < 1:
            raise ValueError("Session TTL must be at least 1 minute")
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ["json", "text"]:
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class ClinicSettings(BaseSettings):
    """Clinic details printed on invoices and prescriptions."""

    model_config = SettingsConfigDict(env_prefix="CLINIC_")

    name: str = Field(default="ORTHONOVA POLYCLINIC", description="Clinic display name")
    registration_number: str = Field(default="SUN/00051/2024", description="Clinic registration number")
    address: str = Field(
        default="Near Tarini Mandir, Panposh Road, Civil Township, Rourkela",
        description="Clinic postal address",
    )
    phone: str = Field(default="7681004245", description="Clinic contact number")
    email: str = Field(default="info.orthonova@gmail.com", description="Clinic contact email")
    currency_symbol: str = Field(default="₹", description="Currency symbol for amounts")
    prescription_validity_days: int = Field(
        default=7, description="Days a prescription stays valid"
    )

    @field_validator("prescription_validity_days")
    @classmethod
    def validate_validity_days(cls, v: int) -> int:
        if not 1 <= v <= 365:
            raise ValueError("Prescription validity must be between 1 and 365 days")
        return v


class BootstrapSettings(BaseSettings):
    """First-run admin account seeded when no admin exists."""

    model_config = SettingsConfigDict(env_prefix="BOOTSTRAP_")

    admin_user_id: str = Field(default="", description="Admin user ID to seed at startup")
    admin_password: str = Field(default="", description="Admin password to seed at startup")
    admin_department: str = Field(default="Administration", description="Department of the seeded admin")

    @property
    def enabled(self) -> bool:
        return bool(self.admin_user_id and self.admin_password)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="ClinicDesk", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    clinic: ClinicSettings = Field(default_factory=ClinicSettings)
    bootstrap: BootstrapSettings = Field(default_factory=BootstrapSettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    This helps in environments where the working directory isn't the project
    root and pydantic's env_file doesn't get resolved as expected.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            # Do not override already-set environment variables
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
