"""
Settings and environment file loading.

Already-set environment variables take precedence over values in .env.
"""

import pytest
from pydantic import ValidationError

from clinicdesk.core.config import DatabaseSettings, Settings, get_settings, reset_settings


def _scrub(monkeypatch, *names):
    # setenv first so monkeypatch restores the original state afterwards
    for name in names:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_env_file_is_discovered_from_parent_directory(monkeypatch, tmp_path):
    _scrub(monkeypatch, "CLINIC_NAME", "SECURITY_SESSION_TTL_MINUTES")
    (tmp_path / ".env").write_text("CLINIC_NAME=Test Clinic\nSECURITY_SESSION_TTL_MINUTES=30\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    reset_settings()
    settings = get_settings()

    assert settings.clinic.name == "Test Clinic"
    assert settings.security.session_ttl_minutes == 30


def test_already_set_env_vars_take_precedence(monkeypatch, tmp_path):
    _scrub(monkeypatch, "CLINIC_NAME")
    monkeypatch.setenv("CLINIC_NAME", "From Environment")
    (tmp_path / ".env").write_text("CLINIC_NAME=From File\n")
    monkeypatch.chdir(tmp_path)

    reset_settings()
    assert get_settings().clinic.name == "From Environment"


def test_settings_are_cached_until_reset():
    first = get_settings()
    assert get_settings() is first
    reset_settings()
    assert get_settings() is not first


def test_memory_backend_needs_no_uri(monkeypatch):
    monkeypatch.setenv("MONGO_BACKEND", "Memory")
    monkeypatch.setenv("MONGO_URI", "")
    assert DatabaseSettings().backend == "memory"


def test_mongo_backend_requires_uri(monkeypatch):
    monkeypatch.setenv("MONGO_BACKEND", "mongo")
    monkeypatch.setenv("MONGO_URI", "")
    with pytest.raises(ValidationError):
        DatabaseSettings()


def test_mongo_uri_scheme_is_checked(monkeypatch):
    monkeypatch.setenv("MONGO_BACKEND", "mongo")
    monkeypatch.setenv("MONGO_URI", "postgres://localhost/clinic")
    with pytest.raises(ValidationError):
        DatabaseSettings()


def test_cors_origins_accept_json_list(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["http://a.test", "http://b.test"]')
    assert Settings().cors.allowed_origins == ["http://a.test", "http://b.test"]


def test_invalid_app_env_rejected(monkeypatch):
    monkeypatch.setenv("APP_ENV", "qa")
    with pytest.raises(ValidationError):
        Settings()


def test_bootstrap_enabled_only_with_both_credentials(monkeypatch):
    monkeypatch.setenv("BOOTSTRAP_ADMIN_PASSWORD", "")
    assert Settings().bootstrap.enabled is False
    monkeypatch.setenv("BOOTSTRAP_ADMIN_PASSWORD", "secret")
    assert Settings().bootstrap.enabled is True


def test_testing_defaults():
    settings = get_settings()
    assert settings.is_testing
    assert settings.database.backend == "memory"
    assert settings.clinic.prescription_validity_days == 7
