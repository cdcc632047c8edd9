"""Unit tests for application settings configuration."""

from pathlib import Path

from identity_srv.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_LOGIN_ATTEMPTS", "3")
    monkeypatch.setenv("LOGO_ALLOWED_MIME_TYPES", '["image/png"]')

    settings = Settings(_env_file=None)

    assert settings.max_login_attempts == 3
    assert settings.logo_allowed_mime_types == ["image/png"]
    assert settings.logo_public_base_url == "/static/logos"
