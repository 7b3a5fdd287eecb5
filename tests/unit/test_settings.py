"""Unit tests for settings and dependency wiring."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from user_service.adapters.smtp.console import ConsoleNotifier
from user_service.adapters.smtp.sender import SmtpNotifier
from user_service.api import dependencies
from user_service.config.settings import Settings, get_settings
from user_service.domain.tokens import TokenSecrets


@pytest.fixture
def clear_caches():
    get_settings.cache_clear()
    dependencies.get_notifier.cache_clear()
    yield
    get_settings.cache_clear()
    dependencies.get_notifier.cache_clear()


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.bcrypt_cost == 10
        assert settings.activation_ttl_seconds == 300
        assert settings.access_token_ttl_seconds == 900
        assert settings.refresh_token_ttl_seconds == 259200
        assert settings.email_backend == "console"

    def test_three_distinct_default_secrets(self) -> None:
        secrets = Settings(_env_file=None).token_secrets()

        assert isinstance(secrets, TokenSecrets)
        assert len({secrets.activation, secrets.access, secrets.refresh}) == 3

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACTIVATION_TOKEN_SECRET", "a")
        monkeypatch.setenv("ACCESS_TOKEN_SECRET", "b")
        monkeypatch.setenv("REFRESH_TOKEN_SECRET", "c")
        monkeypatch.setenv("BCRYPT_COST", "12")

        settings = Settings(_env_file=None)

        assert settings.token_secrets() == TokenSecrets(activation="a", access="b", refresh="c")
        assert settings.bcrypt_cost == 12

    @pytest.mark.parametrize("raw", ["", "None", "null"])
    def test_access_ttl_disabled_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("ACCESS_TOKEN_TTL_SECONDS", raw)

        settings = Settings(_env_file=None)

        assert settings.access_token_ttl_seconds is None
        assert dependencies.build_token_policy(settings).access_ttl is None

    def test_access_ttl_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACCESS_TOKEN_TTL_SECONDS", "120")

        assert Settings(_env_file=None).access_token_ttl_seconds == 120

    def test_get_settings_is_cached(self, clear_caches) -> None:
        assert get_settings() is get_settings()


class TestDependencies:
    """Tests for dependency factories."""

    def test_token_policy_from_settings(self) -> None:
        settings = Settings(_env_file=None, access_token_ttl_seconds=60)

        policy = dependencies.build_token_policy(settings)

        assert policy.activation_ttl == timedelta(minutes=5)
        assert policy.access_ttl == timedelta(seconds=60)
        assert policy.refresh_ttl == timedelta(days=3)

    def test_token_policy_without_access_ttl(self) -> None:
        settings = Settings(_env_file=None, access_token_ttl_seconds=None)

        assert dependencies.build_token_policy(settings).access_ttl is None

    def test_console_notifier_by_default(self, clear_caches, monkeypatch) -> None:
        monkeypatch.delenv("EMAIL_BACKEND", raising=False)

        assert isinstance(dependencies.get_notifier(), ConsoleNotifier)

    def test_smtp_notifier_when_configured(self, clear_caches, monkeypatch) -> None:
        monkeypatch.setenv("EMAIL_BACKEND", "smtp")

        assert isinstance(dependencies.get_notifier(), SmtpNotifier)

    def test_account_service_wiring(self, clear_caches) -> None:
        request = MagicMock()

        service = dependencies.get_account_service(request)

        assert service.repository._pool is request.app.state.pool
        assert service.hasher.cost == get_settings().bcrypt_cost
        assert service.token_secrets == get_settings().token_secrets()
