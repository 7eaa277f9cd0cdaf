"""Unit tests for vitrine.infra.observability.logging."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from vitrine.foundation.application.context import clear_checkout_state, set_checkout_state
from vitrine.infra.observability.logging import (
    REDACTED_VALUE,
    LoggingSettings,
    SensitiveDataProcessor,
    add_checkout_tenant,
    configure_logging,
    get_logger,
    get_logging_settings,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


class TestLoggingSettings:
    @pytest.mark.unit
    def test_default_values(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = LoggingSettings()
            assert settings.log_level == "INFO"
            assert settings.environment == "development"

    @pytest.mark.unit
    def test_use_json_logs_production(self) -> None:
        assert LoggingSettings(environment="production").use_json_logs is True
        assert LoggingSettings(environment="development").use_json_logs is False

    @pytest.mark.unit
    def test_normalize_log_level_lowercase(self) -> None:
        settings = LoggingSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.log_level_int == logging.DEBUG

    @pytest.mark.unit
    def test_invalid_log_level(self) -> None:
        with pytest.raises(Exception):  # noqa: B017
            LoggingSettings(log_level="LOUD")

    @pytest.mark.unit
    def test_from_env_vars(self) -> None:
        env = {"LOG_LEVEL": "WARNING", "ENVIRONMENT": "production"}
        with patch.dict("os.environ", env, clear=True):
            settings = LoggingSettings()
            assert settings.log_level == "WARNING"
            assert settings.environment == "production"

    @pytest.mark.unit
    def test_get_logging_settings_cached(self) -> None:
        get_logging_settings.cache_clear()
        try:
            assert get_logging_settings() is get_logging_settings()
        finally:
            get_logging_settings.cache_clear()


class TestSensitiveDataProcessor:
    @pytest.mark.unit
    def test_redacts_exact_and_substring_matches(self) -> None:
        processor = SensitiveDataProcessor()
        event = {
            "event": "connect",
            "database_url": "postgresql://u:p@h/db",
            "refresh_token": "abc",
            "tenant": "b2b",
        }
        result = processor(None, "info", event)
        assert result["database_url"] == REDACTED_VALUE
        assert result["refresh_token"] == REDACTED_VALUE
        assert result["tenant"] == "b2b"


class TestAddCheckoutTenant:
    @pytest.mark.unit
    def test_binds_current_tenant(self) -> None:
        token = set_checkout_state(checkout_tenant="b2b")
        try:
            event = add_checkout_tenant(None, "info", {"event": "cart_saved"})
        finally:
            clear_checkout_state(token)
        assert event["checkout_tenant"] == "b2b"

    @pytest.mark.unit
    def test_no_tenant_leaves_event_untouched(self) -> None:
        assert add_checkout_tenant(None, "info", {"event": "x"}) == {"event": "x"}

    @pytest.mark.unit
    def test_explicit_value_not_overwritten(self) -> None:
        token = set_checkout_state(checkout_tenant="b2b")
        try:
            event = add_checkout_tenant(None, "info", {"checkout_tenant": "b2c"})
        finally:
            clear_checkout_state(token)
        assert event["checkout_tenant"] == "b2c"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_handlers(self) -> Iterator[None]:
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    @pytest.mark.unit
    def test_stdlib_records_rendered_as_json_with_extra(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(LoggingSettings(log_level="DEBUG", environment="production"))
        logging.getLogger("vitrine.test").info(
            "metadata_saved", extra={"table": "object_metadata_Product", "password": "x"}
        )
        out = capsys.readouterr().out
        assert '"event": "metadata_saved"' in out
        assert '"table": "object_metadata_Product"' in out
        assert '"logger": "vitrine.test"' in out
        assert f'"password": "{REDACTED_VALUE}"' in out

    @pytest.mark.unit
    def test_root_level_follows_settings(self) -> None:
        configure_logging(LoggingSettings(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    @pytest.mark.unit
    def test_get_logger_returns_bound_logger(self) -> None:
        configure_logging(LoggingSettings(environment="test"))
        assert get_logger(__name__) is not None
        assert get_logger() is not None
