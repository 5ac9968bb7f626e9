"""
Unit tests for configuration and error types.

Tests cover:
- Environment-driven settings
- Logger level configuration
- Error codes and details
"""

import logging

import pytest

from reflectlab.config import Settings, configure_logging, get_settings
from reflectlab.errors import (
    ColumnCountError,
    IntrospectionError,
    ReflectLabError,
    UnexpectedTokenError,
)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Defaults read every field."""
        for name in ("LOG_LEVEL", "INCLUDE_PRIVATE_FIELDS", "INCLUDE_INSTANCE_ATTRIBUTES"):
            monkeypatch.delenv(f"REFLECTLAB_{name}", raising=False)
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.include_private_fields is True
        assert settings.include_instance_attributes is True

    def test_environment_overrides(self, monkeypatch):
        """REFLECTLAB_ variables override defaults."""
        monkeypatch.setenv("REFLECTLAB_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("REFLECTLAB_INCLUDE_PRIVATE_FIELDS", "false")

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.include_private_fields is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_package_logger_level(self):
        logger = logging.getLogger("reflectlab")
        previous = logger.level
        try:
            configure_logging(Settings(log_level="debug"))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)

    def test_invalid_level_raises(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(Settings(log_level="LOUD"))


class TestErrors:
    """Tests for error types."""

    def test_base_error_defaults(self):
        error = ReflectLabError("oops")
        assert error.message == "oops"
        assert error.code == "REFLECTLAB_ERROR"
        assert error.details == {}

    def test_column_count_details(self):
        error = ColumnCountError(["a"], ["?", "?"])
        assert error.details == {"columns": ["a"], "placeholders": ["?", "?"]}
        assert isinstance(error, ReflectLabError)

    def test_unexpected_token_messages(self):
        assert str(UnexpectedTokenError("INTO", "INT")) == "expected 'INTO' but found 'INT'"
        assert str(UnexpectedTokenError("INTO")) == "expected 'INTO' but found nothing"
        assert (
            str(UnexpectedTokenError("table name", quoted=False))
            == "expected table name but found nothing"
        )

    def test_introspection_details(self):
        error = IntrospectionError("bad", type_name="User", field_name="email")
        assert error.details == {"type_name": "User", "field_name": "email"}
