"""Tests for custom exception hierarchy."""

from core.exceptions import (
    RelayError,
    ValidationError,
    ConfigurationError,
    NotFoundError,
    InternalError,
    StorageError,
)


def test_relay_error_base():
    """Test base RelayError."""
    error = RelayError("Test error", {"key": "value"})
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == {"key": "value"}


def test_details_default_to_empty_dict():
    assert ValidationError("schema is required").details == {}


def test_configuration_error_is_validation_error():
    error = ConfigurationError("Config missing", {"setting": "PORT"})
    assert isinstance(error, ValidationError)
    assert isinstance(error, RelayError)


def test_not_found_error():
    error = NotFoundError("video not found", {"schema": "a", "worker_id": "1"})
    assert isinstance(error, RelayError)
    assert not isinstance(error, InternalError)


def test_storage_error_is_internal():
    """Storage failures surface as internal errors."""
    error = StorageError("disk full", {"path": "/tmp/x"})
    assert isinstance(error, InternalError)
    assert error.details == {"path": "/tmp/x"}


def test_exception_inheritance():
    assert issubclass(ValidationError, RelayError)
    assert issubclass(ConfigurationError, ValidationError)
    assert issubclass(NotFoundError, RelayError)
    assert issubclass(InternalError, RelayError)
    assert issubclass(StorageError, InternalError)
    assert not issubclass(NotFoundError, ValidationError)
