"""Custom exception hierarchy for the video relay."""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for all relay-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(RelayError):
    """Raised when a required field is missing or malformed."""
    pass


class ConfigurationError(ValidationError):
    """Raised when configuration is invalid or missing."""
    pass


class NotFoundError(RelayError):
    """Raised when a requested video does not exist."""
    pass


class InternalError(RelayError):
    """Raised on unexpected failures. Never shown verbatim to callers."""
    pass


class StorageError(InternalError):
    """Raised when a filesystem operation fails."""
    pass


__all__ = [
    "RelayError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "InternalError",
    "StorageError",
]
