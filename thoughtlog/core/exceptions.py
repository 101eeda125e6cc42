"""
Custom Exceptions - Application-specific error classes.

Every exception carries an HTTP status and an ErrorKind tag so that callers
can tell retryable failures (provider, store) from terminal ones
(validation, auth, configuration) without parsing messages.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tag rendered in every error response body."""
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    PROVIDER = "provider"
    STORE = "store"
    INTERNAL = "internal"

    @property
    def retryable(self) -> bool:
        return self in (ErrorKind.PROVIDER, ErrorKind.STORE)


class ThoughtlogError(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types.
    """
    http_status: int = 500
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.message,
            "kind": self.kind.value,
            "retryable": self.retryable,
        }


class ValidationError(ThoughtlogError):
    """Raised when input validation fails."""
    http_status = 400
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class AuthError(ThoughtlogError):
    """Raised when the caller's identity is missing or cannot be resolved."""
    http_status = 401
    kind = ErrorKind.AUTH

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(ThoughtlogError):
    """Raised when a user-owned record does not exist."""
    http_status = 404
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, record_id: str):
        super().__init__(f"{resource} not found: {record_id}")
        self.resource = resource
        self.record_id = record_id


class NoProviderConfiguredError(ThoughtlogError):
    """Raised when neither provider credential slot is populated."""
    http_status = 500
    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str = "No AI API keys configured"):
        super().__init__(message)


class ProviderError(ThoughtlogError):
    """Raised when an LLM provider call fails before a usable reply arrives."""
    http_status = 500
    kind = ErrorKind.PROVIDER

    def __init__(self, provider: str, message: str):
        super().__init__(message, details=f"provider={provider}")
        self.provider = provider


class ProviderHttpError(ProviderError):
    """Raised when a provider answers with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int):
        super().__init__(provider, f"{provider} API error: {status_code}")
        self.status_code = status_code


class StoreError(ThoughtlogError):
    """Raised when a record store operation fails."""
    http_status = 500
    kind = ErrorKind.STORE

    def __init__(self, message: str = "Store operation failed"):
        super().__init__(message)


class DuplicateRecordError(StoreError):
    """Raised when an insert violates a uniqueness constraint."""
    http_status = 409
    kind = ErrorKind.CONFLICT

    def __init__(self, table: str):
        super().__init__(f"Duplicate record in {table}")
        self.table = table


class InternalError(ThoughtlogError):
    """Wraps unexpected failures caught at the request boundary."""
    http_status = 500
    kind = ErrorKind.INTERNAL
