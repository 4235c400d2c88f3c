"""Error classes for the App Store Connect SDK.

Implements a structured error hierarchy with error codes and correlation IDs.
Every failure the SDK can surface is one of the classes below; nothing is
retried internally.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ErrorEntry

# Upper bound for response bodies copied into error details
BODY_EXCERPT_LIMIT = 512


class ErrorCode(StrEnum):
    """Standardized error codes for the App Store Connect SDK."""

    # Configuration errors (1xxx)
    INVALID_CONFIG = "CFG_1001"
    MISSING_CREDENTIAL = "CFG_1002"

    # Signing errors (2xxx)
    SIGNING_FAILED = "SIG_2001"
    INVALID_KEY = "SIG_2002"

    # Transport errors (3xxx)
    NETWORK_ERROR = "NET_3001"
    TIMEOUT_ERROR = "NET_3002"
    CONNECTION_ERROR = "NET_3003"

    # Decoding errors (4xxx)
    DECODE_ERROR = "DEC_4001"
    ERROR_BODY_UNREADABLE = "DEC_4002"

    # Server-reported errors (5xxx)
    SERVER_ERROR = "API_5001"


class AppStoreConnectError(Exception):
    """Base error for the SDK with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = str(code)
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "correlation_id": self.correlation_id,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationError(AppStoreConnectError):
    """Client configured without required or with invalid settings."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        reason: str | None = None,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
    ) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if reason:
            details["reason"] = reason
        super().__init__(message, code, details=details)
        self.field = field
        self.reason = reason


class SigningError(AppStoreConnectError):
    """Bearer token could not be signed."""

    def __init__(
        self,
        message: str = "Failed to sign bearer token",
        *,
        code: ErrorCode = ErrorCode.SIGNING_FAILED,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TransportError(AppStoreConnectError):
    """Network, DNS or TLS failure before an HTTP status was received."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
        correlation_id: str | None = None,
        cause: Exception | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if cause is not None:
            details["cause"] = str(cause)
        if method:
            details["method"] = method
        if url:
            details["url"] = url
        super().__init__(
            message,
            code,
            correlation_id=correlation_id,
            details=details,
        )
        self.__cause__ = cause


class RequestTimeoutError(TransportError):
    """Transport gave up waiting for the server."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        correlation_id: str | None = None,
        cause: Exception | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.TIMEOUT_ERROR,
            correlation_id=correlation_id,
            cause=cause,
            method=method,
            url=url,
        )


class DecodeError(AppStoreConnectError):
    """Response body could not be read as the expected shape.

    ``error_body`` is True when the body belonged to a non-2xx response,
    i.e. the server failed but did not send a recognizable error document.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        error_body: bool = False,
        correlation_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if body is not None:
            details["body"] = body[:BODY_EXCERPT_LIMIT]
        super().__init__(
            message,
            ErrorCode.ERROR_BODY_UNREADABLE if error_body else ErrorCode.DECODE_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
            details=details,
        )
        self.error_body = error_body


class ServerError(AppStoreConnectError):
    """Well-formed error document returned by the API."""

    def __init__(
        self,
        errors: list[ErrorEntry],
        *,
        status_code: int,
        correlation_id: str | None = None,
    ) -> None:
        summary = "; ".join(f"{entry.code}: {entry.title}" for entry in errors)
        super().__init__(
            summary or f"Server error: {status_code}",
            ErrorCode.SERVER_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
            details={"errors": [entry.model_dump() for entry in errors]},
        )
        self.errors = list(errors)

    @property
    def codes(self) -> list[str]:
        """API error codes in the order the server reported them."""
        return [entry.code for entry in self.errors]

    def has_code(self, code: str) -> bool:
        """Check whether any entry carries the given API error code."""
        return code in self.codes
