"""Centralized error factory for the App Store Connect SDK.

Provides consistent error creation and transformation across all SDK components.
"""

from __future__ import annotations

import uuid

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..errors import (
    ConfigurationError,
    DecodeError,
    ErrorCode,
    RequestTimeoutError,
    ServerError,
    SigningError,
    TransportError,
)
from ..models import ErrorEntry


class ErrorFactory:
    """Centralized error creation with consistent structure.

    All errors created through this factory include:
    - Standardized error codes
    - Correlation IDs for tracing
    - Consistent detail structure for logging
    """

    @staticmethod
    def generate_correlation_id() -> str:
        """Generate a unique correlation ID."""
        return str(uuid.uuid4())

    @staticmethod
    def from_transport_exception(
        exc: Exception,
        *,
        method: str | None = None,
        url: str | None = None,
        correlation_id: str | None = None,
    ) -> TransportError:
        """Create SDK error from an exception raised by the HTTP layer.

        Args:
            exc: Original exception.
            method: HTTP method of the failed request.
            url: URL of the failed request.
            correlation_id: Optional correlation ID for tracing.

        Returns:
            TransportError or one of its subclasses.
        """
        correlation_id = correlation_id or ErrorFactory.generate_correlation_id()

        if isinstance(exc, httpx.TimeoutException):
            return RequestTimeoutError(
                f"Request timed out: {exc}",
                correlation_id=correlation_id,
                cause=exc,
                method=method,
                url=url,
            )

        if isinstance(exc, httpx.ConnectError):
            return TransportError(
                f"Connection failed: {exc}",
                code=ErrorCode.CONNECTION_ERROR,
                correlation_id=correlation_id,
                cause=exc,
                method=method,
                url=url,
            )

        return TransportError(
            f"HTTP error: {exc}",
            correlation_id=correlation_id,
            cause=exc,
            method=method,
            url=url,
        )

    @staticmethod
    def from_signing_exception(exc: Exception) -> SigningError:
        """Wrap an unexpected signer failure."""
        return SigningError(f"Failed to sign bearer token: {exc}", cause=exc)

    @staticmethod
    def decode_failure(
        exc: PydanticValidationError | ValueError,
        *,
        status_code: int,
        body: str,
        error_body: bool = False,
        correlation_id: str | None = None,
    ) -> DecodeError:
        """Create decode error for a body that does not match its expected shape.

        Args:
            exc: Validation error raised while parsing.
            status_code: HTTP status of the response.
            body: Raw response body.
            error_body: Whether the body belonged to a non-2xx response.
            correlation_id: Optional correlation ID.

        Returns:
            DecodeError carrying an excerpt of the body.
        """
        correlation_id = correlation_id or ErrorFactory.generate_correlation_id()
        if isinstance(exc, PydanticValidationError):
            reason = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
                for err in exc.errors()[:3]
            )
        else:
            reason = str(exc)
        prefix = "Unreadable error response" if error_body else "Unexpected response body"
        return DecodeError(
            f"{prefix} (HTTP {status_code}): {reason}",
            status_code=status_code,
            body=body,
            error_body=error_body,
            correlation_id=correlation_id,
        )

    @staticmethod
    def server_error(
        errors: list[ErrorEntry],
        *,
        status_code: int,
        correlation_id: str | None = None,
    ) -> ServerError:
        """Create error for a well-formed error document."""
        return ServerError(
            errors,
            status_code=status_code,
            correlation_id=correlation_id or ErrorFactory.generate_correlation_id(),
        )

    @staticmethod
    def invalid_setting(
        field: str,
        reason: str,
        *,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
    ) -> ConfigurationError:
        """Create configuration error for one named setting."""
        return ConfigurationError(
            f"Invalid configuration for {field}: {reason}",
            field=field,
            reason=reason,
            code=code,
        )

    @staticmethod
    def config_error(exc: PydanticValidationError) -> ConfigurationError:
        """Create configuration error naming the first offending field.

        Args:
            exc: Validation error raised while building a config model.

        Returns:
            ConfigurationError with the dotted field path.
        """
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        code = (
            ErrorCode.MISSING_CREDENTIAL
            if first.get("type") == "missing"
            else ErrorCode.INVALID_CONFIG
        )
        if field is None:
            return ConfigurationError(str(exc), code=code)
        return ErrorFactory.invalid_setting(field, first.get("msg", ""), code=code)

    @staticmethod
    def nested_config_error(exc: ConfigurationError, parent: str) -> ConfigurationError:
        """Re-root a sub-config error under the parent setting's name."""
        field = f"{parent}.{exc.field}" if exc.field else parent
        code = ErrorCode(exc.code)
        return ErrorFactory.invalid_setting(field, exc.reason or exc.message, code=code)
