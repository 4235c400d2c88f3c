"""Unit tests for error classes.

Tests error hierarchy, serialization, and error codes.
"""

import httpx
import pytest

from app_store_connect_sdk.core.errors import ErrorFactory
from app_store_connect_sdk.errors import (
    BODY_EXCERPT_LIMIT,
    AppStoreConnectError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    RequestTimeoutError,
    ServerError,
    SigningError,
    TransportError,
)
from app_store_connect_sdk.models import ErrorEntry


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_error_codes_are_strings(self) -> None:
        """Error codes should be string values."""
        assert ErrorCode.INVALID_CONFIG == "CFG_1001"
        assert ErrorCode.SIGNING_FAILED == "SIG_2001"
        assert ErrorCode.NETWORK_ERROR == "NET_3001"
        assert ErrorCode.DECODE_ERROR == "DEC_4001"
        assert ErrorCode.SERVER_ERROR == "API_5001"

    def test_error_code_categories(self) -> None:
        """Error codes should follow category pattern."""
        assert ErrorCode.MISSING_CREDENTIAL.value.startswith("CFG_1")
        assert ErrorCode.INVALID_KEY.value.startswith("SIG_2")
        assert ErrorCode.TIMEOUT_ERROR.value.startswith("NET_3")
        assert ErrorCode.CONNECTION_ERROR.value.startswith("NET_3")
        assert ErrorCode.ERROR_BODY_UNREADABLE.value.startswith("DEC_4")


class TestAppStoreConnectError:
    """Tests for base AppStoreConnectError."""

    def test_basic_error(self) -> None:
        """Should create error with message and code."""
        error = AppStoreConnectError("Test error", ErrorCode.NETWORK_ERROR)

        assert error.message == "Test error"
        assert error.code == "NET_3001"
        assert str(error) == "Test error"
        assert error.details == {}

    def test_to_dict(self) -> None:
        """Should serialize every structured field."""
        error = AppStoreConnectError(
            "Test error",
            ErrorCode.SERVER_ERROR,
            status_code=409,
            correlation_id="corr-123",
            details={"key": "value"},
        )

        assert error.to_dict() == {
            "error": "Test error",
            "code": "API_5001",
            "status_code": 409,
            "correlation_id": "corr-123",
            "details": {"key": "value"},
        }

    def test_repr(self) -> None:
        error = SigningError()

        assert repr(error) == "SigningError(code='SIG_2001', message='Failed to sign bearer token')"


class TestConfigurationError:
    def test_field_is_exposed(self) -> None:
        error = ConfigurationError("key_id is required", field="key_id")

        assert error.field == "key_id"
        assert error.details == {"field": "key_id"}
        assert error.code == ErrorCode.INVALID_CONFIG

    def test_missing_credential_code(self) -> None:
        error = ConfigurationError(
            "issuer is required", field="issuer", code=ErrorCode.MISSING_CREDENTIAL
        )

        assert error.code == "CFG_1002"


class TestSigningError:
    def test_cause_is_chained(self) -> None:
        cause = ValueError("bad key")
        error = SigningError(cause=cause)

        assert error.__cause__ is cause
        assert error.details == {"cause": "bad key"}


class TestTransportError:
    def test_request_context_in_details(self) -> None:
        cause = httpx.ConnectError("refused")
        error = TransportError(
            "Connection failed",
            cause=cause,
            method="GET",
            url="https://api.test.local/v1/apps",
        )

        assert error.__cause__ is cause
        assert error.details["method"] == "GET"
        assert error.details["url"] == "https://api.test.local/v1/apps"

    def test_timeout_is_transport_error(self) -> None:
        error = RequestTimeoutError()

        assert isinstance(error, TransportError)
        assert error.code == ErrorCode.TIMEOUT_ERROR


class TestDecodeError:
    def test_success_body_code(self) -> None:
        error = DecodeError("bad", status_code=200, body="garbage")

        assert error.code == ErrorCode.DECODE_ERROR
        assert error.error_body is False
        assert error.status_code == 200

    def test_error_body_code(self) -> None:
        error = DecodeError("bad", status_code=404, body="not json", error_body=True)

        assert error.code == ErrorCode.ERROR_BODY_UNREADABLE
        assert error.error_body is True

    def test_body_excerpt_is_truncated(self) -> None:
        error = DecodeError("bad", status_code=200, body="x" * (BODY_EXCERPT_LIMIT * 2))

        assert len(error.details["body"]) == BODY_EXCERPT_LIMIT


class TestServerError:
    def test_preserves_entries_in_order(self) -> None:
        entries = [
            ErrorEntry(status="409", code="ENTITY_ERROR.ATTRIBUTE.INVALID", title="a", detail="b"),
            ErrorEntry(status="409", code="ENTITY_ERROR.RELATIONSHIP.INVALID", title="c", detail="d"),
        ]
        error = ServerError(entries, status_code=409)

        assert error.errors == entries
        assert error.codes == [
            "ENTITY_ERROR.ATTRIBUTE.INVALID",
            "ENTITY_ERROR.RELATIONSHIP.INVALID",
        ]
        assert error.has_code("ENTITY_ERROR.RELATIONSHIP.INVALID")
        assert not error.has_code("NOT_FOUND")
        assert error.message == "ENTITY_ERROR.ATTRIBUTE.INVALID: a; ENTITY_ERROR.RELATIONSHIP.INVALID: c"
        assert error.details["errors"][1]["detail"] == "d"


class TestErrorFactory:
    """Tests for conversion of foreign exceptions."""

    @pytest.mark.parametrize(
        ("exc", "expected_type", "expected_code"),
        [
            (httpx.ReadTimeout("slow"), RequestTimeoutError, ErrorCode.TIMEOUT_ERROR),
            (httpx.ConnectTimeout("slow"), RequestTimeoutError, ErrorCode.TIMEOUT_ERROR),
            (httpx.ConnectError("refused"), TransportError, ErrorCode.CONNECTION_ERROR),
            (httpx.RemoteProtocolError("eof"), TransportError, ErrorCode.NETWORK_ERROR),
        ],
    )
    def test_from_transport_exception(
        self,
        exc: Exception,
        expected_type: type,
        expected_code: ErrorCode,
    ) -> None:
        error = ErrorFactory.from_transport_exception(exc, method="GET", url="https://x")

        assert type(error) is expected_type
        assert error.code == expected_code
        assert error.__cause__ is exc
        assert error.correlation_id

    def test_correlation_id_is_kept(self) -> None:
        error = ErrorFactory.from_transport_exception(
            httpx.ConnectError("refused"), correlation_id="corr-1"
        )

        assert error.correlation_id == "corr-1"

    def test_from_signing_exception(self) -> None:
        cause = TypeError("not a key")
        error = ErrorFactory.from_signing_exception(cause)

        assert isinstance(error, SigningError)
        assert error.__cause__ is cause
        assert "not a key" in error.message

    def test_nested_config_error_prefixes_field(self) -> None:
        inner = ErrorFactory.invalid_setting("log_level", "unsupported")

        error = ErrorFactory.nested_config_error(inner, "telemetry")

        assert error.field == "telemetry.log_level"
        assert error.reason == "unsupported"
        assert error.message == "Invalid configuration for telemetry.log_level: unsupported"
        assert error.details == {"field": "telemetry.log_level", "reason": "unsupported"}

    def test_nested_config_error_keeps_code(self) -> None:
        inner = ConfigurationError("issuer is required", code=ErrorCode.MISSING_CREDENTIAL)

        error = ErrorFactory.nested_config_error(inner, "token")

        assert error.field == "token"
        assert error.code == ErrorCode.MISSING_CREDENTIAL
        assert error.reason == "issuer is required"
