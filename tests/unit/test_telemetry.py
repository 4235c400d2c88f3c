"""Unit tests for telemetry configuration."""

from collections.abc import Iterator

import pytest
import structlog
from opentelemetry import trace

from app_store_connect_sdk import telemetry
from app_store_connect_sdk.config import TelemetryConfig


@pytest.fixture(autouse=True)
def restore_telemetry(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(telemetry, "_tracer", None)
    monkeypatch.setattr(telemetry, "_logger", None)
    monkeypatch.setattr(telemetry, "_trace_requests", True)
    yield
    structlog.reset_defaults()


class TestTelemetry:
    def test_logger_is_cached(self) -> None:
        assert telemetry.get_logger() is telemetry.get_logger()

    def test_disabled_uses_noop_tracer(self) -> None:
        telemetry.configure_telemetry(TelemetryConfig(enabled=False))

        assert isinstance(telemetry.get_tracer(), trace.NoOpTracer)

    def test_request_tracing_can_be_switched_off(self) -> None:
        telemetry.configure_telemetry(TelemetryConfig(trace_requests=False))

        with telemetry.trace_request("GET", "https://api.test.local/v1/apps") as span:
            assert span is trace.INVALID_SPAN

    def test_trace_operation_propagates_errors(self) -> None:
        with pytest.raises(RuntimeError):
            with telemetry.trace_operation("token.generate", attributes={"token.kid": "K"}):
                raise RuntimeError("boom")

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("DEBUG", 10), ("info", 20), ("WARNING", 30), ("CRITICAL", 50), ("UNKNOWN", 20)],
    )
    def test_log_level_to_int(self, level: str, expected: int) -> None:
        assert telemetry._log_level_to_int(level) == expected
