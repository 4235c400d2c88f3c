"""Centralized HTTP executors for the App Store Connect SDK.

Provides the authenticated request step for both sync and async clients.
Executors never look at the status code beyond recording it and never
retry: a transport failure surfaces as TransportError, and every
completed exchange is returned as a RawResponse.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx

from ..telemetry import get_logger, trace_request
from ..types import RawResponse, RequestDescriptor
from .errors import ErrorFactory

if TYPE_CHECKING:
    from .token_cache import AsyncTokenCache, TokenCache

# Errors raised by httpx before a status code is available
TRANSPORT_EXCEPTIONS = (httpx.HTTPError, httpx.InvalidURL)


def build_request_kwargs(descriptor: RequestDescriptor, token: str) -> dict[str, Any]:
    """Build httpx request arguments for a descriptor.

    Args:
        descriptor: Request to send.
        token: Signed bearer token.

    Returns:
        Keyword arguments for ``httpx.Client.request``.
    """
    headers = {"Authorization": f"Bearer {token}"}
    kwargs: dict[str, Any] = {"headers": headers}
    if descriptor.query:
        kwargs["params"] = list(descriptor.query)
    if descriptor.has_body:
        headers["Content-Type"] = "application/json"
        kwargs["content"] = json.dumps(descriptor.body).encode()
    return kwargs


class SyncRequestExecutor:
    """Synchronous authenticated request executor."""

    def __init__(self, client: httpx.Client, token_cache: TokenCache) -> None:
        """Initialize sync request executor.

        Args:
            client: HTTP client.
            token_cache: Source of bearer tokens.
        """
        self._client = client
        self._token_cache = token_cache
        self._logger = get_logger()

    def execute(
        self,
        descriptor: RequestDescriptor,
        *,
        correlation_id: str | None = None,
    ) -> RawResponse:
        """Send a request with the current bearer token.

        Args:
            descriptor: Request to send.
            correlation_id: Correlation ID attached to logs and errors.

        Returns:
            Status code and full body text, whatever the status.

        Raises:
            SigningError: If a token could not be generated.
            TransportError: On network, DNS, TLS or timeout failure.
        """
        correlation_id = correlation_id or ErrorFactory.generate_correlation_id()
        token = self._token_cache.current()
        kwargs = build_request_kwargs(descriptor, token)

        with trace_request(descriptor.method, descriptor.url) as span:
            try:
                response = self._client.request(descriptor.method, descriptor.url, **kwargs)
            except TRANSPORT_EXCEPTIONS as e:
                _log_transport_failure(self._logger, descriptor, correlation_id, e)
                raise ErrorFactory.from_transport_exception(
                    e,
                    method=descriptor.method,
                    url=descriptor.url,
                    correlation_id=correlation_id,
                ) from e
            span.set_attribute("http.status_code", response.status_code)

        _log_completed(self._logger, descriptor, correlation_id, response.status_code)
        return RawResponse(status_code=response.status_code, body=response.text)


class AsyncRequestExecutor:
    """Asynchronous authenticated request executor."""

    def __init__(self, client: httpx.AsyncClient, token_cache: AsyncTokenCache) -> None:
        """Initialize async request executor.

        Args:
            client: Async HTTP client.
            token_cache: Source of bearer tokens.
        """
        self._client = client
        self._token_cache = token_cache
        self._logger = get_logger()

    async def execute(
        self,
        descriptor: RequestDescriptor,
        *,
        correlation_id: str | None = None,
    ) -> RawResponse:
        """Send a request with the current bearer token.

        Args:
            descriptor: Request to send.
            correlation_id: Correlation ID attached to logs and errors.

        Returns:
            Status code and full body text, whatever the status.

        Raises:
            SigningError: If a token could not be generated.
            TransportError: On network, DNS, TLS or timeout failure.
        """
        correlation_id = correlation_id or ErrorFactory.generate_correlation_id()
        token = await self._token_cache.current()
        kwargs = build_request_kwargs(descriptor, token)

        with trace_request(descriptor.method, descriptor.url) as span:
            try:
                response = await self._client.request(
                    descriptor.method, descriptor.url, **kwargs
                )
            except TRANSPORT_EXCEPTIONS as e:
                _log_transport_failure(self._logger, descriptor, correlation_id, e)
                raise ErrorFactory.from_transport_exception(
                    e,
                    method=descriptor.method,
                    url=descriptor.url,
                    correlation_id=correlation_id,
                ) from e
            span.set_attribute("http.status_code", response.status_code)

        _log_completed(self._logger, descriptor, correlation_id, response.status_code)
        return RawResponse(status_code=response.status_code, body=response.text)


def _log_completed(
    logger: Any,
    descriptor: RequestDescriptor,
    correlation_id: str,
    status_code: int,
) -> None:
    logger.debug(
        "Request completed",
        method=descriptor.method,
        url=descriptor.url,
        status_code=status_code,
        correlation_id=correlation_id,
    )


def _log_transport_failure(
    logger: Any,
    descriptor: RequestDescriptor,
    correlation_id: str,
    error: Exception,
) -> None:
    logger.warning(
        "Request failed before a response was received",
        method=descriptor.method,
        url=descriptor.url,
        correlation_id=correlation_id,
        error=str(error),
    )
