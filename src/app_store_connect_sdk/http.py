"""HTTP client factories for the App Store Connect SDK.

Clients carry no base URL: every request descriptor holds an absolute URL,
including ``next`` links returned by the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .config import ClientConfig


def _timeout(config: ClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.connect_timeout,
        read=config.timeout,
        write=config.timeout,
        pool=config.timeout,
    )


def _default_headers(config: ClientConfig) -> dict[str, str]:
    return {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }


def create_http_client(config: ClientConfig) -> httpx.Client:
    """Create configured sync HTTP client.

    Args:
        config: SDK configuration.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        timeout=_timeout(config),
        headers=_default_headers(config),
        follow_redirects=False,
    )


def create_async_http_client(config: ClientConfig) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        config: SDK configuration.

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=_timeout(config),
        headers=_default_headers(config),
        follow_redirects=False,
    )
