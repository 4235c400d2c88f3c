"""Core components for the App Store Connect SDK.

Centralized request pipeline shared between sync and async clients.
"""

from __future__ import annotations

from .decoder import ResponseDecoder
from .endpoints import ApiCall, EndpointCatalog
from .errors import ErrorFactory
from .http_executor import AsyncRequestExecutor, SyncRequestExecutor
from .token_cache import AsyncTokenCache, TokenCache, TokenCacheBase
from .token_generator import TokenGenerator

__all__ = [
    "ApiCall",
    "AsyncRequestExecutor",
    "AsyncTokenCache",
    "EndpointCatalog",
    "ErrorFactory",
    "ResponseDecoder",
    "SyncRequestExecutor",
    "TokenCache",
    "TokenCacheBase",
    "TokenGenerator",
]
