"""Bearer token caches with serialized regeneration.

One Token is held per cache. Concurrent callers that observe the same
expired token trigger a single signing operation and all receive its
result: the sync cache serializes check-and-regenerate under a lock, the
async cache shares one refresh task. Neither spans an HTTP call.
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from ..models import Token
    from .token_generator import TokenGenerator


class TokenCacheBase:
    """Shared expiry logic for the sync and async caches.

    The cache is populated at construction; a failing first generation
    raises SigningError from the constructor.
    """

    def __init__(self, generator: TokenGenerator) -> None:
        self._generator = generator
        self._token: Token = generator.generate()
        self._generation_count = 1

    def _now(self) -> datetime:
        return self._generator.clock()

    def needs_refresh(self, now: datetime | None = None) -> bool:
        """Check if the held token has reached its refresh deadline."""
        return self._token.is_expired(now or self._now())

    def _replace(self, token: Token) -> None:
        self._token = token
        self._generation_count += 1

    @property
    def token(self) -> Token:
        """Currently held token, without an expiry check."""
        return self._token

    @property
    def generation_count(self) -> int:
        """Number of tokens generated since construction, including the first."""
        return self._generation_count


class TokenCache(TokenCacheBase):
    """Thread-safe token cache."""

    def __init__(self, generator: TokenGenerator) -> None:
        super().__init__(generator)
        self._lock = threading.Lock()

    def current(self) -> str:
        """Return a signed token that is not past its refresh deadline.

        Raises:
            SigningError: If regeneration fails. The expired token stays
                held and the next call tries again.
        """
        with self._lock:
            if self.needs_refresh():
                self._replace(self._generator.generate())
            return self._token.signed_value


class AsyncTokenCache(TokenCacheBase):
    """Token cache for a single event loop.

    Regeneration runs as one shared task that signs in a worker thread and
    stores its own result. Callers await it through ``asyncio.shield``, so a
    cancelled caller never discards a finished signature.
    """

    def __init__(self, generator: TokenGenerator) -> None:
        super().__init__(generator)
        self._refresh_task: asyncio.Task[None] | None = None

    async def current(self) -> str:
        """Return a signed token that is not past its refresh deadline.

        Raises:
            SigningError: If regeneration fails. Every caller waiting on
                that regeneration receives the error.
        """
        if self.needs_refresh():
            if self._refresh_task is None:
                self._refresh_task = asyncio.create_task(self._refresh())
            await asyncio.shield(self._refresh_task)
        return self._token.signed_value

    async def _refresh(self) -> None:
        try:
            token = await asyncio.to_thread(self._generator.generate)
            self._replace(token)
        finally:
            self._refresh_task = None
