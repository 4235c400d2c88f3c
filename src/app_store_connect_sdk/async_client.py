"""Async App Store Connect SDK client.

Same operations as the sync client. Concurrent tasks share one token
cache; an expired token is regenerated once and reused by every waiting
task.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, Self, TypeVar

from .core import (
    AsyncRequestExecutor,
    AsyncTokenCache,
    EndpointCatalog,
    ErrorFactory,
    ResponseDecoder,
    TokenGenerator,
)
from .http import create_async_http_client
from .models import utcnow
from .signing import es256_signer

if TYPE_CHECKING:
    import httpx

    from .config import ClientConfig
    from .core import ApiCall
    from .core.token_generator import Clock
    from .entities import (
        App,
        BundleId,
        BundleIdCapability,
        BundleIdCreateRequest,
        Certificate,
        CertificateCreateRequest,
        Device,
        DeviceCreateRequest,
        Profile,
        ProfileCreateRequest,
        User,
        UserUpdateRequest,
    )
    from .models import CollectionResponse, EntityResponse, PageResponse
    from .queries import (
        AppQuery,
        BundleIdQuery,
        CertificateQuery,
        DeviceQuery,
        ProfileQuery,
        UsersQuery,
        UserVisibleAppsQuery,
    )
    from .signing import Signer

T = TypeVar("T")


class AsyncAppStoreConnectClient:
    """Asynchronous App Store Connect client."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        signer: Signer = es256_signer,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize async client.

        Args:
            config: SDK configuration.
            http_client: Optional async HTTP client; the caller keeps ownership.
            signer: Token signer.
            clock: Source of the current UTC time.
        """
        self.config = config
        generator = TokenGenerator(config.identity, config.token, signer=signer, clock=clock)
        self._token_cache = AsyncTokenCache(generator)
        self._owns_http = http_client is None
        self._http = http_client or create_async_http_client(config)
        self._executor = AsyncRequestExecutor(self._http, self._token_cache)
        self._decoder = ResponseDecoder()
        self._endpoints = EndpointCatalog(config.base_url_str)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    @property
    def token_cache(self) -> AsyncTokenCache:
        return self._token_cache

    @property
    def endpoints(self) -> EndpointCatalog:
        return self._endpoints

    async def send(self, call: ApiCall) -> Any:
        """Execute an API call and decode its response.

        Returns:
            Decoded payload, or ``None`` for body-less operations.
        """
        correlation_id = ErrorFactory.generate_correlation_id()
        raw = await self._executor.execute(call.descriptor, correlation_id=correlation_id)
        if not call.has_payload:
            self._decoder.decode_empty(raw, correlation_id=correlation_id)
            return None
        return self._decoder.decode(raw, call.response_type, correlation_id=correlation_id)

    # Apps

    async def apps(self, query: AppQuery | None = None) -> PageResponse[App]:
        return await self.send(self._endpoints.apps(query))

    async def apps_by_url(self, url: str) -> PageResponse[App]:
        return await self.send(self._endpoints.apps_by_url(url))

    # Bundle IDs

    async def bundle_ids(self, query: BundleIdQuery | None = None) -> PageResponse[BundleId]:
        return await self.send(self._endpoints.bundle_ids(query))

    async def bundle_ids_by_url(self, url: str) -> PageResponse[BundleId]:
        return await self.send(self._endpoints.bundle_ids_by_url(url))

    async def register_bundle_id(
        self, request: BundleIdCreateRequest
    ) -> EntityResponse[BundleId]:
        return await self.send(self._endpoints.register_bundle_id(request))

    async def delete_bundle_id(self, bundle_id: str) -> None:
        await self.send(self._endpoints.delete_bundle_id(bundle_id))

    async def bundle_id_capabilities(
        self, bundle_id: str
    ) -> CollectionResponse[BundleIdCapability]:
        return await self.send(self._endpoints.bundle_id_capabilities(bundle_id))

    # Certificates

    async def certificates(
        self, query: CertificateQuery | None = None
    ) -> PageResponse[Certificate]:
        return await self.send(self._endpoints.certificates(query))

    async def certificates_by_url(self, url: str) -> PageResponse[Certificate]:
        return await self.send(self._endpoints.certificates_by_url(url))

    async def create_certificate(
        self, request: CertificateCreateRequest
    ) -> EntityResponse[Certificate]:
        return await self.send(self._endpoints.create_certificate(request))

    async def revoke_certificate(self, certificate_id: str) -> None:
        await self.send(self._endpoints.revoke_certificate(certificate_id))

    # Profiles

    async def profiles(self, query: ProfileQuery | None = None) -> PageResponse[Profile]:
        return await self.send(self._endpoints.profiles(query))

    async def profiles_by_url(self, url: str) -> PageResponse[Profile]:
        return await self.send(self._endpoints.profiles_by_url(url))

    async def create_profile(self, request: ProfileCreateRequest) -> EntityResponse[Profile]:
        return await self.send(self._endpoints.create_profile(request))

    async def delete_profile(self, profile_id: str) -> None:
        await self.send(self._endpoints.delete_profile(profile_id))

    # Devices

    async def devices(self, query: DeviceQuery | None = None) -> PageResponse[Device]:
        return await self.send(self._endpoints.devices(query))

    async def devices_by_url(self, url: str) -> PageResponse[Device]:
        return await self.send(self._endpoints.devices_by_url(url))

    async def register_device(self, request: DeviceCreateRequest) -> EntityResponse[Device]:
        return await self.send(self._endpoints.register_device(request))

    # Users

    async def users(self, query: UsersQuery | None = None) -> PageResponse[User]:
        return await self.send(self._endpoints.users(query))

    async def users_by_url(self, url: str) -> PageResponse[User]:
        return await self.send(self._endpoints.users_by_url(url))

    async def user(self, user_id: str) -> EntityResponse[User]:
        return await self.send(self._endpoints.user(user_id))

    async def modify_user(self, request: UserUpdateRequest) -> EntityResponse[User]:
        return await self.send(self._endpoints.modify_user(request))

    async def remove_user(self, user_id: str) -> None:
        await self.send(self._endpoints.remove_user(user_id))

    async def user_visible_apps(
        self,
        user_id: str,
        query: UserVisibleAppsQuery | None = None,
    ) -> PageResponse[App]:
        return await self.send(self._endpoints.user_visible_apps(user_id, query))

    async def user_visible_apps_by_url(self, url: str) -> PageResponse[App]:
        return await self.send(self._endpoints.user_visible_apps_by_url(url))

    # Pagination

    async def next_page(self, page: PageResponse[T]) -> PageResponse[T] | None:
        """Fetch the page after ``page``, or ``None`` when it is the last one."""
        if page.links.next is None:
            return None
        return await self.send(self._endpoints.follow(page.links.next, type(page)))

    async def iter_pages(self, page: PageResponse[T]) -> AsyncIterator[PageResponse[T]]:
        """Yield ``page`` and every page after it."""
        current: PageResponse[T] | None = page
        while current is not None:
            yield current
            current = await self.next_page(current)

    async def iter_items(self, page: PageResponse[T]) -> AsyncIterator[T]:
        """Yield the items of ``page`` and of every page after it."""
        async for current in self.iter_pages(page):
            for item in current.data:
                yield item
