"""App Store Connect SDK client (sync) and client builder."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Self, TypeVar

from .async_client import AsyncAppStoreConnectClient
from .config import ClientConfig
from .core import (
    EndpointCatalog,
    ErrorFactory,
    ResponseDecoder,
    SyncRequestExecutor,
    TokenCache,
    TokenGenerator,
)
from .http import create_http_client
from .models import utcnow
from .signing import es256_signer

if TYPE_CHECKING:
    import httpx

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


class AppStoreConnectClient:
    """Synchronous App Store Connect client.

    Every operation signs in with the cached bearer token, sends one request
    and returns the decoded payload. Failures raise SigningError,
    TransportError, DecodeError or ServerError; nothing is retried.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.Client | None = None,
        signer: Signer = es256_signer,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize client.

        The first bearer token is generated here, so a key that cannot sign
        fails construction with SigningError.

        Args:
            config: SDK configuration.
            http_client: Optional HTTP client; the caller keeps ownership.
            signer: Token signer.
            clock: Source of the current UTC time.
        """
        self.config = config
        generator = TokenGenerator(config.identity, config.token, signer=signer, clock=clock)
        self._token_cache = TokenCache(generator)
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(config)
        self._executor = SyncRequestExecutor(self._http, self._token_cache)
        self._decoder = ResponseDecoder()
        self._endpoints = EndpointCatalog(config.base_url_str)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            self._http.close()

    @property
    def token_cache(self) -> TokenCache:
        return self._token_cache

    @property
    def endpoints(self) -> EndpointCatalog:
        return self._endpoints

    def send(self, call: ApiCall) -> Any:
        """Execute an API call and decode its response.

        Returns:
            Decoded payload, or ``None`` for body-less operations.
        """
        correlation_id = ErrorFactory.generate_correlation_id()
        raw = self._executor.execute(call.descriptor, correlation_id=correlation_id)
        if not call.has_payload:
            self._decoder.decode_empty(raw, correlation_id=correlation_id)
            return None
        return self._decoder.decode(raw, call.response_type, correlation_id=correlation_id)

    # Apps

    def apps(self, query: AppQuery | None = None) -> PageResponse[App]:
        return self.send(self._endpoints.apps(query))

    def apps_by_url(self, url: str) -> PageResponse[App]:
        return self.send(self._endpoints.apps_by_url(url))

    # Bundle IDs

    def bundle_ids(self, query: BundleIdQuery | None = None) -> PageResponse[BundleId]:
        return self.send(self._endpoints.bundle_ids(query))

    def bundle_ids_by_url(self, url: str) -> PageResponse[BundleId]:
        return self.send(self._endpoints.bundle_ids_by_url(url))

    def register_bundle_id(self, request: BundleIdCreateRequest) -> EntityResponse[BundleId]:
        return self.send(self._endpoints.register_bundle_id(request))

    def delete_bundle_id(self, bundle_id: str) -> None:
        self.send(self._endpoints.delete_bundle_id(bundle_id))

    def bundle_id_capabilities(self, bundle_id: str) -> CollectionResponse[BundleIdCapability]:
        return self.send(self._endpoints.bundle_id_capabilities(bundle_id))

    # Certificates

    def certificates(self, query: CertificateQuery | None = None) -> PageResponse[Certificate]:
        return self.send(self._endpoints.certificates(query))

    def certificates_by_url(self, url: str) -> PageResponse[Certificate]:
        return self.send(self._endpoints.certificates_by_url(url))

    def create_certificate(
        self, request: CertificateCreateRequest
    ) -> EntityResponse[Certificate]:
        return self.send(self._endpoints.create_certificate(request))

    def revoke_certificate(self, certificate_id: str) -> None:
        self.send(self._endpoints.revoke_certificate(certificate_id))

    # Profiles

    def profiles(self, query: ProfileQuery | None = None) -> PageResponse[Profile]:
        return self.send(self._endpoints.profiles(query))

    def profiles_by_url(self, url: str) -> PageResponse[Profile]:
        return self.send(self._endpoints.profiles_by_url(url))

    def create_profile(self, request: ProfileCreateRequest) -> EntityResponse[Profile]:
        return self.send(self._endpoints.create_profile(request))

    def delete_profile(self, profile_id: str) -> None:
        self.send(self._endpoints.delete_profile(profile_id))

    # Devices

    def devices(self, query: DeviceQuery | None = None) -> PageResponse[Device]:
        return self.send(self._endpoints.devices(query))

    def devices_by_url(self, url: str) -> PageResponse[Device]:
        return self.send(self._endpoints.devices_by_url(url))

    def register_device(self, request: DeviceCreateRequest) -> EntityResponse[Device]:
        return self.send(self._endpoints.register_device(request))

    # Users

    def users(self, query: UsersQuery | None = None) -> PageResponse[User]:
        return self.send(self._endpoints.users(query))

    def users_by_url(self, url: str) -> PageResponse[User]:
        return self.send(self._endpoints.users_by_url(url))

    def user(self, user_id: str) -> EntityResponse[User]:
        return self.send(self._endpoints.user(user_id))

    def modify_user(self, request: UserUpdateRequest) -> EntityResponse[User]:
        return self.send(self._endpoints.modify_user(request))

    def remove_user(self, user_id: str) -> None:
        self.send(self._endpoints.remove_user(user_id))

    def user_visible_apps(
        self,
        user_id: str,
        query: UserVisibleAppsQuery | None = None,
    ) -> PageResponse[App]:
        return self.send(self._endpoints.user_visible_apps(user_id, query))

    def user_visible_apps_by_url(self, url: str) -> PageResponse[App]:
        return self.send(self._endpoints.user_visible_apps_by_url(url))

    # Pagination

    def next_page(self, page: PageResponse[T]) -> PageResponse[T] | None:
        """Fetch the page after ``page``.

        Returns:
            The next page, or ``None`` when ``page`` is the last one.
        """
        if page.links.next is None:
            return None
        return self.send(self._endpoints.follow(page.links.next, type(page)))

    def iter_pages(self, page: PageResponse[T]) -> Iterator[PageResponse[T]]:
        """Yield ``page`` and every page after it."""
        current: PageResponse[T] | None = page
        while current is not None:
            yield current
            current = self.next_page(current)

    def iter_items(self, page: PageResponse[T]) -> Iterator[T]:
        """Yield the items of ``page`` and of every page after it."""
        for current in self.iter_pages(page):
            yield from current.data


class ClientBuilder:
    """Fluent builder validating settings through ClientConfig.

    A missing issuer, key ID or key raises ConfigurationError from
    ``build()``, before any request is attempted.
    """

    def __init__(self) -> None:
        self._settings: dict[str, Any] = {}

    def with_issuer(self, issuer: str) -> Self:
        self._settings["issuer"] = issuer
        return self

    def with_key_id(self, key_id: str) -> Self:
        self._settings["key_id"] = key_id
        return self

    def with_private_key(self, private_key: bytes | str) -> Self:
        """Set key material: PEM text of the ``.p8`` file or raw DER bytes."""
        if isinstance(private_key, str):
            private_key = private_key.encode()
        self._settings["private_key"] = private_key
        return self

    def with_base_url(self, base_url: str) -> Self:
        self._settings["base_url"] = base_url
        return self

    def with_timeout(self, timeout: float) -> Self:
        self._settings["timeout"] = timeout
        return self

    def config(self) -> ClientConfig:
        """Validate the collected settings.

        Raises:
            ConfigurationError: If a required setting is missing or invalid.
        """
        return ClientConfig(**self._settings)

    def build(self, **kwargs: Any) -> AppStoreConnectClient:
        """Build a sync client; ``kwargs`` are passed to its constructor."""
        return AppStoreConnectClient(self.config(), **kwargs)

    def build_async(self, **kwargs: Any) -> AsyncAppStoreConnectClient:
        """Build an async client; ``kwargs`` are passed to its constructor."""
        return AsyncAppStoreConnectClient(self.config(), **kwargs)
