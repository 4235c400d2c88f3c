"""Endpoint catalog shared by the sync and async clients.

Each method returns an ApiCall: the request to send plus the payload type
expected on success, or ``None`` for body-less operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from ..entities import (
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
from ..models import CollectionResponse, EntityResponse, PageResponse
from ..queries import (
    AppQuery,
    BundleIdQuery,
    CertificateQuery,
    DeviceQuery,
    ProfileQuery,
    UsersQuery,
    UserVisibleAppsQuery,
)
from ..types import RequestDescriptor


@dataclass(frozen=True)
class ApiCall:
    """Request descriptor plus the expected success payload type."""

    descriptor: RequestDescriptor
    response_type: Any = None

    @property
    def has_payload(self) -> bool:
        return self.response_type is not None


def _segment(resource_id: str) -> str:
    """Quote a resource ID for use as one path segment."""
    if not resource_id:
        msg = "resource id must not be empty"
        raise ValueError(msg)
    return quote(resource_id, safe="")


class EndpointCatalog:
    """Builds API calls against one base URL."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def _url(self, *segments: str) -> str:
        return "/".join((self.base_url, *segments))

    @staticmethod
    def _get(url: str, response_type: Any, query: Any = None) -> ApiCall:
        pairs = query.to_pairs() if query is not None else None
        return ApiCall(RequestDescriptor("GET", url, query=pairs or None), response_type)

    # Apps

    def apps(self, query: AppQuery | None = None) -> ApiCall:
        return self._get(self._url("apps"), PageResponse[App], query or AppQuery())

    def apps_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[App])

    # Bundle IDs

    def bundle_ids(self, query: BundleIdQuery | None = None) -> ApiCall:
        return self._get(self._url("bundleIds"), PageResponse[BundleId], query or BundleIdQuery())

    def bundle_ids_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[BundleId])

    def register_bundle_id(self, request: BundleIdCreateRequest) -> ApiCall:
        return ApiCall(
            RequestDescriptor("POST", self._url("bundleIds"), body=request.to_body()),
            EntityResponse[BundleId],
        )

    def delete_bundle_id(self, bundle_id: str) -> ApiCall:
        return ApiCall(RequestDescriptor("DELETE", self._url("bundleIds", _segment(bundle_id))))

    def bundle_id_capabilities(self, bundle_id: str) -> ApiCall:
        return self._get(
            self._url("bundleIds", _segment(bundle_id), "bundleIdCapabilities"),
            CollectionResponse[BundleIdCapability],
        )

    # Certificates

    def certificates(self, query: CertificateQuery | None = None) -> ApiCall:
        return self._get(
            self._url("certificates"), PageResponse[Certificate], query or CertificateQuery()
        )

    def certificates_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[Certificate])

    def create_certificate(self, request: CertificateCreateRequest) -> ApiCall:
        return ApiCall(
            RequestDescriptor("POST", self._url("certificates"), body=request.to_body()),
            EntityResponse[Certificate],
        )

    def revoke_certificate(self, certificate_id: str) -> ApiCall:
        return ApiCall(
            RequestDescriptor("DELETE", self._url("certificates", _segment(certificate_id)))
        )

    # Profiles

    def profiles(self, query: ProfileQuery | None = None) -> ApiCall:
        return self._get(self._url("profiles"), PageResponse[Profile], query or ProfileQuery())

    def profiles_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[Profile])

    def create_profile(self, request: ProfileCreateRequest) -> ApiCall:
        return ApiCall(
            RequestDescriptor("POST", self._url("profiles"), body=request.to_body()),
            EntityResponse[Profile],
        )

    def delete_profile(self, profile_id: str) -> ApiCall:
        return ApiCall(RequestDescriptor("DELETE", self._url("profiles", _segment(profile_id))))

    # Devices

    def devices(self, query: DeviceQuery | None = None) -> ApiCall:
        return self._get(self._url("devices"), PageResponse[Device], query or DeviceQuery())

    def devices_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[Device])

    def register_device(self, request: DeviceCreateRequest) -> ApiCall:
        return ApiCall(
            RequestDescriptor("POST", self._url("devices"), body=request.to_body()),
            EntityResponse[Device],
        )

    # Users

    def users(self, query: UsersQuery | None = None) -> ApiCall:
        return self._get(self._url("users"), PageResponse[User], query or UsersQuery())

    def users_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[User])

    def user(self, user_id: str) -> ApiCall:
        return self._get(self._url("users", _segment(user_id)), EntityResponse[User])

    def modify_user(self, request: UserUpdateRequest) -> ApiCall:
        return ApiCall(
            RequestDescriptor(
                "PATCH",
                self._url("users", _segment(request.data.id)),
                body=request.to_body(),
            ),
            EntityResponse[User],
        )

    def remove_user(self, user_id: str) -> ApiCall:
        return ApiCall(RequestDescriptor("DELETE", self._url("users", _segment(user_id))))

    def user_visible_apps(
        self,
        user_id: str,
        query: UserVisibleAppsQuery | None = None,
    ) -> ApiCall:
        return self._get(
            self._url("users", _segment(user_id), "visibleApps"),
            PageResponse[App],
            query or UserVisibleAppsQuery(),
        )

    def user_visible_apps_by_url(self, url: str) -> ApiCall:
        return self._get(url, PageResponse[App])

    # Pagination

    def follow(self, url: str, response_type: Any) -> ApiCall:
        """GET a complete URL returned by the API, such as ``links.next``."""
        return self._get(url, response_type)
