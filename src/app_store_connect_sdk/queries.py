"""Query parameter objects for listing endpoints.

Each query is a frozen model of optional fields plus a declared table
mapping attributes to wire keys. ``to_pairs`` renders only the fields that
are set, in table order, so generated URLs are reproducible.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Annotated, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from .entities import (
    AppSort,
    BundleIdPlatform,
    BundleIdSort,
    CertificateSort,
    CertificateType,
    DeviceSort,
    DeviceStatus,
    ProfileSort,
    ProfileState,
    ProfileType,
    UserRole,
    UserSort,
)

Limit = Annotated[int, Field(ge=1, le=200)]
FieldList = str | tuple[str, ...]


def render_query_value(value: Any) -> str:
    """Render one query value as its wire string.

    Enums use their wire value, integers are decimal, strings are verbatim
    and sequences of strings are comma-joined.

    Raises:
        TypeError: For booleans and unsupported types.
    """
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        msg = "boolean query values are not supported"
        raise TypeError(msg)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        return ",".join(render_query_value(item) for item in value)
    msg = f"unsupported query value type: {type(value).__name__}"
    raise TypeError(msg)


class Query(BaseModel):
    """Base for sparse query objects."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = ()

    def to_pairs(self) -> list[tuple[str, str]]:
        """Ordered ``(key, value)`` pairs for the fields that are set.

        An empty field list counts as unset.
        """
        pairs: list[tuple[str, str]] = []
        for attribute, key in self.wire_keys:
            value = getattr(self, attribute)
            if value is None or value == ():
                continue
            pairs.append((key, render_query_value(value)))
        return pairs

    def with_overrides(self, **changes: Any) -> Self:
        """Create a new query with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return self.__class__(**data)


class AppQuery(Query):
    fields_apps: FieldList | None = None
    filter_bundle_id: str | None = None
    filter_id: str | None = None
    filter_name: str | None = None
    filter_sku: str | None = None
    include: FieldList | None = None
    limit: Limit | None = None
    sort: AppSort | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_apps", "fields[apps]"),
        ("filter_bundle_id", "filter[bundleId]"),
        ("filter_id", "filter[id]"),
        ("filter_name", "filter[name]"),
        ("filter_sku", "filter[sku]"),
        ("include", "include"),
        ("limit", "limit"),
        ("sort", "sort"),
    )


class BundleIdQuery(Query):
    fields_bundle_ids: FieldList | None = None
    fields_profiles: FieldList | None = None
    filter_id: str | None = None
    filter_identifier: str | None = None
    filter_name: str | None = None
    filter_platform: BundleIdPlatform | None = None
    filter_seed_id: str | None = None
    include: FieldList | None = None
    limit: Limit | None = None
    limit_profiles: Limit | None = None
    sort: BundleIdSort | None = None
    fields_bundle_id_capabilities: FieldList | None = None
    limit_bundle_id_capabilities: Limit | None = None
    fields_apps: FieldList | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_bundle_ids", "fields[bundleIds]"),
        ("fields_profiles", "fields[profiles]"),
        ("filter_id", "filter[id]"),
        ("filter_identifier", "filter[identifier]"),
        ("filter_name", "filter[name]"),
        ("filter_platform", "filter[platform]"),
        ("filter_seed_id", "filter[seedId]"),
        ("include", "include"),
        ("limit", "limit"),
        ("limit_profiles", "limit[profiles]"),
        ("sort", "sort"),
        ("fields_bundle_id_capabilities", "fields[bundleIdCapabilities]"),
        ("limit_bundle_id_capabilities", "limit[bundleIdCapabilities]"),
        ("fields_apps", "fields[apps]"),
    )


class CertificateQuery(Query):
    fields_certificates: FieldList | None = None
    filter_id: str | None = None
    filter_serial_number: str | None = None
    limit: Limit | None = None
    sort: CertificateSort | None = None
    filter_certificate_type: CertificateType | None = None
    filter_display_name: str | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_certificates", "fields[certificates]"),
        ("filter_id", "filter[id]"),
        ("filter_serial_number", "filter[serialNumber]"),
        ("limit", "limit"),
        ("sort", "sort"),
        ("filter_certificate_type", "filter[certificateType]"),
        ("filter_display_name", "filter[displayName]"),
    )


class ProfileQuery(Query):
    fields_certificates: FieldList | None = None
    fields_devices: FieldList | None = None
    fields_profiles: FieldList | None = None
    filter_id: str | None = None
    filter_name: str | None = None
    include: FieldList | None = None
    limit: Limit | None = None
    limit_certificates: Limit | None = None
    limit_devices: Limit | None = None
    sort: ProfileSort | None = None
    fields_bundle_ids: FieldList | None = None
    filter_profile_state: ProfileState | None = None
    filter_profile_type: ProfileType | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_certificates", "fields[certificates]"),
        ("fields_devices", "fields[devices]"),
        ("fields_profiles", "fields[profiles]"),
        ("filter_id", "filter[id]"),
        ("filter_name", "filter[name]"),
        ("include", "include"),
        ("limit", "limit"),
        ("limit_certificates", "limit[certificates]"),
        ("limit_devices", "limit[devices]"),
        ("sort", "sort"),
        ("fields_bundle_ids", "fields[bundleIds]"),
        ("filter_profile_state", "filter[profileState]"),
        ("filter_profile_type", "filter[profileType]"),
    )


class DeviceQuery(Query):
    fields_devices: FieldList | None = None
    filter_id: str | None = None
    filter_name: str | None = None
    filter_platform: BundleIdPlatform | None = None
    filter_status: DeviceStatus | None = None
    filter_udid: str | None = None
    limit: Limit | None = None
    sort: DeviceSort | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_devices", "fields[devices]"),
        ("filter_id", "filter[id]"),
        ("filter_name", "filter[name]"),
        ("filter_platform", "filter[platform]"),
        ("filter_status", "filter[status]"),
        ("filter_udid", "filter[udid]"),
        ("limit", "limit"),
        ("sort", "sort"),
    )


class UsersQuery(Query):
    fields_apps: FieldList | None = None
    fields_users: FieldList | None = None
    filter_roles: UserRole | None = None
    filter_username: str | None = None
    filter_visible_apps: str | None = None
    include: FieldList | None = None
    limit: Limit | None = None
    limit_visible_apps: Limit | None = None
    sort: UserSort | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_apps", "fields[apps]"),
        ("fields_users", "fields[users]"),
        ("filter_roles", "filter[roles]"),
        ("filter_username", "filter[username]"),
        ("filter_visible_apps", "filter[visibleApps]"),
        ("include", "include"),
        ("limit", "limit"),
        ("limit_visible_apps", "limit[visibleApps]"),
        ("sort", "sort"),
    )


class UserVisibleAppsQuery(Query):
    fields_apps: FieldList | None = None
    limit: Limit | None = None

    wire_keys: ClassVar[tuple[tuple[str, str], ...]] = (
        ("fields_apps", "fields[apps]"),
        ("limit", "limit"),
    )
