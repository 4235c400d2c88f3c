"""Resource models for the App Store Connect API.

Closed vocabularies are StrEnums whose values are the exact wire strings;
an unknown wire string fails validation instead of being coerced.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal, Self

from pydantic import Field

from .models import ApiModel, Relationship, SelfLinks


class RequestBody(ApiModel):
    """Create/update payload sent as the JSON request body."""

    def to_body(self) -> dict[str, Any]:
        """JSON value with wire names and without null members."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Vocabularies


class BundleIdPlatform(StrEnum):
    IOS = "IOS"
    MAC_OS = "MAC_OS"
    UNIVERSAL = "UNIVERSAL"
    SERVICES = "SERVICES"


class CertificateType(StrEnum):
    IOS_DEVELOPMENT = "IOS_DEVELOPMENT"
    IOS_DISTRIBUTION = "IOS_DISTRIBUTION"
    MAC_APP_DISTRIBUTION = "MAC_APP_DISTRIBUTION"
    MAC_INSTALLER_DISTRIBUTION = "MAC_INSTALLER_DISTRIBUTION"
    MAC_APP_DEVELOPMENT = "MAC_APP_DEVELOPMENT"
    DEVELOPER_ID_KEXT = "DEVELOPER_ID_KEXT"
    DEVELOPER_ID_APPLICATION = "DEVELOPER_ID_APPLICATION"
    DEVELOPMENT = "DEVELOPMENT"
    DISTRIBUTION = "DISTRIBUTION"
    PASS_TYPE_ID = "PASS_TYPE_ID"
    PASS_TYPE_ID_WITH_NFC = "PASS_TYPE_ID_WITH_NFC"


class ProfileState(StrEnum):
    ACTIVE = "ACTIVE"
    INVALID = "INVALID"


class ProfileType(StrEnum):
    IOS_APP_DEVELOPMENT = "IOS_APP_DEVELOPMENT"
    IOS_APP_STORE = "IOS_APP_STORE"
    IOS_APP_ADHOC = "IOS_APP_ADHOC"
    IOS_APP_INHOUSE = "IOS_APP_INHOUSE"
    MAC_APP_DEVELOPMENT = "MAC_APP_DEVELOPMENT"
    MAC_APP_STORE = "MAC_APP_STORE"
    MAC_APP_DIRECT = "MAC_APP_DIRECT"
    TVOS_APP_DEVELOPMENT = "TVOS_APP_DEVELOPMENT"
    TVOS_APP_STORE = "TVOS_APP_STORE"
    TVOS_APP_ADHOC = "TVOS_APP_ADHOC"
    TVOS_APP_INHOUSE = "TVOS_APP_INHOUSE"
    MAC_CATALYST_APP_DEVELOPMENT = "MAC_CATALYST_APP_DEVELOPMENT"
    MAC_CATALYST_APP_STORE = "MAC_CATALYST_APP_STORE"
    MAC_CATALYST_APP_DIRECT = "MAC_CATALYST_APP_DIRECT"


class DeviceStatus(StrEnum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    PROCESSING = "PROCESSING"
    INELIGIBLE = "INELIGIBLE"


class DeviceClass(StrEnum):
    APPLE_WATCH = "APPLE_WATCH"
    APPLE_TV = "APPLE_TV"
    APPLE_VISION_PRO = "APPLE_VISION_PRO"
    IPAD = "IPAD"
    IPHONE = "IPHONE"
    IPOD = "IPOD"
    MAC = "MAC"


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    FINANCE = "FINANCE"
    ACCOUNT_HOLDER = "ACCOUNT_HOLDER"
    SALES = "SALES"
    MARKETING = "MARKETING"
    APP_MANAGER = "APP_MANAGER"
    DEVELOPER = "DEVELOPER"
    ACCESS_TO_REPORTS = "ACCESS_TO_REPORTS"
    CUSTOMER_SUPPORT = "CUSTOMER_SUPPORT"
    CREATE_APPS = "CREATE_APPS"
    CLOUD_MANAGED_DEVELOPER_ID = "CLOUD_MANAGED_DEVELOPER_ID"
    CLOUD_MANAGED_APP_DISTRIBUTION = "CLOUD_MANAGED_APP_DISTRIBUTION"
    GENERATE_INDIVIDUAL_KEYS = "GENERATE_INDIVIDUAL_KEYS"


# Sort orders; a leading "-" means descending


class AppSort(StrEnum):
    BUNDLE_ID = "bundleId"
    BUNDLE_ID_DESC = "-bundleId"
    NAME = "name"
    NAME_DESC = "-name"
    SKU = "sku"
    SKU_DESC = "-sku"


class BundleIdSort(StrEnum):
    ID = "id"
    ID_DESC = "-id"
    IDENTIFIER = "identifier"
    IDENTIFIER_DESC = "-identifier"
    NAME = "name"
    NAME_DESC = "-name"
    PLATFORM = "platform"
    PLATFORM_DESC = "-platform"
    SEED_ID = "seedId"
    SEED_ID_DESC = "-seedId"


class CertificateSort(StrEnum):
    ID = "id"
    ID_DESC = "-id"
    CERTIFICATE_TYPE = "certificateType"
    CERTIFICATE_TYPE_DESC = "-certificateType"
    DISPLAY_NAME = "displayName"
    DISPLAY_NAME_DESC = "-displayName"
    SERIAL_NUMBER = "serialNumber"
    SERIAL_NUMBER_DESC = "-serialNumber"


class ProfileSort(StrEnum):
    ID = "id"
    ID_DESC = "-id"
    NAME = "name"
    NAME_DESC = "-name"
    PROFILE_STATE = "profileState"
    PROFILE_STATE_DESC = "-profileState"
    PROFILE_TYPE = "profileType"
    PROFILE_TYPE_DESC = "-profileType"


class DeviceSort(StrEnum):
    ID = "id"
    ID_DESC = "-id"
    NAME = "name"
    NAME_DESC = "-name"
    PLATFORM = "platform"
    PLATFORM_DESC = "-platform"
    STATUS = "status"
    STATUS_DESC = "-status"
    UDID = "udid"
    UDID_DESC = "-udid"


class UserSort(StrEnum):
    LAST_NAME = "lastName"
    LAST_NAME_DESC = "-lastName"
    USERNAME = "username"
    USERNAME_DESC = "-username"


# Apps


class AppAttributes(ApiModel):
    name: str
    bundle_id: str
    sku: str
    primary_locale: str | None = None


class App(ApiModel):
    type_: Literal["apps"] = Field(..., alias="type")
    id: str
    attributes: AppAttributes
    relationships: dict[str, Relationship] | None = None
    links: SelfLinks


# Bundle IDs


class BundleIdAttributes(ApiModel):
    name: str
    identifier: str
    platform: BundleIdPlatform
    seed_id: str | None = None


class BundleIdRelationships(ApiModel):
    bundle_id_capabilities: Relationship | None = None
    profiles: Relationship | None = None
    app: Relationship | None = None


class BundleId(ApiModel):
    type_: Literal["bundleIds"] = Field(..., alias="type")
    id: str
    attributes: BundleIdAttributes
    relationships: BundleIdRelationships | None = None
    links: SelfLinks


class BundleIdCapabilityAttributes(ApiModel):
    capability_type: str
    settings: list[dict[str, Any]] | None = None


class BundleIdCapability(ApiModel):
    type_: Literal["bundleIdCapabilities"] = Field(..., alias="type")
    id: str
    attributes: BundleIdCapabilityAttributes
    links: SelfLinks


class BundleIdCreateAttributes(ApiModel):
    identifier: str
    name: str
    platform: BundleIdPlatform
    seed_id: str | None = None


class BundleIdCreateData(ApiModel):
    type_: Literal["bundleIds"] = Field(default="bundleIds", alias="type")
    attributes: BundleIdCreateAttributes


class BundleIdCreateRequest(RequestBody):
    data: BundleIdCreateData

    @classmethod
    def build(
        cls,
        *,
        identifier: str,
        name: str,
        platform: BundleIdPlatform,
        seed_id: str | None = None,
    ) -> Self:
        return cls(
            data=BundleIdCreateData(
                attributes=BundleIdCreateAttributes(
                    identifier=identifier,
                    name=name,
                    platform=platform,
                    seed_id=seed_id,
                )
            )
        )


# Certificates


class CertificateAttributes(ApiModel):
    serial_number: str
    certificate_content: str
    display_name: str
    name: str
    csr_content: str | None = None
    platform: BundleIdPlatform | None = None
    expiration_date: datetime
    certificate_type: CertificateType


class CertificateRelationships(ApiModel):
    pass_type_id: Relationship | None = None


class Certificate(ApiModel):
    type_: Literal["certificates"] = Field(..., alias="type")
    id: str
    attributes: CertificateAttributes
    relationships: CertificateRelationships | None = None
    links: SelfLinks


class CertificateCreateAttributes(ApiModel):
    certificate_type: CertificateType
    csr_content: str = Field(..., min_length=1)


class CertificateCreateData(ApiModel):
    type_: Literal["certificates"] = Field(default="certificates", alias="type")
    attributes: CertificateCreateAttributes


class CertificateCreateRequest(RequestBody):
    data: CertificateCreateData

    @classmethod
    def build(cls, *, certificate_type: CertificateType, csr_content: str) -> Self:
        return cls(
            data=CertificateCreateData(
                attributes=CertificateCreateAttributes(
                    certificate_type=certificate_type,
                    csr_content=csr_content,
                )
            )
        )


# Profiles


class ProfileAttributes(ApiModel):
    name: str
    platform: BundleIdPlatform
    profile_content: str
    uuid: str
    created_date: datetime | None = None
    profile_state: ProfileState
    profile_type: ProfileType
    expiration_date: datetime


class ProfileRelationships(ApiModel):
    bundle_id: Relationship | None = None
    certificates: Relationship | None = None
    devices: Relationship | None = None


class Profile(ApiModel):
    type_: Literal["profiles"] = Field(..., alias="type")
    id: str
    attributes: ProfileAttributes
    relationships: ProfileRelationships | None = None
    links: SelfLinks


class ResourceLinkage(ApiModel):
    """Outgoing ``{"type", "id"}`` pair in request relationships."""

    type_: Literal["bundleIds", "certificates", "devices", "apps"] = Field(..., alias="type")
    id: str = Field(..., min_length=1)


class LinkageToOne(ApiModel):
    data: ResourceLinkage


class LinkageToMany(ApiModel):
    data: list[ResourceLinkage]


class ProfileCreateAttributes(ApiModel):
    name: str = Field(..., min_length=1)
    profile_type: ProfileType


class ProfileCreateRelationships(ApiModel):
    bundle_id: LinkageToOne
    certificates: LinkageToMany
    # Not sent for store/in-house profiles
    devices: LinkageToMany | None = None


class ProfileCreateData(ApiModel):
    type_: Literal["profiles"] = Field(default="profiles", alias="type")
    attributes: ProfileCreateAttributes
    relationships: ProfileCreateRelationships


class ProfileCreateRequest(RequestBody):
    data: ProfileCreateData

    @classmethod
    def build(
        cls,
        *,
        name: str,
        profile_type: ProfileType,
        bundle_id: str,
        certificate_ids: list[str],
        device_ids: list[str] | None = None,
    ) -> Self:
        devices = None
        if device_ids is not None:
            devices = LinkageToMany(
                data=[ResourceLinkage(type_="devices", id=i) for i in device_ids]
            )
        return cls(
            data=ProfileCreateData(
                attributes=ProfileCreateAttributes(name=name, profile_type=profile_type),
                relationships=ProfileCreateRelationships(
                    bundle_id=LinkageToOne(
                        data=ResourceLinkage(type_="bundleIds", id=bundle_id)
                    ),
                    certificates=LinkageToMany(
                        data=[
                            ResourceLinkage(type_="certificates", id=i)
                            for i in certificate_ids
                        ]
                    ),
                    devices=devices,
                ),
            )
        )


# Devices


class DeviceAttributes(ApiModel):
    name: str
    platform: BundleIdPlatform
    udid: str
    device_class: DeviceClass | None = None
    status: DeviceStatus
    model: str | None = None
    added_date: datetime | None = None


class Device(ApiModel):
    type_: Literal["devices"] = Field(..., alias="type")
    id: str
    attributes: DeviceAttributes
    links: SelfLinks


class DeviceCreateAttributes(ApiModel):
    name: str = Field(..., min_length=1)
    platform: BundleIdPlatform
    udid: str = Field(..., min_length=1)


class DeviceCreateData(ApiModel):
    type_: Literal["devices"] = Field(default="devices", alias="type")
    attributes: DeviceCreateAttributes


class DeviceCreateRequest(RequestBody):
    data: DeviceCreateData

    @classmethod
    def build(cls, *, name: str, platform: BundleIdPlatform, udid: str) -> Self:
        return cls(
            data=DeviceCreateData(
                attributes=DeviceCreateAttributes(name=name, platform=platform, udid=udid)
            )
        )


# Users


class UserAttributes(ApiModel):
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    roles: list[UserRole] = Field(default_factory=list)
    all_apps_visible: bool | None = None
    provisioning_allowed: bool | None = None


class UserRelationships(ApiModel):
    visible_apps: Relationship | None = None


class User(ApiModel):
    type_: Literal["users"] = Field(..., alias="type")
    id: str
    attributes: UserAttributes
    relationships: UserRelationships | None = None
    links: SelfLinks


class UserUpdateAttributes(ApiModel):
    all_apps_visible: bool | None = None
    provisioning_allowed: bool | None = None
    roles: list[UserRole] | None = None


class UserUpdateRelationships(ApiModel):
    visible_apps: LinkageToMany | None = None


class UserUpdateData(ApiModel):
    type_: Literal["users"] = Field(default="users", alias="type")
    id: str = Field(..., min_length=1)
    attributes: UserUpdateAttributes | None = None
    relationships: UserUpdateRelationships | None = None


class UserUpdateRequest(RequestBody):
    data: UserUpdateData

    @classmethod
    def build(
        cls,
        user_id: str,
        *,
        all_apps_visible: bool | None = None,
        provisioning_allowed: bool | None = None,
        roles: list[UserRole] | None = None,
        visible_app_ids: list[str] | None = None,
    ) -> Self:
        attributes = None
        if any(v is not None for v in (all_apps_visible, provisioning_allowed, roles)):
            attributes = UserUpdateAttributes(
                all_apps_visible=all_apps_visible,
                provisioning_allowed=provisioning_allowed,
                roles=roles,
            )
        relationships = None
        if visible_app_ids is not None:
            relationships = UserUpdateRelationships(
                visible_apps=LinkageToMany(
                    data=[ResourceLinkage(type_="apps", id=i) for i in visible_app_ids]
                )
            )
        return cls(
            data=UserUpdateData(
                id=user_id,
                attributes=attributes,
                relationships=relationships,
            )
        )
