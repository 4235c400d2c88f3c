"""Pydantic models for the App Store Connect SDK.

Uses Pydantic v2 with frozen models for immutability. Wire models accept the
API's camelCase field names and expose snake_case attributes.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated, Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretBytes,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

T = TypeVar("T")

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class ApiModel(BaseModel):
    """Base for JSON:API wire models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ClientIdentity(BaseModel):
    """Issuer identity used to mint bearer tokens."""

    model_config = ConfigDict(frozen=True)

    issuer: NonEmptyStr
    key_id: NonEmptyStr
    private_key: SecretBytes

    @field_validator("private_key")
    @classmethod
    def validate_private_key(cls, v: SecretBytes) -> SecretBytes:
        """Reject empty key material."""
        if not v.get_secret_value().strip():
            msg = "private_key must not be empty"
            raise ValueError(msg)
        return v


class Token(BaseModel):
    """Signed bearer token and the moment the cache stops handing it out."""

    model_config = ConfigDict(frozen=True)

    signed_value: str = Field(..., min_length=1, repr=False)
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the token must be replaced before use."""
        return (now or utcnow()) >= self.expires_at

    def time_until_expiry(self, now: datetime | None = None) -> timedelta:
        """Get time remaining until the cache regenerates the token."""
        return self.expires_at - (now or utcnow())


class TokenClaims(BaseModel):
    """JWT claims presented to the API."""

    model_config = ConfigDict(frozen=True)

    iss: str
    iat: int
    exp: int
    aud: str


# Errors


class ErrorEntry(BaseModel):
    """One entry of the API's error document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: str
    code: str
    title: str
    detail: str
    id: str | None = None


class ErrorDocument(BaseModel):
    """Non-2xx response body: ``{"errors": [...]}``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    errors: list[ErrorEntry]


# Links and paging


class SelfLinks(ApiModel):
    self_: str = Field(..., alias="self")


class MetaLinks(ApiModel):
    self_: str | None = Field(default=None, alias="self")
    related: str | None = None


class PageLinks(ApiModel):
    """Navigation links of a page; ``next`` is a complete URL."""

    self_: str = Field(..., alias="self")
    next: str | None = None
    first: str | None = None


class Paging(ApiModel):
    total: int
    limit: int


class PageMeta(ApiModel):
    paging: Paging


class ResourceIdentifier(ApiModel):
    """Linkage object: ``{"type": ..., "id": ...}``."""

    type_: str = Field(..., alias="type")
    id: str


class Relationship(ApiModel):
    """Relationship member; every part is optional depending on the call path."""

    links: MetaLinks | None = None
    meta: PageMeta | None = None
    data: ResourceIdentifier | list[ResourceIdentifier] | None = None


# Envelopes


class EntityResponse(ApiModel, Generic[T]):
    """Single resource envelope: ``{"data": ..., "links": {"self": ...}}``."""

    data: T
    links: SelfLinks


class PageResponse(ApiModel, Generic[T]):
    """Collection page envelope."""

    data: list[T]
    links: PageLinks
    meta: PageMeta

    @property
    def has_next(self) -> bool:
        """Check if another page follows this one."""
        return self.links.next is not None

    @property
    def total(self) -> int:
        return self.meta.paging.total


class CollectionResponse(ApiModel, Generic[T]):
    """Unpaged collection envelope; ``meta`` may be omitted by the API."""

    data: list[T]
    links: PageLinks
    meta: PageMeta | None = None
