"""Configuration for the App Store Connect SDK.

Uses Pydantic v2 for validation with sensible defaults. Every validation
failure surfaces as :class:`ConfigurationError` at construction time, before
any request can be attempted.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretBytes,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .core.errors import ErrorFactory
from .errors import ConfigurationError, ErrorCode
from .models import ClientIdentity, NonEmptyStr

DEFAULT_BASE_URL = "https://api.appstoreconnect.apple.com/v1"
DEFAULT_AUDIENCE = "appstoreconnect-v1"

# The API rejects tokens whose lifetime exceeds 20 minutes
MAX_TOKEN_VALIDITY_SECONDS = 1200


class ValidatedConfig(BaseModel):
    """Frozen config model raising ConfigurationError instead of pydantic errors."""

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ErrorFactory.config_error(e) from e

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)


class TokenConfig(ValidatedConfig):
    """Bearer token lifetime settings.

    ``validity_seconds`` is the signature's own lifetime. The cache stops
    handing a token out after ``refresh_after_seconds``, leaving the
    difference as headroom for in-flight requests and clock skew.
    """

    validity_seconds: Annotated[int, Field(gt=0, le=MAX_TOKEN_VALIDITY_SECONDS)] = 900
    refresh_after_seconds: Annotated[int, Field(gt=0)] = 600
    backdate_seconds: Annotated[int, Field(ge=0, le=3600)] = 300
    audience: str = Field(default=DEFAULT_AUDIENCE, min_length=1)
    algorithm: str = "ES256"

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Validate token algorithm is supported."""
        if v != "ES256":
            msg = f"Unsupported token algorithm: {v}. Supported: ES256"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_windows(self) -> Self:
        """Cached lifetime must end before the signature expires."""
        if self.refresh_after_seconds >= self.validity_seconds:
            raise ErrorFactory.invalid_setting(
                "refresh_after_seconds", "must be less than validity_seconds"
            )
        return self

    @property
    def safety_margin_seconds(self) -> int:
        """Minimum remaining signature lifetime of any token handed out."""
        return self.validity_seconds - self.refresh_after_seconds


class TelemetryConfig(ValidatedConfig):
    """Logging and tracing configuration."""

    enabled: bool = True
    service_name: str = "app-store-connect-sdk"
    trace_requests: bool = True
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            msg = f"Unsupported log level: {v}. Supported: {sorted(levels)}"
            raise ValueError(msg)
        return v.upper()


class ClientConfig(ValidatedConfig):
    """Main configuration for the App Store Connect SDK."""

    # Required
    issuer: NonEmptyStr
    key_id: NonEmptyStr
    private_key: SecretBytes

    # HTTP settings
    base_url: HttpUrl = HttpUrl(DEFAULT_BASE_URL)
    timeout: Annotated[float, Field(gt=0, le=300)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0
    user_agent: str = "app-store-connect-sdk/0.1.0 Python"

    # Sub-configurations
    token: TokenConfig = Field(default_factory=TokenConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("token", "telemetry", mode="before")
    @classmethod
    def build_sub_config(cls, v: Any, info: ValidationInfo) -> Any:
        """Build nested settings so their errors carry the dotted field path."""
        if not isinstance(v, dict):
            return v
        sub_config = TokenConfig if info.field_name == "token" else TelemetryConfig
        try:
            return sub_config(**v)
        except ConfigurationError as e:
            raise ErrorFactory.nested_config_error(e, info.field_name) from e

    @field_validator("private_key")
    @classmethod
    def validate_private_key(cls, v: SecretBytes) -> SecretBytes:
        """Reject empty key material."""
        if not v.get_secret_value().strip():
            msg = "private_key must not be empty"
            raise ValueError(msg)
        return v

    @property
    def base_url_str(self) -> str:
        """Get base URL as string without trailing slash."""
        return str(self.base_url).rstrip("/")

    @property
    def identity(self) -> ClientIdentity:
        """Issuer identity used for token generation."""
        return ClientIdentity(
            issuer=self.issuer,
            key_id=self.key_id,
            private_key=self.private_key,
        )

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data["private_key"] = self.private_key.get_secret_value()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "APP_STORE_CONNECT_") -> Self:
        """Create config from environment variables.

        Reads ``ISSUER_ID``, ``KEY_ID`` and either ``PRIVATE_KEY`` (PEM text)
        or ``PRIVATE_KEY_PATH`` (path to the ``.p8`` file), plus optional
        ``BASE_URL`` and ``TIMEOUT``.
        """

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        issuer = get_env("ISSUER_ID")
        if not issuer:
            msg = f"{prefix}ISSUER_ID environment variable is required"
            raise ConfigurationError(msg, field="issuer", code=ErrorCode.MISSING_CREDENTIAL)

        key_id = get_env("KEY_ID")
        if not key_id:
            msg = f"{prefix}KEY_ID environment variable is required"
            raise ConfigurationError(msg, field="key_id", code=ErrorCode.MISSING_CREDENTIAL)

        private_key = get_env("PRIVATE_KEY")
        key_path = get_env("PRIVATE_KEY_PATH")
        if not private_key and key_path:
            try:
                private_key = Path(key_path).read_bytes()
            except OSError as e:
                msg = f"Cannot read {prefix}PRIVATE_KEY_PATH: {e}"
                raise ConfigurationError(msg, field="private_key") from e
        if not private_key:
            msg = (
                f"{prefix}PRIVATE_KEY or {prefix}PRIVATE_KEY_PATH environment variable is required"
            )
            raise ConfigurationError(
                msg, field="private_key", code=ErrorCode.MISSING_CREDENTIAL
            )

        overrides: dict[str, Any] = {}
        if base_url := get_env("BASE_URL"):
            overrides["base_url"] = base_url
        if timeout := get_env("TIMEOUT"):
            overrides["timeout"] = timeout

        return cls(
            issuer=issuer,
            key_id=key_id,
            private_key=private_key,
            **overrides,
        )
