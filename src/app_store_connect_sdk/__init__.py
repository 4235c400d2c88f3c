"""App Store Connect Python SDK."""

from .async_client import AsyncAppStoreConnectClient
from .client import AppStoreConnectClient, ClientBuilder
from .config import ClientConfig, TelemetryConfig, TokenConfig
from .errors import (
    AppStoreConnectError,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    RequestTimeoutError,
    ServerError,
    SigningError,
    TransportError,
)
from .models import (
    CollectionResponse,
    EntityResponse,
    ErrorEntry,
    PageResponse,
    Token,
)
from .signing import Signer, es256_signer
from .telemetry import configure_telemetry

__all__ = [
    "AppStoreConnectClient",
    "AsyncAppStoreConnectClient",
    "ClientBuilder",
    "ClientConfig",
    "TelemetryConfig",
    "TokenConfig",
    "AppStoreConnectError",
    "ConfigurationError",
    "DecodeError",
    "ErrorCode",
    "RequestTimeoutError",
    "ServerError",
    "SigningError",
    "TransportError",
    "CollectionResponse",
    "EntityResponse",
    "ErrorEntry",
    "PageResponse",
    "Token",
    "Signer",
    "es256_signer",
    "configure_telemetry",
]

__version__ = "0.1.0"
