"""ES256 signing of bearer tokens.

The private key is the ``.p8`` file issued alongside an API key: a PKCS#8
EC key on the P-256 curve, normally PEM-armored. DER input is accepted too.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import ErrorCode, SigningError

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey

PEM_MARKER = b"-----BEGIN"


class Signer(Protocol):
    """Produces the compact serialization of a signed token."""

    def __call__(
        self,
        header: dict[str, Any],
        claims: dict[str, Any],
        private_key: bytes,
    ) -> str: ...


def load_private_key(material: bytes) -> EllipticCurvePrivateKey:
    """Load an EC private key from PEM or DER bytes.

    Raises:
        SigningError: If the material is unreadable or not an EC key.
    """
    try:
        if material.lstrip().startswith(PEM_MARKER):
            private_key = serialization.load_pem_private_key(material, password=None)
        else:
            private_key = serialization.load_der_private_key(material, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(
            "Private key could not be loaded",
            code=ErrorCode.INVALID_KEY,
            cause=e,
        ) from e

    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise SigningError("Key must be an EC private key", code=ErrorCode.INVALID_KEY)
    return private_key


def es256_signer(
    header: dict[str, Any],
    claims: dict[str, Any],
    private_key: bytes,
) -> str:
    """Sign claims with ES256 using PyJWT.

    ``alg`` and ``typ`` come from ``header`` as PyJWT merges the given
    headers over its own.

    Raises:
        SigningError: If the key cannot be loaded or signing fails.
    """
    key = load_private_key(private_key)
    try:
        return jwt.encode(claims, key, algorithm="ES256", headers=header)
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise SigningError(cause=e) from e
