"""Bearer token generation.

Builds the claims set for an issuer identity and signs it through a
pluggable signer. Shared by the sync and async token caches.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from ..errors import SigningError
from ..models import Token, TokenClaims, utcnow
from ..signing import Signer, es256_signer
from ..telemetry import get_logger, trace_operation
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..config import TokenConfig
    from ..models import ClientIdentity

Clock = Callable[[], datetime]


class TokenGenerator:
    """Mints signed bearer tokens for one identity.

    The signature is valid from ``now - backdate`` to ``now + validity``; the
    returned Token's ``expires_at`` is ``now + refresh_after``, which ends
    strictly before the signature does.
    """

    def __init__(
        self,
        identity: ClientIdentity,
        token_config: TokenConfig,
        *,
        signer: Signer = es256_signer,
        clock: Clock = utcnow,
    ) -> None:
        self._identity = identity
        self._config = token_config
        self._signer = signer
        self._clock = clock
        self._logger = get_logger()

    @property
    def clock(self) -> Clock:
        return self._clock

    def build_claims(self, now: datetime) -> TokenClaims:
        """Build the claims set for a token issued at ``now``."""
        issued = now - timedelta(seconds=self._config.backdate_seconds)
        expires = now + timedelta(seconds=self._config.validity_seconds)
        return TokenClaims(
            iss=self._identity.issuer,
            iat=int(issued.timestamp()),
            exp=int(expires.timestamp()),
            aud=self._config.audience,
        )

    def build_header(self) -> dict[str, Any]:
        return {
            "alg": self._config.algorithm,
            "kid": self._identity.key_id,
            "typ": "JWT",
        }

    def generate(self) -> Token:
        """Sign a fresh token.

        Returns:
            Token whose ``expires_at`` is the cache refresh deadline.

        Raises:
            SigningError: If the signer fails for any reason.
        """
        now = self._clock()
        claims = self.build_claims(now)

        with trace_operation(
            "token.generate",
            attributes={"token.kid": self._identity.key_id},
        ):
            try:
                signed = self._signer(
                    self.build_header(),
                    claims.model_dump(),
                    self._identity.private_key.get_secret_value(),
                )
            except SigningError:
                raise
            except Exception as e:
                raise ErrorFactory.from_signing_exception(e) from e

        if not isinstance(signed, str) or not signed:
            raise SigningError("Signer returned an empty token")

        token = Token(
            signed_value=signed,
            expires_at=now + timedelta(seconds=self._config.refresh_after_seconds),
        )
        self._logger.debug(
            "Bearer token generated",
            key_id=self._identity.key_id,
            expires_at=token.expires_at.isoformat(),
        )
        return token
