"""Unit tests for bearer token generation."""

from datetime import timedelta

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from app_store_connect_sdk.config import ClientConfig, TokenConfig
from app_store_connect_sdk.core.token_generator import TokenGenerator
from app_store_connect_sdk.errors import ErrorCode, SigningError

from tests.support import ISSUER, KEY_ID, CountingSigner, FakeClock


class TestTokenGenerator:
    """Tests for claims, header and expiry."""

    def test_claims_use_backdate_and_validity(
        self,
        token_generator: TokenGenerator,
        counting_signer: CountingSigner,
        fake_clock: FakeClock,
    ) -> None:
        token_generator.generate()

        header, claims = counting_signer.calls[0]
        now = int(fake_clock.now.timestamp())
        assert claims == {
            "iss": ISSUER,
            "iat": now - 300,
            "exp": now + 900,
            "aud": "appstoreconnect-v1",
        }
        assert header == {"alg": "ES256", "kid": KEY_ID, "typ": "JWT"}

    def test_cached_expiry_precedes_signature_expiry(
        self,
        token_generator: TokenGenerator,
        counting_signer: CountingSigner,
        fake_clock: FakeClock,
    ) -> None:
        token = token_generator.generate()

        _, claims = counting_signer.calls[0]
        assert token.signed_value == "token-1"
        assert token.expires_at == fake_clock.now + timedelta(seconds=600)
        assert token.expires_at.timestamp() < claims["exp"]

    def test_custom_windows(self, client_config: ClientConfig, fake_clock: FakeClock) -> None:
        signer = CountingSigner()
        config = TokenConfig(validity_seconds=1200, refresh_after_seconds=1000, backdate_seconds=0)
        generator = TokenGenerator(client_config.identity, config, signer=signer, clock=fake_clock)

        token = generator.generate()

        _, claims = signer.calls[0]
        now = int(fake_clock.now.timestamp())
        assert claims["iat"] == now
        assert claims["exp"] == now + 1200
        assert token.expires_at == fake_clock.now + timedelta(seconds=1000)

    def test_signer_exception_becomes_signing_error(
        self, client_config: ClientConfig, fake_clock: FakeClock
    ) -> None:
        cause = RuntimeError("hsm unavailable")
        generator = TokenGenerator(
            client_config.identity,
            client_config.token,
            signer=CountingSigner(fail_with=cause),
            clock=fake_clock,
        )

        with pytest.raises(SigningError) as exc_info:
            generator.generate()

        assert exc_info.value.__cause__ is cause

    def test_signing_error_passes_through(
        self, client_config: ClientConfig, fake_clock: FakeClock
    ) -> None:
        original = SigningError("bad key", code=ErrorCode.INVALID_KEY)
        generator = TokenGenerator(
            client_config.identity,
            client_config.token,
            signer=CountingSigner(fail_with=original),
            clock=fake_clock,
        )

        with pytest.raises(SigningError) as exc_info:
            generator.generate()

        assert exc_info.value is original

    def test_empty_signature_rejected(
        self, client_config: ClientConfig, fake_clock: FakeClock
    ) -> None:
        generator = TokenGenerator(
            client_config.identity,
            client_config.token,
            signer=lambda header, claims, key: "",
            clock=fake_clock,
        )

        with pytest.raises(SigningError):
            generator.generate()

    def test_default_signer_produces_verifiable_token(
        self,
        client_config: ClientConfig,
        ec_private_key: ec.EllipticCurvePrivateKey,
    ) -> None:
        generator = TokenGenerator(client_config.identity, client_config.token)

        token = generator.generate()

        claims = jwt.decode(
            token.signed_value,
            ec_private_key.public_key(),
            algorithms=["ES256"],
            audience="appstoreconnect-v1",
        )
        assert claims["iss"] == ISSUER
        assert jwt.get_unverified_header(token.signed_value)["kid"] == KEY_ID
