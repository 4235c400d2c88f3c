"""
Shared test fixtures for App Store Connect SDK tests.

Provides generated EC keys, a controllable clock, a counting signer and an
in-memory API served through httpx.MockTransport.
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from app_store_connect_sdk.config import ClientConfig
from app_store_connect_sdk.core.token_generator import TokenGenerator

from tests.support import BASE_URL, ISSUER, KEY_ID, CountingSigner, FakeApi, FakeClock


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    """Provide a P-256 private key shared by the session."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def private_key_pem(ec_private_key: ec.EllipticCurvePrivateKey) -> bytes:
    """Provide the key as a PKCS#8 PEM, the format of a ``.p8`` file."""
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def private_key_der(ec_private_key: ec.EllipticCurvePrivateKey) -> bytes:
    """Provide the key as PKCS#8 DER."""
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture
def client_config(private_key_pem: bytes) -> ClientConfig:
    """Provide a valid client configuration pointing at the fake API."""
    return ClientConfig(
        issuer=ISSUER,
        key_id=KEY_ID,
        private_key=private_key_pem,
        base_url=BASE_URL,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def counting_signer() -> CountingSigner:
    return CountingSigner()


@pytest.fixture
def token_generator(
    client_config: ClientConfig,
    counting_signer: CountingSigner,
    fake_clock: FakeClock,
) -> TokenGenerator:
    """Provide a generator using the counting signer and fake clock."""
    return TokenGenerator(
        client_config.identity,
        client_config.token,
        signer=counting_signer,
        clock=fake_clock,
    )


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()
