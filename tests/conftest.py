"""Shared pytest fixtures for idgate tests."""

import datetime

import jwt
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from idgate.key_resolvers.static import StaticKeyResolver

NOW = 1_700_000_000
KID = "test-kid"
CLIENT_ID = "DUMMY_CLIENT_ID"
ISSUER = "accounts.google.com"


def _generate_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key():
    """RSA key used to sign test tokens."""
    return _generate_key()


@pytest.fixture(scope="session")
def other_private_key():
    """RSA key that does not match any published key."""
    return _generate_key()


@pytest.fixture(scope="session")
def ec_private_key():
    """P-256 key for ES256 tokens."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def public_key_pem(private_key):
    """PEM encoded public half of ``private_key``."""
    return private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


@pytest.fixture(scope="session")
def certificate_pem(private_key):
    """Self-signed X.509 certificate, the format of Google's v1 certs endpoint."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "idgate-test")])
    issued = datetime.datetime(2023, 1, 1, tzinfo=datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(issued)
        .not_valid_after(issued + datetime.timedelta(days=365))
        .sign(private_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("utf-8")


@pytest.fixture
def claims():
    """Claims of a token that should verify at NOW."""
    return {
        "sub": "110169484474386276334",
        "aud": CLIENT_ID,
        "iss": ISSUER,
        "iat": NOW - 60,
        "exp": NOW + 3600,
        "email": "user@example.com",
    }


@pytest.fixture
def make_token(private_key, claims):
    """Build a signed token; keyword arguments override claims."""

    def _make(key=None, kid=KID, algorithm="RS256", **overrides):
        payload = {**claims, **overrides}
        payload = {k: v for k, v in payload.items() if v is not None}
        return jwt.encode(
            payload,
            key if key is not None else private_key,
            algorithm=algorithm,
            headers={"kid": kid},
        )

    return _make


@pytest.fixture
def key_resolver(public_key_pem):
    """Resolver serving the test public key under KID."""
    return StaticKeyResolver({KID: public_key_pem})


@pytest.fixture
def clock():
    return lambda: NOW
