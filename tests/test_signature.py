"""Tests for signature verification."""

import json

import pytest
from jwt.algorithms import RSAAlgorithm

from idgate.decoder import decode
from idgate.exceptions import InvalidSignatureError
from idgate.signature import verify_signature

RS256 = ["RS256"]


def test_valid_signature_with_public_key(make_token, public_key_pem):
    """Test a token verifies against the matching PEM public key."""
    verify_signature(decode(make_token()), public_key_pem, RS256)


def test_valid_signature_with_certificate(make_token, certificate_pem):
    """Test PEM certificates (Google v1 certs format) are accepted as keys."""
    verify_signature(decode(make_token()), certificate_pem, RS256)


def test_valid_signature_with_jwk(make_token, private_key):
    """Test JWK dicts (JWKS format) are accepted as keys."""
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))

    verify_signature(decode(make_token()), jwk, RS256)


def test_valid_signature_with_key_object(make_token, private_key):
    """Test already loaded key objects are accepted."""
    verify_signature(decode(make_token()), private_key.public_key(), RS256)


def test_wrong_key_rejected(make_token, other_private_key, public_key_pem):
    """Test a token signed by another key is rejected."""
    token = make_token(key=other_private_key)

    with pytest.raises(InvalidSignatureError) as exc:
        verify_signature(decode(token), public_key_pem, RS256)

    assert exc.value.code == "INVALID_SIGNATURE"


def test_tampered_payload_rejected(make_token, public_key_pem):
    """Test changing the payload after signing breaks the signature."""
    header, _, signature = make_token().split(".")
    forged_payload = make_token(sub="attacker").split(".")[1]

    with pytest.raises(InvalidSignatureError):
        verify_signature(decode(f"{header}.{forged_payload}.{signature}"), public_key_pem, RS256)


def test_disallowed_algorithm_rejected(make_token, public_key_pem):
    """Test HMAC tokens are refused when only RS256 is accepted."""
    token = make_token(key="a-shared-secret-that-is-long-enough-for-hs256", algorithm="HS256")

    with pytest.raises(InvalidSignatureError) as exc:
        verify_signature(decode(token), public_key_pem, RS256)

    assert "HS256" in exc.value.message


def test_none_algorithm_rejected(make_token, public_key_pem):
    """Test alg=none is never accepted, even when listed."""
    header, payload, _ = make_token().split(".")
    none_header = make_token(algorithm="none", key="").split(".")[0]

    with pytest.raises(InvalidSignatureError):
        verify_signature(decode(f"{none_header}.{payload}."), public_key_pem, ["RS256", "none"])


def test_unusable_key_rejected(make_token):
    """Test garbage key material is reported as a signature failure."""
    with pytest.raises(InvalidSignatureError):
        verify_signature(decode(make_token()), "not a key", RS256)


@pytest.mark.parametrize("key_fixture", ["certificate_pem", "public_key_pem"])
def test_key_from_other_algorithm_family_rejected(request, make_token, ec_private_key, key_fixture):
    """Test an RSA key offered for an ES256 token is refused, not crashed on."""
    token = make_token(key=ec_private_key, algorithm="ES256")
    key = request.getfixturevalue(key_fixture)

    with pytest.raises(InvalidSignatureError):
        verify_signature(decode(token), key, ["RS256", "ES256"])


def test_ec_key_object_for_rsa_token_rejected(make_token, ec_private_key):
    """Test an EC key object offered for an RS256 token is refused."""
    with pytest.raises(InvalidSignatureError):
        verify_signature(decode(make_token()), ec_private_key.public_key(), ["RS256", "ES256"])
