"""Tests for idgate models."""

import dataclasses

import pytest

from idgate.models import (
    Rejected,
    RejectionReason,
    ResolutionError,
    TokenPayload,
    Verified,
    VerifierConfig,
)


# ==================== RejectionReason Tests ====================


def test_rejection_reason_values():
    """Test RejectionReason enum values."""
    assert RejectionReason.NO_TOKEN.value == "NO_TOKEN"
    assert RejectionReason.MALFORMED_TOKEN.value == "MALFORMED_TOKEN"
    assert RejectionReason.SIGNATURE_INVALID.value == "SIGNATURE_INVALID"
    assert RejectionReason.TOKEN_EXPIRED.value == "TOKEN_EXPIRED"
    assert RejectionReason.AUDIENCE_MISMATCH.value == "AUDIENCE_MISMATCH"
    assert RejectionReason.ISSUER_INVALID.value == "ISSUER_INVALID"


def test_rejection_reason_is_string():
    """Test RejectionReason can be used as a string."""
    assert RejectionReason.TOKEN_EXPIRED == "TOKEN_EXPIRED"


# ==================== TokenPayload Tests ====================


def test_token_payload_from_claims():
    """Test TokenPayload keeps standard and provider-specific claims."""
    payload = TokenPayload.from_claims(
        {
            "sub": "user-123",
            "aud": "client",
            "iss": "accounts.google.com",
            "exp": 200,
            "iat": 100,
            "hd": "example.com",
        }
    )

    assert payload.sub == "user-123"
    assert payload.exp == 200
    assert payload.iat == 100
    assert payload["hd"] == "example.com"
    assert payload.get("picture") is None


def test_token_payload_audiences():
    """Test audiences is always a tuple."""
    assert TokenPayload.from_claims({"aud": "a"}).audiences == ("a",)
    assert TokenPayload.from_claims({"aud": ["a", "b"]}).audiences == ("a", "b")
    assert TokenPayload.from_claims({}).audiences == ()


# ==================== Outcome Tests ====================


def test_outcome_variants():
    """Test each outcome carries its tag and ok flag."""
    payload = TokenPayload.from_claims({"sub": "user-123"})

    verified = Verified(payload=payload)
    rejected = Rejected(reason=RejectionReason.TOKEN_EXPIRED, message="id_token expired")
    errored = ResolutionError(cause=RuntimeError("x"))

    assert (verified.ok, verified.kind, verified.subject) == (True, "verified", "user-123")
    assert (rejected.ok, rejected.kind) == (False, "rejected")
    assert (errored.ok, errored.kind) == (False, "resolution_error")


def test_outcomes_are_immutable():
    """Test outcomes can't be modified after creation."""
    rejected = Rejected(reason=RejectionReason.TOKEN_EXPIRED, message="id_token expired")

    with pytest.raises(dataclasses.FrozenInstanceError):
        rejected.reason = RejectionReason.ISSUER_INVALID


# ==================== VerifierConfig Tests ====================


def test_config_single_client_id():
    """Test a single client id is normalised to a set."""
    config = VerifierConfig(client_ids="client")

    assert config.client_ids == frozenset({"client"})
    assert config.algorithms == ("RS256",)
    assert config.clock_skew_seconds == 0


def test_config_client_id_list():
    config = VerifierConfig(client_ids=["a", "b"], algorithms=["RS256", "ES256"], clock_skew_seconds=30)

    assert config.client_ids == frozenset({"a", "b"})
    assert config.algorithms == ("RS256", "ES256")
    assert config.clock_skew_seconds == 30


@pytest.mark.parametrize(
    "kwargs",
    [
        {"client_ids": []},
        {"client_ids": [""]},
        {"client_ids": [123]},
        {"client_ids": "client", "algorithms": []},
        {"client_ids": "client", "algorithms": ["none"]},
        {"client_ids": "client", "clock_skew_seconds": -1},
    ],
)
def test_config_invalid(kwargs):
    """Test invalid configurations raise ValueError."""
    with pytest.raises(ValueError):
        VerifierConfig(**kwargs)


def test_config_is_immutable():
    config = VerifierConfig(client_ids="client")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.client_ids = frozenset({"other"})
