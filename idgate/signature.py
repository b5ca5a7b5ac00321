"""Signature verification over the signed content of a decoded token.

The signature maths is delegated to PyJWT's algorithm implementations
(backed by ``cryptography``). This module only picks the algorithm, loads
the key material into the right shape and reports a mismatch.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import structlog
from cryptography import x509
from jwt.algorithms import get_default_algorithms
from jwt.exceptions import InvalidKeyError

from idgate.exceptions import InvalidSignatureError
from idgate.models import DecodedToken

log = structlog.get_logger()

_PEM_CERTIFICATE = b"-----BEGIN CERTIFICATE-----"


def _load_key(algorithm: Any, key: Any) -> Any:
    """Turn resolver output into a key object accepted by ``algorithm``."""
    if isinstance(key, dict):
        # JWK as published in a JWKS document
        return algorithm.from_jwk(json.dumps(key))

    if isinstance(key, str):
        key = key.encode("utf-8")

    if isinstance(key, bytes) and key.lstrip().startswith(_PEM_CERTIFICATE):
        # Google's v1 endpoint publishes X.509 certificates, not bare keys
        key = x509.load_pem_x509_certificate(key.strip()).public_key()

    # prepare_key rejects key objects from another algorithm family
    return algorithm.prepare_key(key)


def verify_signature(decoded: DecodedToken, key: Any, algorithms: Iterable[str]) -> None:
    """Check the token signature with the resolved key.

    Args:
        decoded: Output of ``idgate.decoder.decode``
        key: Signing key material from a KeyResolver (PEM key, PEM
            certificate, JWK dict or a loaded key object)
        algorithms: Algorithms the verifier accepts

    Raises:
        InvalidSignatureError: If the algorithm is not accepted, the key can't
            be used with it, or the signature does not match
    """
    alg = decoded.header.alg
    if alg not in tuple(algorithms) or alg.lower() == "none":
        raise InvalidSignatureError(f"Algorithm not allowed: {alg}")

    algorithm = get_default_algorithms().get(alg)
    if algorithm is None:
        raise InvalidSignatureError(f"Algorithm not supported: {alg}")

    try:
        prepared = _load_key(algorithm, key)
    except (InvalidKeyError, ValueError, TypeError) as e:
        log.warning("signing_key_unusable", kid=decoded.header.kid, alg=alg, error=str(e))
        raise InvalidSignatureError(f"Signing key unusable for {alg}")

    try:
        valid = algorithm.verify(decoded.signing_input, prepared, decoded.signature)
    except (AttributeError, TypeError, ValueError) as e:
        log.warning("signature_check_failed", kid=decoded.header.kid, alg=alg, error=str(e))
        raise InvalidSignatureError(f"Signing key unusable for {alg}")

    if not valid:
        raise InvalidSignatureError("id_token not signed with a trusted provider key")
