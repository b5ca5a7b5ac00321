"""Compact JWS parsing.

Splits a raw token into header, payload and signature without trusting any
of them. No signature check happens here.
"""

from __future__ import annotations

import binascii
import json
import re
from typing import Any, Dict

from jwt.utils import base64url_decode

from idgate.exceptions import MalformedTokenError
from idgate.models import DecodedToken, TokenHeader, TokenPayload

SEGMENTS_ERROR = (
    "jwt payload is supposed to be composed of "
    "3 base64url encoded parts separated by a '.'"
)

_BASE64URL = re.compile(r"[A-Za-z0-9_-]+")


def _b64decode(segment: str, part: str) -> bytes:
    if not segment:
        raise MalformedTokenError(f"Empty {part} segment")
    if not _BASE64URL.fullmatch(segment):
        raise MalformedTokenError(f"Invalid base64url in {part} segment")
    try:
        return base64url_decode(segment.encode("ascii"))
    except (binascii.Error, ValueError) as e:
        raise MalformedTokenError(f"Invalid base64url in {part} segment: {e}")


def _json_object(data: bytes, part: str) -> Dict[str, Any]:
    try:
        value = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedTokenError(f"Invalid {part} JSON: {e}")
    if not isinstance(value, dict):
        raise MalformedTokenError(f"Token {part} must be a JSON object")
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_claim_types(claims: Dict[str, Any]) -> None:
    for name in ("exp", "iat"):
        if name in claims and not _is_int(claims[name]):
            raise MalformedTokenError(f"Claim '{name}' must be an integer")

    aud = claims.get("aud")
    if aud is not None and not isinstance(aud, str):
        if not isinstance(aud, list) or not all(isinstance(a, str) for a in aud):
            raise MalformedTokenError("Claim 'aud' must be a string or a list of strings")

    for name in ("iss", "sub"):
        if name in claims and not isinstance(claims[name], str):
            raise MalformedTokenError(f"Claim '{name}' must be a string")


def decode(raw: str) -> DecodedToken:
    """Parse a compact JWS into its untrusted parts.

    Args:
        raw: The token string (without 'Bearer ' prefix)

    Returns:
        DecodedToken with header, payload, signature bytes and signing input

    Raises:
        MalformedTokenError: If the token is not three base64url segments of
            well-formed JSON header/payload
    """
    if not isinstance(raw, str):
        raise MalformedTokenError(SEGMENTS_ERROR)

    segments = raw.split(".")
    if len(segments) != 3:
        raise MalformedTokenError(SEGMENTS_ERROR)

    header_segment, payload_segment, signature_segment = segments

    header = _json_object(_b64decode(header_segment, "header"), "header")
    claims = _json_object(_b64decode(payload_segment, "payload"), "payload")
    # An empty signature is well-formed; the signature check rejects it
    signature = _b64decode(signature_segment, "signature") if signature_segment else b""

    kid = header.get("kid")
    if not kid or not isinstance(kid, str):
        raise MalformedTokenError("Token missing kid header")
    alg = header.get("alg")
    if not alg or not isinstance(alg, str):
        raise MalformedTokenError("Token missing alg header")

    _check_claim_types(claims)

    return DecodedToken(
        header=TokenHeader(kid=kid, alg=alg, raw=header),
        payload=TokenPayload.from_claims(claims),
        signature=signature,
        signing_input=f"{header_segment}.{payload_segment}".encode("ascii"),
    )
