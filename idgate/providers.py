"""Identity provider descriptors.

The issuer allow-list belongs to the provider, not to the application, so it
is fixed here rather than passed in by callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v1/certs"
GOOGLE_JWKS_URL = "https://www.googleapis.com/oauth2/v3/certs"


@dataclass(frozen=True)
class Provider:
    """Static facts about an identity provider."""

    name: str
    issuers: FrozenSet[str]
    certs_url: str


GOOGLE = Provider(
    name="google",
    issuers=frozenset({"accounts.google.com", "https://accounts.google.com"}),
    certs_url=GOOGLE_CERTS_URL,
)
