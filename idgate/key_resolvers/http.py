"""HTTP key resolver for provider certificate endpoints."""

from __future__ import annotations

import asyncio
from typing import Any, Dict

import requests
import structlog

from idgate.core.key_resolver import KeyResolver
from idgate.exceptions import KeyResolutionError
from idgate.providers import GOOGLE_CERTS_URL

log = structlog.get_logger()


class HttpKeyResolver(KeyResolver):
    """
    Fetches signing keys from a provider endpoint publishing a JSON object
    that maps key identifiers to key material.

    Google's ``oauth2/v1/certs`` endpoint is the default; it maps each kid to
    a PEM certificate. One GET is issued per ``resolve`` call. Wrap this in a
    CachingKeyResolver to avoid refetching on every verification.

    Example:
        resolver = HttpKeyResolver(timeout=3.0)
        key = await resolver.resolve("f1338ca26835863f671408f41738a7b49e740fc0")
    """

    def __init__(self, url: str = GOOGLE_CERTS_URL, timeout: float = 5.0):
        """Initialize the HTTP key resolver.

        Args:
            url: Certificate endpoint returning ``{kid: key}`` JSON
            timeout: HTTP request timeout in seconds (default: 5.0)
        """
        self.url = url
        self.timeout = timeout

    def _fetch(self) -> Any:
        """Synchronous GET of the key document using requests."""
        response = requests.get(self.url, timeout=self.timeout)
        if response.status_code != 200:
            raise KeyResolutionError(
                None,
                f"Error while retrieving signing keys: HTTP {response.status_code}",
            )
        return response.json()

    def _index_keys(self, document: Any) -> Dict[str, Any]:
        """Map key identifiers to key material."""
        if not isinstance(document, dict):
            raise ValueError("key document must be a JSON object")
        return document

    async def resolve(self, kid: str) -> Any:
        try:
            # Run synchronous requests call in thread pool
            document = await asyncio.to_thread(self._fetch)
            keys = self._index_keys(document)
        except KeyResolutionError as e:
            log.error("key_endpoint_error", url=self.url, error=e.message)
            raise KeyResolutionError(kid, e.message, cause=e) from e
        except requests.Timeout as e:
            log.error("key_endpoint_timeout", url=self.url, timeout=self.timeout)
            raise KeyResolutionError(
                kid, f"Timed out after {self.timeout}s retrieving signing keys", cause=e
            ) from e
        except requests.JSONDecodeError as e:
            log.error("key_document_invalid", url=self.url, error=str(e))
            raise KeyResolutionError(kid, f"Invalid signing key document: {e}", cause=e) from e
        except requests.RequestException as e:
            log.error("key_endpoint_unreachable", url=self.url, error=str(e))
            raise KeyResolutionError(kid, f"Failed to retrieve signing keys: {e}", cause=e) from e
        except ValueError as e:
            log.error("key_document_invalid", url=self.url, error=str(e))
            raise KeyResolutionError(kid, f"Invalid signing key document: {e}", cause=e) from e

        key = keys.get(kid)
        if not key:
            log.warning("signing_key_not_found", kid=kid, available_kids=list(keys.keys()))
            raise KeyResolutionError(kid, f"Signing key not found for kid: {kid}")

        return key
