"""Game-data API client for connected realm status.

Two read-only, bearer-authenticated endpoints are used:
- GET {base_url}/data/wow/connected-realm/index
- GET {base_url}/data/wow/connected-realm/{id}
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from pydantic import ValidationError

from shared.config import RegionConfig
from shared.models import ClusterStatus, RealmMember
from shared.observability import (
    get_logger,
    log_external_call_end,
    log_external_call_start,
)

logger = get_logger(__name__)

SERVICE_NAME = "battlenet"


class RealmStatusError(Exception):
    """Base class for realm status pipeline failures."""

    pass


class AuthError(RealmStatusError):
    """Raised when no access token is available; no request is made."""

    def __init__(self, message: str = "No API access token configured"):
        super().__init__(message)


class TransportError(RealmStatusError):
    """Raised when the API answers with a non-success status or is unreachable."""

    def __init__(self, status: int | None, status_text: str, url: str | None = None):
        self.status = status
        self.status_text = status_text
        self.url = url
        if status is None:
            message = f"Request failed: {status_text}"
        else:
            message = f"HTTP error! Status: {status} - {status_text}"
        super().__init__(message)


class MalformedPayloadError(RealmStatusError):
    """Raised when a response body lacks required fields."""

    pass


class EmptyIndexError(RealmStatusError):
    """Raised when a region's index lists no connected realms."""

    def __init__(self, message: str = "No connected realms found"):
        super().__init__(message)


def extract_cluster_id(href: Any) -> str | None:
    """Take the connected realm id from an index link.

    The id is the last path segment with any query string removed, e.g.
    ``.../connected-realm/1084?namespace=dynamic-eu`` -> ``"1084"``.
    Returns None when the link yields no usable id, including ids that
    cannot be placed in a URL path.
    """
    if not isinstance(href, str):
        return None
    last_segment = href.split("/")[-1]
    cluster_id = last_segment.split("?")[0].strip()
    if not cluster_id or not cluster_id.isprintable() or " " in cluster_id:
        return None
    return cluster_id


def extract_cluster_ids(hrefs: list[Any]) -> list[str]:
    """Resolve ids for every index link, dropping links without one."""
    cluster_ids = []
    for href in hrefs:
        cluster_id = extract_cluster_id(href)
        if cluster_id is None:
            logger.warning("Dropping malformed connected realm link", href=repr(href))
            continue
        cluster_ids.append(cluster_id)
    return cluster_ids


class BattleNetClient:
    """Client for the connected realm endpoints of the game-data API."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                follow_redirects=True,
            )
        return self._client

    def _get_auth_headers(self, credential: str | None) -> dict[str, str]:
        """Build authentication headers, refusing to proceed without a token."""
        if not credential:
            raise AuthError()
        return {"Authorization": f"Bearer {credential}"}

    async def _get_json(
        self,
        url: str,
        config: RegionConfig,
        credential: str | None,
        operation: str,
    ) -> dict[str, Any]:
        """Issue one GET and return the decoded JSON object."""
        headers = self._get_auth_headers(credential)
        client = await self._get_client()
        params = {"namespace": config.namespace, "locale": config.locale}

        log_external_call_start(logger, SERVICE_NAME, operation)
        started = time.perf_counter()

        try:
            response = await client.get(url, headers=headers, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log_external_call_end(
                logger,
                SERVICE_NAME,
                operation,
                success=False,
                duration_ms=(time.perf_counter() - started) * 1000,
                error=str(e),
            )
            raise TransportError(None, str(e) or type(e).__name__, url=url) from e

        duration_ms = (time.perf_counter() - started) * 1000

        if not response.is_success:
            log_external_call_end(
                logger,
                SERVICE_NAME,
                operation,
                success=False,
                duration_ms=duration_ms,
                error=f"HTTP {response.status_code}",
            )
            raise TransportError(response.status_code, response.reason_phrase, url=url)

        log_external_call_end(logger, SERVICE_NAME, operation, success=True, duration_ms=duration_ms)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedPayloadError(f"Response from {operation} is not valid JSON") from e

        if not isinstance(data, dict):
            raise MalformedPayloadError(f"Response from {operation} is not a JSON object")

        return data

    async def get_connected_realm_index(
        self,
        config: RegionConfig,
        credential: str | None,
    ) -> list[Any]:
        """Fetch the region's connected realm index.

        Args:
            config: Region connection parameters
            credential: Bearer token

        Returns:
            The href of every index entry, in API order

        Raises:
            AuthError: If credential is missing (no request is made)
            TransportError: On a non-success HTTP status
            EmptyIndexError: If the index lists no connected realms
        """
        url = f"{config.base_url}/data/wow/connected-realm/index"
        data = await self._get_json(url, config, credential, "connected_realm_index")

        entries = data.get("connected_realms")
        if not isinstance(entries, list) or not entries:
            raise EmptyIndexError()

        return [entry.get("href") if isinstance(entry, dict) else None for entry in entries]

    async def resolve_cluster_ids(
        self,
        config: RegionConfig,
        credential: str | None,
    ) -> list[str]:
        """Fetch the index and turn its links into connected realm ids."""
        hrefs = await self.get_connected_realm_index(config, credential)
        cluster_ids = extract_cluster_ids(hrefs)

        if not cluster_ids:
            raise EmptyIndexError()

        logger.info(
            "Resolved connected realm index",
            clusters=len(cluster_ids),
            dropped=len(hrefs) - len(cluster_ids),
        )
        return cluster_ids

    async def get_connected_realm(
        self,
        cluster_id: str,
        config: RegionConfig,
        credential: str | None,
    ) -> ClusterStatus:
        """Fetch one connected realm's detail.

        Raises:
            TransportError: On a non-success HTTP status
            MalformedPayloadError: If status, population or realms are missing
        """
        url = f"{config.base_url}/data/wow/connected-realm/{cluster_id}"
        data = await self._get_json(url, config, credential, "connected_realm_detail")
        return parse_connected_realm(cluster_id, data)

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


def parse_connected_realm(cluster_id: str, data: dict[str, Any]) -> ClusterStatus:
    """Parse a connected realm detail payload into a ClusterStatus."""
    status = data.get("status")
    population = data.get("population")
    realms = data.get("realms")

    if not isinstance(status, dict) or not status.get("type"):
        raise MalformedPayloadError(f"Connected realm {cluster_id} has no status.type")
    if not isinstance(population, dict) or not population.get("type"):
        raise MalformedPayloadError(f"Connected realm {cluster_id} has no population.type")
    if not isinstance(realms, list):
        raise MalformedPayloadError(f"Connected realm {cluster_id} has no realms list")

    try:
        members = tuple(
            RealmMember(
                name=_display_name(realm),
                type_name=_display_name(realm.get("type")) or "",
            )
            for realm in realms
        )
        return ClusterStatus(
            id=cluster_id,
            status_type=status["type"],
            status_name=_display_name(status) or str(status["type"]).title(),
            population_type=population["type"],
            population_name=_display_name(population) or str(population["type"]).title(),
            has_queue=data.get("has_queue") or False,
            members=members,
        )
    except (AttributeError, ValidationError) as e:
        raise MalformedPayloadError(f"Connected realm {cluster_id} payload is invalid: {e}") from e


def _display_name(field: Any) -> str | None:
    """Return the label of a ``{type, name}`` field.

    Without a locale parameter the API returns names keyed by locale; the
    first one is used then.
    """
    if not isinstance(field, dict):
        return None
    name = field.get("name")
    if isinstance(name, dict):
        name = next(iter(name.values()), None)
    return name if isinstance(name, str) and name else None
