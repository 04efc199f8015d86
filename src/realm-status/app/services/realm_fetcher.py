"""Throttled sequential fetch of connected realm details.

The upstream API is rate limited, so details are fetched one at a time in
index order with a fixed pause between requests. A failing connected realm
is logged and skipped; only a batch in which every fetch failed is an error.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from shared.config import RegionConfig
from shared.models import ClusterStatus
from shared.observability import get_logger

from ..clients.battlenet import (
    BattleNetClient,
    MalformedPayloadError,
    RealmStatusError,
    TransportError,
)

logger = get_logger(__name__)


class AllDetailFetchesFailedError(RealmStatusError):
    """Raised when no connected realm detail could be fetched."""

    def __init__(self, attempted: int):
        self.attempted = attempted
        super().__init__(f"All {attempted} connected realm detail requests failed")


@dataclass
class FetchBatch:
    """Outcome of one throttled fetch run.

    skipped holds (cluster_id, error) pairs in fetch order; a repeated id is
    recorded once per attempt.
    """

    clusters: list[ClusterStatus] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.clusters) + len(self.skipped)


class ThrottledRealmFetcher:
    """Fetches connected realm details sequentially with a fixed delay."""

    def __init__(self, client: BattleNetClient, delay_ms: int = 50):
        self.client = client
        self.delay_ms = delay_ms

    async def _pause(self) -> None:
        await asyncio.sleep(self.delay_ms / 1000)

    async def fetch_all(
        self,
        cluster_ids: list[str],
        config: RegionConfig,
        credential: str | None,
    ) -> FetchBatch:
        """Fetch every connected realm's detail in order.

        Args:
            cluster_ids: Ids from the index, in index order
            config: Region connection parameters
            credential: Bearer token

        Returns:
            FetchBatch with the fetched clusters in order and the skipped ids

        Raises:
            AllDetailFetchesFailedError: If cluster_ids is non-empty and
                every fetch failed
        """
        batch = FetchBatch()

        for position, cluster_id in enumerate(cluster_ids):
            if position > 0 and self.delay_ms > 0:
                await self._pause()

            try:
                cluster = await self.client.get_connected_realm(cluster_id, config, credential)
            except (TransportError, MalformedPayloadError) as e:
                logger.warning(
                    "Skipping connected realm",
                    cluster_id=cluster_id,
                    error=str(e),
                )
                batch.skipped.append((cluster_id, str(e)))
                continue

            batch.clusters.append(cluster)

        logger.info(
            "Connected realm details fetched",
            fetched=len(batch.clusters),
            skipped=len(batch.skipped),
        )

        if cluster_ids and not batch.clusters:
            raise AllDetailFetchesFailedError(len(cluster_ids))

        return batch
