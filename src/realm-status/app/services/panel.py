"""Region panel view state.

A panel owns the pipeline for one region: index -> throttled details ->
flattened rows. Every parameter change starts a new pipeline run and
cancels the previous one; a run whose generation is no longer current never
writes its result. Sorting works on the rows already held and never
re-fetches.
"""

from __future__ import annotations

import asyncio

from shared.config import RegionConfig, Settings
from shared.models import (
    FetchPhase,
    FetchState,
    RealmRow,
    RealmStatusSummary,
    SortColumn,
    SortState,
)
from shared.observability import get_logger, region_var

from ..clients.battlenet import BattleNetClient, EmptyIndexError, RealmStatusError
from .flattener import flatten_clusters, summarize_rows
from .realm_fetcher import ThrottledRealmFetcher
from .sorting import next_sort_state, sort_rows

logger = get_logger(__name__)


class RealmStatusPanel:
    """View state controller for one region."""

    def __init__(self, client: BattleNetClient, delay_ms: int = 50):
        self.client = client
        self.fetcher = ThrottledRealmFetcher(client, delay_ms=delay_ms)

        self.region: str | None = None
        self.config: RegionConfig | None = None
        self._credential: str | None = None

        self._state = FetchState.loading()
        self._sort = SortState()
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def sort_state(self) -> SortState:
        return self._sort

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def sorted_rows(self) -> list[RealmRow]:
        """Current rows in the active sort order (empty unless READY)."""
        if self._state.phase != FetchPhase.READY or not self._state.rows:
            return []
        return sort_rows(self._state.rows, self._sort.column, self._sort.direction)

    @property
    def summary(self) -> RealmStatusSummary:
        return summarize_rows(self._state.rows or ())

    @property
    def empty_message(self) -> str | None:
        """Message for a READY panel that found no realms."""
        if self._state.is_empty:
            return f"No realm status data available for {self.region}."
        return None

    def set_parameters(
        self,
        region: str,
        config: RegionConfig,
        credential: str | None,
    ) -> asyncio.Task:
        """Restart the pipeline for new parameters.

        Any in-flight run is cancelled and its result will be discarded.

        Returns:
            The task running the new pipeline
        """
        self.region = region
        self.config = config
        self._credential = credential

        self._generation += 1
        generation = self._generation

        self.cancel()

        self._state = FetchState.loading()
        self._task = asyncio.create_task(self._run(generation, region, config, credential))
        return self._task

    def refresh(self) -> asyncio.Task:
        """Re-run the pipeline with the current parameters."""
        if self.region is None or self.config is None:
            raise RuntimeError("Panel has no parameters yet")
        return self.set_parameters(self.region, self.config, self._credential)

    async def wait_until_settled(self) -> FetchState:
        """Wait for the newest pipeline run to finish and return its state."""
        while self._task is not None:
            task = self._task
            await asyncio.wait({task})
            if task is self._task:
                break
        return self._state

    def cancel(self) -> asyncio.Task | None:
        """Cancel the in-flight pipeline run, if any, and return its task."""
        if self._task is None or self._task.done():
            return None
        self._task.cancel()
        return self._task

    def request_sort(self, column: SortColumn) -> SortState:
        """Apply a column header click; never re-enters LOADING."""
        self._sort = next_sort_state(self._sort, column)
        return self._sort

    async def _load_rows(
        self,
        region: str,
        config: RegionConfig,
        credential: str | None,
    ) -> list[RealmRow]:
        cluster_ids = await self.client.resolve_cluster_ids(config, credential)
        batch = await self.fetcher.fetch_all(cluster_ids, config, credential)
        if batch.skipped:
            logger.info(
                "Connected realms skipped",
                region=region,
                cluster_ids=[cluster_id for cluster_id, _ in batch.skipped],
            )
        return flatten_clusters(batch.clusters)

    async def _run(
        self,
        generation: int,
        region: str,
        config: RegionConfig,
        credential: str | None,
    ) -> None:
        token = region_var.set(region)
        try:
            try:
                rows = await self._load_rows(region, config, credential)
                result = FetchState.ready(rows)
            except EmptyIndexError as e:
                logger.warning("No connected realms for region", error=str(e))
                result = FetchState.failed(f"{e} for {region}.")
            except RealmStatusError as e:
                logger.error("Failed to load realm status", error=str(e))
                result = FetchState.failed(
                    f"Failed to load {region} realm status. "
                    f"Please check your network or API token. Error: {e}"
                )
            except Exception as e:
                logger.exception("Unexpected failure loading realm status")
                result = FetchState.failed(
                    f"Failed to load {region} realm status. Error: {type(e).__name__}"
                )

            if generation != self._generation:
                logger.debug(
                    "Discarding stale pipeline result",
                    generation=generation,
                    current_generation=self._generation,
                )
                return

            self._state = result
            logger.info(
                "Realm status updated",
                phase=result.phase.value,
                rows=len(result.rows or ()),
            )
        finally:
            region_var.reset(token)


class RealmStatusPanels:
    """One independent panel per configured region."""

    def __init__(self, client: BattleNetClient, settings: Settings):
        self.client = client
        self.settings = settings
        self._panels: dict[str, RealmStatusPanel] = {}

    @property
    def regions(self) -> list[str]:
        return list(self.settings.regions)

    def get(self, region: str) -> RealmStatusPanel | None:
        """Return the region's panel, starting its pipeline on first access."""
        code = region.upper()
        config = self.settings.get_region(code)
        if config is None:
            return None

        panel = self._panels.get(code)
        if panel is None:
            panel = RealmStatusPanel(
                self.client,
                delay_ms=self.settings.battlenet.request_delay_ms,
            )
            self._panels[code] = panel
            panel.set_parameters(code, config, self.settings.battlenet.access_token)
        return panel

    async def close(self) -> None:
        """Cancel every in-flight pipeline."""
        tasks = [task for panel in self._panels.values() if (task := panel.cancel())]
        if tasks:
            await asyncio.wait(tasks)
        self._panels.clear()
