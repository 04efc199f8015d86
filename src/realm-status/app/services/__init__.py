"""Services for the realm status pipeline."""

from .flattener import flatten_clusters, summarize_rows
from .panel import RealmStatusPanel, RealmStatusPanels
from .realm_fetcher import AllDetailFetchesFailedError, FetchBatch, ThrottledRealmFetcher
from .sorting import POPULATION_RANK, STATUS_RANK, next_sort_state, sort_rows

__all__ = [
    "AllDetailFetchesFailedError",
    "FetchBatch",
    "POPULATION_RANK",
    "RealmStatusPanel",
    "RealmStatusPanels",
    "STATUS_RANK",
    "ThrottledRealmFetcher",
    "flatten_clusters",
    "next_sort_state",
    "sort_rows",
    "summarize_rows",
]
