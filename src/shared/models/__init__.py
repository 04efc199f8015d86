"""Shared data models for Azeroth Codex.

All models follow these conventions:
- Field names: lowercase snake_case
- Enums: uppercase SNAKE_CASE
- Models are frozen value objects
"""

# Base
from .base import CodexBaseModel

# Connected realm domain
from .realm import (
    ClusterStatus,
    PopulationType,
    RealmMember,
    RealmRow,
    RealmStatusSummary,
    StatusType,
)

# Panel view state
from .view import (
    FetchPhase,
    FetchState,
    SortColumn,
    SortDirection,
    SortState,
)

__all__ = [
    # Base
    "CodexBaseModel",
    # Connected realm domain
    "ClusterStatus",
    "PopulationType",
    "RealmMember",
    "RealmRow",
    "RealmStatusSummary",
    "StatusType",
    # Panel view state
    "FetchPhase",
    "FetchState",
    "SortColumn",
    "SortDirection",
    "SortState",
]
