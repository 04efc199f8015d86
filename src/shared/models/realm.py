"""Connected realm domain models.

A connected realm (cluster) groups one or more realms that share a single
status, population and queue state. The detail endpoint returns one
ClusterStatus; the flattener turns it into one RealmRow per member realm.
"""

from enum import Enum

from pydantic import Field

from .base import CodexBaseModel


class StatusType(str, Enum):
    """Connected realm availability."""

    UP = "UP"
    DOWN = "DOWN"


class PopulationType(str, Enum):
    """Connected realm population band.

    The upstream API may report other codes (e.g. LOCKED); those are kept
    as plain strings on the models.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    FULL = "FULL"


class RealmMember(CodexBaseModel):
    """One realm belonging to a connected realm."""

    name: str = Field(min_length=1)
    type_name: str = Field(default="", description="Realm type label, e.g. Normal, RP")


class ClusterStatus(CodexBaseModel):
    """Detailed status of one connected realm."""

    id: str = Field(min_length=1, description="Connected realm id taken from the index link")
    status_type: StatusType
    status_name: str
    population_type: PopulationType | str = Field(union_mode="left_to_right")
    population_name: str
    has_queue: bool = False
    members: tuple[RealmMember, ...] = ()


class RealmRow(CodexBaseModel):
    """One display-ready realm with its connected realm's state copied onto it."""

    cluster_id: str
    realm_name: str
    status_type: StatusType
    status_name: str
    population_type: PopulationType | str = Field(union_mode="left_to_right")
    population_name: str
    has_queue: bool
    realm_type: str


class RealmStatusSummary(CodexBaseModel):
    """Overall status line for a region panel."""

    total_realms: int = 0
    total_clusters: int = 0
    realms_up: int = 0
    realms_down: int = 0
    realms_with_queue: int = 0
    population_counts: dict[str, int] = Field(default_factory=dict)
