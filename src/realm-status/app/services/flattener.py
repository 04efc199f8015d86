"""Flatten connected realms into per-realm rows."""

from __future__ import annotations

from collections import Counter
from enum import Enum

from shared.models import ClusterStatus, RealmRow, RealmStatusSummary, StatusType


def flatten_clusters(clusters: list[ClusterStatus]) -> list[RealmRow]:
    """Emit one row per member realm, copying the connected realm's state.

    Clusters keep their input order and members their payload order.
    """
    return [
        RealmRow(
            cluster_id=cluster.id,
            realm_name=member.name,
            status_type=cluster.status_type,
            status_name=cluster.status_name,
            population_type=cluster.population_type,
            population_name=cluster.population_name,
            has_queue=cluster.has_queue,
            realm_type=member.type_name,
        )
        for cluster in clusters
        for member in cluster.members
    ]


def summarize_rows(rows: list[RealmRow] | tuple[RealmRow, ...]) -> RealmStatusSummary:
    """Overall status line: realm and connected realm counts by state."""
    populations = Counter(_type_code(row.population_type) for row in rows)
    return RealmStatusSummary(
        total_realms=len(rows),
        total_clusters=len({row.cluster_id for row in rows}),
        realms_up=sum(1 for row in rows if row.status_type == StatusType.UP),
        realms_down=sum(1 for row in rows if row.status_type == StatusType.DOWN),
        realms_with_queue=sum(1 for row in rows if row.has_queue),
        population_counts=dict(populations),
    )


def _type_code(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value
