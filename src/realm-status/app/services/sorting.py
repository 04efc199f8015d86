"""Column-aware sorting of realm rows.

Name columns compare case-insensitively. Status and population columns sort
by the underlying type code rather than the localized label.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from shared.models import (
    PopulationType,
    RealmRow,
    SortColumn,
    SortDirection,
    SortState,
    StatusType,
)

STATUS_RANK: dict[StatusType, int] = {
    StatusType.DOWN: 0,
    StatusType.UP: 1,
}

# FULL ranks above HIGH; unknown population codes rank 0
POPULATION_RANK: dict[PopulationType, int] = {
    PopulationType.HIGH: 3,
    PopulationType.MEDIUM: 2,
    PopulationType.LOW: 1,
    PopulationType.FULL: 4,
}


def status_rank(row: RealmRow) -> int:
    return STATUS_RANK.get(row.status_type, 0)


def population_rank(row: RealmRow) -> int:
    if not isinstance(row.population_type, PopulationType):
        return 0
    return POPULATION_RANK.get(row.population_type, 0)


SORT_KEYS: dict[SortColumn, Callable[[RealmRow], Any]] = {
    SortColumn.REALM_NAME: lambda row: row.realm_name.casefold(),
    SortColumn.REALM_TYPE: lambda row: row.realm_type.casefold(),
    SortColumn.STATUS_NAME: status_rank,
    SortColumn.POPULATION_NAME: population_rank,
}


def sort_rows(
    rows: Sequence[RealmRow],
    column: SortColumn | None,
    direction: SortDirection = SortDirection.ASC,
) -> list[RealmRow]:
    """Return a new, stably sorted list of rows.

    With no column the rows come back in their given order. Rows with equal
    keys keep their relative order in both directions.
    """
    if column is None:
        return list(rows)

    return sorted(
        rows,
        key=SORT_KEYS[SortColumn(column)],
        reverse=SortDirection(direction) == SortDirection.DESC,
    )


def next_sort_state(current: SortState, column: SortColumn) -> SortState:
    """Apply a column header click.

    Clicking the active column toggles direction; any other column starts
    ascending.
    """
    column = SortColumn(column)
    if current.column == column:
        direction = (
            SortDirection.DESC
            if current.direction == SortDirection.ASC
            else SortDirection.ASC
        )
        return SortState(column=column, direction=direction)
    return SortState(column=column, direction=SortDirection.ASC)
