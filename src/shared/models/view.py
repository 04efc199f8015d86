"""Panel view state models.

FetchState is what a renderer reads; SortState records the active column
header and direction.
"""

from __future__ import annotations

from enum import Enum

from .base import CodexBaseModel
from .realm import RealmRow


class SortColumn(str, Enum):
    """Columns a renderer may sort by from the header."""

    REALM_NAME = "realm_name"
    REALM_TYPE = "realm_type"
    STATUS_NAME = "status_name"
    POPULATION_NAME = "population_name"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class SortState(CodexBaseModel):
    """Active sort column and direction.

    A column of None presents rows in flattening order.
    """

    column: SortColumn | None = None
    direction: SortDirection = SortDirection.ASC


class FetchPhase(str, Enum):
    """Pipeline phase of a region panel."""

    LOADING = "LOADING"
    ERROR = "ERROR"
    READY = "READY"


class FetchState(CodexBaseModel):
    """Current pipeline outcome for a region panel.

    error_message is set only in ERROR; rows is set only in READY and may be
    empty there.
    """

    phase: FetchPhase = FetchPhase.LOADING
    error_message: str | None = None
    rows: tuple[RealmRow, ...] | None = None

    @classmethod
    def loading(cls) -> FetchState:
        return cls(phase=FetchPhase.LOADING)

    @classmethod
    def failed(cls, message: str) -> FetchState:
        return cls(phase=FetchPhase.ERROR, error_message=message)

    @classmethod
    def ready(cls, rows: list[RealmRow] | tuple[RealmRow, ...]) -> FetchState:
        return cls(phase=FetchPhase.READY, rows=tuple(rows))

    @property
    def is_empty(self) -> bool:
        """READY with no realms, as opposed to an error."""
        return self.phase == FetchPhase.READY and not self.rows
