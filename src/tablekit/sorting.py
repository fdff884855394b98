"""Single-column stable sort for tabular records.

Key design principles:
- Stable: records with equal values keep their input order
- Descending reverses the comparator, never the output, so ties still
  break by input order (Python's ``reverse=True`` keeps stability)
- Unknown or non-sortable columns are a silent no-op, not an error
- Each accessor is evaluated once per record per sort
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from .columns import ColumnSchema, ColumnSet

logger = logging.getLogger(__name__)


class SortDirection(Enum):
    """Sort direction."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass(frozen=True)
class SortConfig:
    """Active sort: a column id and a direction.

    A ``column_id`` of None means "no sort, preserve filter order".
    """

    column_id: Optional[str] = None
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def is_active(self) -> bool:
        return self.column_id is not None

    def toggled(self) -> "SortConfig":
        """Return the same column with the opposite direction."""
        return replace(self, direction=self.direction.flipped)

    @classmethod
    def parse(cls, text: Optional[str]) -> "SortConfig":
        """Parse a sort expression of the form ``column[:asc|desc]``.

        Args:
            text: Sort expression. Empty or None means no sort.

        Returns:
            Parsed SortConfig.

        Raises:
            ValueError: If the direction is not "asc" or "desc".
        """
        raw = (text or "").strip()
        if not raw:
            return cls()

        if ":" in raw:
            column_id, direction = raw.rsplit(":", 1)
        else:
            column_id, direction = raw, "asc"

        direction = direction.strip().lower()
        if direction not in ("asc", "desc"):
            raise ValueError(f"sort direction must be 'asc' or 'desc', got '{direction}'")
        return cls(column_id=column_id.strip() or None, direction=SortDirection(direction))

    def to_dict(self) -> dict:
        return {"column_id": self.column_id, "direction": self.direction.value}


def resolve_sort_column(
    config: Optional[SortConfig],
    columns: ColumnSet | Iterable[ColumnSchema],
) -> Optional[ColumnSchema]:
    """Find the column a sort config refers to.

    Returns:
        The column, or None if no sort applies (no config, no column id,
        unknown id, or a column marked non-sortable).
    """
    if config is None or config.column_id is None:
        return None

    column = ColumnSet.coerce(columns).get(config.column_id)
    if column is None:
        logger.debug("Unknown sort column %r, keeping input order", config.column_id)
        return None
    if not column.sortable:
        logger.debug("Column %r is not sortable, keeping input order", column.id)
        return None
    return column


def _sort_key(value: Any) -> tuple:
    # Numbers, then other values grouped by type name, then NaN, then None.
    # Values are only compared with values of the same group.
    if value is None:
        return (3,)
    if isinstance(value, (int, float)):
        if value != value:
            return (2,)
        return (0, "", value)
    return (1, type(value).__name__, value)


def sort_records(
    records: Sequence[Any],
    config: Optional[SortConfig],
    columns: ColumnSet | Iterable[ColumnSchema],
) -> Sequence[Any]:
    """Return records ordered by the configured column.

    Args:
        records: Records to sort.
        config: Active sort configuration (None for no sort).
        columns: Column definitions.

    Returns:
        The input sequence itself when no sort applies, otherwise a new
        stably sorted list.
    """
    column = resolve_sort_column(config, columns)
    if column is None:
        return records

    keys = [_sort_key(column.value(record)) for record in records]
    order = sorted(
        range(len(records)),
        key=keys.__getitem__,
        reverse=config.direction is SortDirection.DESCENDING,
    )
    return [records[i] for i in order]


def toggle_sort(
    current: Optional[SortConfig],
    column: ColumnSchema,
) -> Optional[SortConfig]:
    """Apply a column-header tap to the current sort.

    Tapping the active column flips its direction; tapping another
    sortable column sorts by it ascending. Non-sortable columns leave the
    sort unchanged.

    Args:
        current: Current sort configuration (None for no sort).
        column: Column whose header was tapped.

    Returns:
        New sort configuration.
    """
    if not column.sortable:
        return current
    if current is not None and current.column_id == column.id:
        return current.toggled()
    return SortConfig(column_id=column.id, direction=SortDirection.ASCENDING)
