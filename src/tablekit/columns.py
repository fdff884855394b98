"""Column definitions for the tabular data engine.

A column is a named projection from a record to a value. The engine only
ever touches records through column accessors, so records can be dicts,
dataclasses, or any other object.

Key design principles:
- Accessors are plain callables and must be pure
- Column ids are unique within a table (duplicates fail at construction)
- Display order is the order columns were given in
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

from .common import DuplicateColumnError

Accessor = Callable[[Any], Any]
CellRenderer = Callable[[Any], Any]


@dataclass(frozen=True)
class ColumnSchema:
    """Table column definition.

    Attributes:
        id: Stable identifier, unique within a table.
        title: Display title.
        accessor: Pure function extracting the column value from a record.
        searchable: Whether free-text search looks at this column.
        sortable: Whether the column can be selected as the sort column.
        renderer: Optional cell-rendering hook; its result is shown as cell text.
        align: Text alignment hint for renderers ("left", "right", "center").
    """

    id: str
    title: str
    accessor: Accessor
    searchable: bool = True
    sortable: bool = True
    renderer: Optional[CellRenderer] = None
    align: str = "left"

    def value(self, record: Any) -> Any:
        """Extract this column's value from a record."""
        return self.accessor(record)


def read_field(record: Any, key: str) -> Any:
    """Read a field from a mapping or an object attribute.

    Args:
        record: Mapping or object.
        key: Field name.

    Returns:
        Field value, or None if the record has no such field.
    """
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def field_column(key: str, title: Optional[str] = None, **options: Any) -> ColumnSchema:
    """Build a column bound to a record field.

    Args:
        key: Field name; also used as the column id.
        title: Display title (default: key with the first letter capitalized).
        **options: Extra ColumnSchema fields (searchable, sortable, renderer, align).

    Returns:
        ColumnSchema whose accessor reads ``key`` from the record.
    """
    if title is None:
        title = key.replace("_", " ").capitalize()
    return ColumnSchema(
        id=key,
        title=title,
        accessor=lambda record: read_field(record, key),
        **options,
    )


class ColumnSet:
    """Ordered table of columns keyed by id."""

    def __init__(self, columns: Iterable[ColumnSchema]):
        """Build a column set.

        Args:
            columns: Column definitions in display order.

        Raises:
            DuplicateColumnError: If two columns share an id.
        """
        self._columns: list[ColumnSchema] = []
        self._by_id: dict[str, ColumnSchema] = {}
        for column in columns:
            if column.id in self._by_id:
                raise DuplicateColumnError(column.id)
            self._columns.append(column)
            self._by_id[column.id] = column

    @classmethod
    def coerce(cls, columns: "ColumnSet | Iterable[ColumnSchema]") -> "ColumnSet":
        """Return ``columns`` as a ColumnSet, building one if needed."""
        if isinstance(columns, ColumnSet):
            return columns
        return cls(columns)

    def get(self, column_id: Optional[str]) -> Optional[ColumnSchema]:
        """Look up a column by id (None if unknown)."""
        if column_id is None:
            return None
        return self._by_id.get(column_id)

    @property
    def ids(self) -> list[str]:
        return [column.id for column in self._columns]

    @property
    def searchable(self) -> list[ColumnSchema]:
        return [column for column in self._columns if column.searchable]

    def __iter__(self) -> Iterator[ColumnSchema]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._by_id

    def __repr__(self) -> str:
        return f"ColumnSet({self.ids!r})"
