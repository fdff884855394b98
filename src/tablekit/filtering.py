"""Free-text filter for tabular records.

A record matches a query when any searchable column value contains the
query as a case-insensitive substring. Filtering selects, it never
reorders: the result is a stable subsequence of the input.
"""

from typing import Any, Iterable, Optional, Sequence

from .columns import ColumnSchema, ColumnSet
from .common import cell_text


def normalize_query(query: Optional[str]) -> str:
    """Casefold a query for matching (None is treated as empty)."""
    return (query or "").casefold()


def record_matches(
    record: Any,
    needle: str,
    columns: Iterable[ColumnSchema],
) -> bool:
    """Check whether a record matches a normalized query.

    Args:
        record: Record to test.
        needle: Query already passed through normalize_query.
        columns: Columns to search (non-searchable columns are skipped).

    Returns:
        True if any searchable column's text contains the needle.
    """
    for column in columns:
        if not column.searchable:
            continue
        if needle in cell_text(column.value(record)).casefold():
            return True
    return False


def filter_records(
    records: Sequence[Any],
    query: Optional[str],
    columns: ColumnSet | Iterable[ColumnSchema],
) -> Sequence[Any]:
    """Return the records matching a free-text query, in input order.

    Args:
        records: Records to filter.
        query: Search text. Empty or None disables filtering.
        columns: Column definitions.

    Returns:
        The input sequence itself when the query is empty, otherwise a new
        list holding the matching records. No match yields an empty list.
    """
    needle = normalize_query(query)
    if not needle:
        return records

    searchable = ColumnSet.coerce(columns).searchable
    return [record for record in records if record_matches(record, needle, searchable)]
