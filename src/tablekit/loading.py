"""Record loading for the command line.

Supported formats, chosen by file extension:
- .json: a JSON array of objects
- .jsonl: one JSON object per line (blank lines skipped)
- .csv: header row plus data rows; numeric-looking cells become int/float

Records are returned as plain dicts. Column inference takes the union of
keys in first-seen order.
"""

import csv
import json
import re
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from .columns import ColumnSchema, ColumnSet, field_column
from .common import RecordsFormatError

SUPPORTED_SUFFIXES = (".json", ".jsonl", ".csv")

# Plain decimals only; leading-zero text such as zip codes stays a string
_INT_PATTERN = re.compile(r"-?(?:0|[1-9][0-9]*)")
_FLOAT_PATTERN = re.compile(r"-?(?:0|[1-9][0-9]*)\.[0-9]+")


def coerce_scalar(text: str) -> Any:
    """Convert a CSV cell to int, float, or None when it looks like one.

    Args:
        text: Raw cell text.

    Returns:
        None for an empty cell, an int or float for plain decimal text,
        else the stripped text. Text with leading zeros stays text.
    """
    clean = text.strip()
    if not clean:
        return None
    if _INT_PATTERN.fullmatch(clean):
        return int(clean)
    if _FLOAT_PATTERN.fullmatch(clean):
        return float(clean)
    return clean


def _load_json(path: Path) -> list[dict]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordsFormatError(str(path), f"invalid JSON: {e.msg} (line {e.lineno})")
    if not isinstance(data, list):
        raise RecordsFormatError(str(path), "expected a JSON array of objects")
    return data


def _load_jsonl(path: Path) -> list[dict]:
    records = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise RecordsFormatError(str(path), f"invalid JSON on line {lineno}: {e.msg}")
    return records


def _load_csv(path: Path) -> list[dict]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            return []
        return [
            {key: coerce_scalar(value or "") for key, value in row.items() if key is not None}
            for row in reader
        ]


def load_records(path: Path) -> list[dict]:
    """Load records from a file.

    Args:
        path: Path to a .json, .jsonl or .csv file.

    Returns:
        List of record dicts in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        RecordsFormatError: If the suffix is unsupported or the content is
            not a sequence of objects.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(str(path))

    suffix = path.suffix.lower()
    if suffix == ".json":
        records = _load_json(path)
    elif suffix == ".jsonl":
        records = _load_jsonl(path)
    elif suffix == ".csv":
        records = _load_csv(path)
    else:
        raise RecordsFormatError(
            str(path),
            f"unsupported extension '{suffix or '(none)'}' (use {', '.join(SUPPORTED_SUFFIXES)})",
        )

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise RecordsFormatError(str(path), f"record {index} is not an object")
    return records


def infer_field_names(records: Iterable[dict]) -> list[str]:
    """Collect field names across records, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def build_columns(
    records: Sequence[dict],
    names: Optional[Sequence[str]] = None,
    *,
    exclude_from_search: Iterable[str] = (),
) -> ColumnSet:
    """Build field-bound columns for a set of records.

    Args:
        records: Loaded records.
        names: Column ids to use, in display order (default: all fields).
        exclude_from_search: Column ids marked non-searchable.

    Returns:
        ColumnSet of field columns. Numeric columns are right-aligned.

    Raises:
        DuplicateColumnError: If ``names`` repeats an id.
    """
    if names is None:
        names = infer_field_names(records)
    excluded = set(exclude_from_search)

    columns: list[ColumnSchema] = []
    for name in names:
        numeric = _is_numeric_field(records, name)
        columns.append(
            field_column(
                name,
                searchable=name not in excluded,
                align="right" if numeric else "left",
            )
        )
    return ColumnSet(columns)


def _is_numeric_field(records: Iterable[dict], name: str) -> bool:
    values = [record.get(name) for record in records if record.get(name) is not None]
    return bool(values) and all(
        isinstance(value, (int, float)) and not isinstance(value, bool) for value in values
    )
