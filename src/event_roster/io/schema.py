from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from event_roster.records import TabularPayload

SYNTHETIC_COLUMN_PREFIX = "Column"


def _column_label(column: Any, index: int) -> str:
    if isinstance(column, Mapping):
        label = column.get("label")
    else:
        label = column
    if label is None or not str(label).strip():
        return f"{SYNTHETIC_COLUMN_PREFIX}{index + 1}"
    return str(label)


def cell_text(value: Any) -> str:
    """Render a cell value the way the spreadsheet displays it as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def _cell_value(cell: Any) -> str:
    if isinstance(cell, Mapping):
        return cell_text(cell.get("v"))
    return cell_text(cell)


def _row_cells(row: Any) -> Sequence[Any] | None:
    if isinstance(row, Mapping):
        cells = row.get("c")
    else:
        cells = row
    if isinstance(cells, (list, tuple)):
        return cells
    return None


def normalize_rows(columns: Iterable[Any] | None, rows: Iterable[Any] | None) -> TabularPayload:
    """Map raw rows of cells onto resolved column labels, dropping blank rows.

    Columns may be plain labels or gviz-style ``{"label": ...}`` descriptors and
    rows may be cell lists or ``{"c": [...]}`` objects. Anything malformed is
    skipped rather than raised.
    """
    raw_columns = list(columns) if isinstance(columns, (list, tuple)) else []
    labels = [_column_label(column, index) for index, column in enumerate(raw_columns)]

    normalized: list[dict[str, str]] = []
    for row in rows if isinstance(rows, (list, tuple)) else []:
        cells = _row_cells(row)
        if cells is None:
            continue
        mapped: dict[str, str] = {}
        for index, cell in enumerate(cells):
            if index < len(labels):
                label = labels[index]
            else:
                label = f"{SYNTHETIC_COLUMN_PREFIX}{index + 1}"
            mapped[label] = _cell_value(cell)
        if any(value.strip() for value in mapped.values()):
            normalized.append(mapped)

    return TabularPayload(columns=tuple(labels), rows=tuple(normalized))


def normalize_gviz_table(table: Any) -> TabularPayload:
    if not isinstance(table, Mapping):
        return TabularPayload()
    return normalize_rows(table.get("cols"), table.get("rows"))
