from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from event_roster.io.schema import normalize_gviz_table, normalize_rows
from event_roster.records import TabularPayload

LOGGER = logging.getLogger(__name__)

# Google Sheets wraps gviz JSON in a JSONP callback.
GVIZ_RESPONSE_RE = re.compile(r"google\.visualization\.Query\.setResponse\((.*)\)", re.DOTALL)
GVIZ_SUFFIXES = {".json", ".txt", ".js"}


def parse_gviz_response(text: str) -> Mapping[str, Any] | None:
    """Return the gviz ``table`` object from a (possibly JSONP-wrapped) response."""
    match = GVIZ_RESPONSE_RE.search(text)
    body = match.group(1) if match else text.strip()
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        LOGGER.warning("Sheet response is not valid gviz JSON")
        return None

    table = data.get("table") if isinstance(data, Mapping) else None
    if not isinstance(table, Mapping) or not isinstance(table.get("rows"), list):
        LOGGER.warning("Sheet response has no table rows")
        return None
    return table


def load_gviz_payload(path: Path) -> TabularPayload:
    table = parse_gviz_response(path.read_text(encoding="utf-8"))
    if table is None:
        return TabularPayload()
    return normalize_gviz_table(table)


def load_csv_payload(path: Path) -> TabularPayload:
    # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
    try:
        frame = pd.read_csv(path, encoding="utf-8-sig", dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        LOGGER.warning("CSV source %s is empty", path)
        return TabularPayload()

    columns = ["" if str(column).startswith("Unnamed:") else column for column in frame.columns]
    return normalize_rows(columns, frame.values.tolist())


def load_payload(path: Path) -> TabularPayload:
    """Load a sheet export from disk as a normalized payload."""
    suffix = path.suffix.lower()
    if suffix == ".csv":
        payload = load_csv_payload(path)
    elif suffix in GVIZ_SUFFIXES:
        payload = load_gviz_payload(path)
    else:
        raise ValueError(f"Unsupported source file type: {path.suffix}")
    LOGGER.info("Loaded %d signup rows from %s", len(payload.rows), path)
    return payload
