from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from event_roster.records import EventRecord

EVENT_TABLE_COLUMNS = [
    "event_name",
    "start_date",
    "end_date",
    "category",
    "status",
    "n_scouts",
    "n_adults",
    "scouts",
    "adults",
]


def write_table(df: pd.DataFrame, path: Path, fmt: str = "csv") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(path, index=False)
        return path
    if fmt == "csv":
        df.to_csv(path, index=False)
        return path
    raise ValueError(f"Unsupported table format: {fmt}")


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
    return path


def build_events_table(
    future_events: Iterable[EventRecord],
    past_events: Iterable[EventRecord],
) -> pd.DataFrame:
    rows = [
        {
            "event_name": event.event_name,
            "start_date": event.start_date,
            "end_date": event.end_date,
            "category": event.category.value,
            "status": status,
            "n_scouts": len(event.scouts),
            "n_adults": len(event.adults),
            "scouts": "; ".join(event.scouts),
            "adults": "; ".join(event.adults),
        }
        for status, events in (("upcoming", future_events), ("past", past_events))
        for event in events
    ]
    return pd.DataFrame(rows, columns=EVENT_TABLE_COLUMNS)


def write_events_backup(
    future_events: Iterable[EventRecord],
    past_events: Iterable[EventRecord],
    path: Path,
    exported_at: datetime | None = None,
) -> Path:
    """Write the JSON snapshot used to restore or audit the event catalog."""
    exported_at = exported_at or datetime.now(timezone.utc)
    data = {
        "futureEvents": [event.to_dict() for event in future_events],
        "pastEvents": [event.to_dict() for event in past_events],
        "exportedAt": exported_at.isoformat(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
