from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from event_roster.config import DEFAULT_TIMEZONE, TimeConfig
from event_roster.records import EventRecord

LOGGER = logging.getLogger(__name__)

EVENT_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class ClassifiedEvents:
    future: tuple[EventRecord, ...]
    past: tuple[EventRecord, ...]


def today_in_timezone(config: TimeConfig | None = None) -> date:
    timezone_name = (config.timezone if config else None) or DEFAULT_TIMEZONE
    try:
        zone = ZoneInfo(timezone_name)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"invalid timezone: {timezone_name}") from exc
    return datetime.now(zone).date()


def parse_event_date(value: str | None) -> date | None:
    if not value:
        return None
    parsed = pd.to_datetime(value, format=EVENT_DATE_FORMAT, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def comparison_date(event: EventRecord) -> date | None:
    return parse_event_date(event.end_date or event.start_date)


def classify_events(events: Iterable[EventRecord], today: date) -> ClassifiedEvents:
    """Split events into future and past; unparsable dates count as future."""
    future: list[EventRecord] = []
    past: list[EventRecord] = []
    for event in events:
        event_date = comparison_date(event)
        if event_date is None:
            LOGGER.warning(
                "Unparsable date for event %r (%s); treating as upcoming",
                event.event_name,
                event.end_date or event.start_date,
            )
            future.append(event)
        elif event_date < today:
            past.append(event)
        else:
            future.append(event)
    return ClassifiedEvents(future=tuple(future), past=tuple(past))
