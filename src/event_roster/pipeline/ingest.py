from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from event_roster.config import AppConfig, ColumnsConfig
from event_roster.features.aggregates import aggregate_signups
from event_roster.features.identities import extract_unique_adults, extract_unique_scouts
from event_roster.preprocess.signups import extract_signups
from event_roster.preprocess.time import classify_events, today_in_timezone
from event_roster.records import EventRecord, IdentityRecord, TabularPayload

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterState:
    """Caller-owned result of one ingestion pass; replaced wholesale on the next pass."""

    reference_date: date
    future_events: tuple[EventRecord, ...] = ()
    past_events: tuple[EventRecord, ...] = ()
    scouts: tuple[IdentityRecord, ...] = ()
    adults: tuple[IdentityRecord, ...] = ()

    @property
    def all_events(self) -> tuple[EventRecord, ...]:
        return self.future_events + self.past_events


def convert_payload_to_events(
    payload: TabularPayload,
    columns: ColumnsConfig | None = None,
) -> list[EventRecord]:
    if payload.is_empty:
        return []
    return aggregate_signups(extract_signups(payload, columns))


def run_ingestion(
    payload: TabularPayload,
    config: AppConfig | None = None,
    today: date | None = None,
) -> RosterState:
    config = config or AppConfig()
    reference_date = today or today_in_timezone(config.time)

    events = convert_payload_to_events(payload, config.columns)
    classified = classify_events(events, reference_date)
    scouts = extract_unique_scouts(classified.future, classified.past)
    adults = extract_unique_adults(classified.future, classified.past)

    LOGGER.info(
        "Ingested %d rows into %d events (%d upcoming, %d past); %d scouts, %d adults",
        len(payload.rows),
        len(events),
        len(classified.future),
        len(classified.past),
        len(scouts),
        len(adults),
    )
    return RosterState(
        reference_date=reference_date,
        future_events=classified.future,
        past_events=classified.past,
        scouts=tuple(scouts),
        adults=tuple(adults),
    )
