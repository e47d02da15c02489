from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from event_roster.preprocess.time import comparison_date, parse_event_date
from event_roster.records import EventRecord, normalize_person_name


@dataclass(frozen=True)
class PersonEvents:
    future: tuple[EventRecord, ...]
    past: tuple[EventRecord, ...]


@dataclass(frozen=True)
class PersonHistory:
    name: str
    upcoming: tuple[EventRecord, ...]
    past: tuple[EventRecord, ...]
    total_past: int
    total_upcoming: int
    total_days: int


@dataclass(frozen=True)
class RosterSummary:
    unique_scouts: int
    unique_adults: int
    future_events: int
    past_events: int


def is_event_past(end_date: str | None, today: date) -> bool:
    event_date = parse_event_date(end_date)
    if event_date is None:
        return False
    return event_date < today


def event_length_days(event: EventRecord) -> int | None:
    """Inclusive day count of an event, or None when either date is unusable."""
    start = parse_event_date(event.start_date)
    end = parse_event_date(event.end_date)
    if start is None or end is None:
        return None
    return (end - start).days + 1


def _attended(
    events: Iterable[EventRecord] | None,
    normalized_name: str,
) -> tuple[EventRecord, ...]:
    return tuple(
        event
        for event in events or ()
        if any(normalize_person_name(scout) == normalized_name for scout in event.scouts)
    )


def events_for_person(
    name: str,
    future_events: Iterable[EventRecord] | None,
    past_events: Iterable[EventRecord] | None,
) -> PersonEvents:
    normalized_name = normalize_person_name(name)
    return PersonEvents(
        future=_attended(future_events, normalized_name),
        past=_attended(past_events, normalized_name),
    )


def _sort_date(value: date | None) -> date:
    return value or date.min


def build_person_history(
    name: str,
    future_events: Sequence[EventRecord],
    past_events: Sequence[EventRecord],
) -> PersonHistory:
    attended = events_for_person(name, future_events, past_events)
    upcoming = sorted(
        attended.future,
        key=lambda event: _sort_date(parse_event_date(event.start_date)),
    )
    past = sorted(
        attended.past,
        key=lambda event: _sort_date(comparison_date(event)),
        reverse=True,
    )
    total_days = sum(event_length_days(event) or 0 for event in past)
    return PersonHistory(
        name=name,
        upcoming=tuple(upcoming),
        past=tuple(past),
        total_past=len(past),
        total_upcoming=len(upcoming),
        total_days=total_days,
    )


def _unique_people(events: Iterable[EventRecord], role: str) -> set[str]:
    people: set[str] = set()
    for event in events:
        for name in getattr(event, role):
            normalized = normalize_person_name(name)
            if normalized:
                people.add(normalized)
    return people


def summarize_events(
    future_events: Sequence[EventRecord],
    past_events: Sequence[EventRecord],
) -> RosterSummary:
    all_events = (*future_events, *past_events)
    return RosterSummary(
        unique_scouts=len(_unique_people(all_events, "scouts")),
        unique_adults=len(_unique_people(all_events, "adults")),
        future_events=len(future_events),
        past_events=len(past_events),
    )
