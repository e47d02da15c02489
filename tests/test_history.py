from __future__ import annotations

from datetime import date

from event_roster.features.history import (
    build_person_history,
    event_length_days,
    events_for_person,
    is_event_past,
    summarize_events,
)
from event_roster.records import EventCategory, EventRecord


def _event(
    name: str,
    start: str,
    end: str,
    scouts: tuple[str, ...] = ("Jane Doe",),
    adults: tuple[str, ...] = (),
) -> EventRecord:
    return EventRecord(
        event_name=name,
        start_date=start,
        end_date=end,
        category=EventCategory.Other,
        scouts=scouts,
        adults=adults,
    )


def test_is_event_past_fails_open() -> None:
    today = date(2025, 12, 1)
    assert is_event_past("2025-11-30", today)
    assert not is_event_past("2025-12-01", today)
    assert not is_event_past("", today)
    assert not is_event_past("not-a-date", today)


def test_event_length_days_is_inclusive() -> None:
    assert event_length_days(_event("Hike", "2025-11-29", "2025-11-29")) == 1
    assert event_length_days(_event("Campout", "2025-06-01", "2025-06-03")) == 3
    assert event_length_days(_event("Broken", "2025-02-30", "2025-02-30")) is None


def test_events_for_person_matches_trimmed_case_insensitive_names() -> None:
    hike = _event("Hike", "2026-01-10", "2026-01-10", scouts=("Jane Doe", "Sam Roe"))
    camp = _event("Campout", "2025-06-01", "2025-06-03", scouts=("JANE DOE",))
    drive = _event(
        "Food Drive", "2025-05-01", "2025-05-01", scouts=("Sam Roe",), adults=("Jane Doe",)
    )

    found = events_for_person("  jane doe ", [hike], [camp, drive])

    assert found.future == (hike,)
    assert found.past == (camp,)


def test_build_person_history_sorts_and_counts_days() -> None:
    soon = _event("Hike", "2026-01-10", "2026-01-10")
    later = _event("Court of Honor", "2026-02-01", "2026-02-01")
    camp = _event("Campout", "2025-06-01", "2025-06-03")
    drive = _event("Food Drive", "2025-08-01", "2025-08-01")
    broken = _event("Mystery", "2025-02-30", "2025-02-30")

    history = build_person_history("Jane Doe", [later, soon], [camp, broken, drive])

    assert history.upcoming == (soon, later)
    assert history.past == (drive, camp, broken)
    assert history.total_upcoming == 2
    assert history.total_past == 3
    assert history.total_days == 4


def test_summarize_events_counts_unique_people_across_events() -> None:
    future = [_event("Hike", "2026-01-10", "2026-01-10", scouts=("Jane Doe",), adults=("Pat Lee",))]
    past = [
        _event("Campout", "2025-06-01", "2025-06-03", scouts=("jane doe", "Sam Roe")),
        _event("Drive", "2025-05-01", "2025-05-01", scouts=(), adults=("PAT LEE", "Kim Poe")),
    ]

    summary = summarize_events(future, past)

    assert summary.unique_scouts == 2
    assert summary.unique_adults == 2
    assert summary.future_events == 1
    assert summary.past_events == 2
