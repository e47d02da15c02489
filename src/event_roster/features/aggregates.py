from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from event_roster.records import (
    EventCategory,
    EventRecord,
    SignupRecord,
    event_key,
    normalize_person_name,
)


@dataclass
class _NameSet:
    """Insertion-ordered names, unique by lowercase/trimmed form; first spelling wins."""

    names: list[str] = field(default_factory=list)
    seen: set[str] = field(default_factory=set)

    def add(self, name: str) -> None:
        key = normalize_person_name(name)
        if not key or key in self.seen:
            return
        self.seen.add(key)
        self.names.append(name.strip())


@dataclass
class _EventBuilder:
    event_name: str
    start_date: str
    end_date: str
    category: EventCategory
    scouts: _NameSet = field(default_factory=_NameSet)
    adults: _NameSet = field(default_factory=_NameSet)

    def build(self) -> EventRecord:
        return EventRecord(
            event_name=self.event_name,
            start_date=self.start_date,
            end_date=self.end_date,
            category=self.category,
            scouts=tuple(self.scouts.names),
            adults=tuple(self.adults.names),
        )


def aggregate_signups(signups: Iterable[SignupRecord]) -> list[EventRecord]:
    """Fold signups into one event per (name, start, end), in first-seen order.

    Invalid signups are skipped here as well so callers cannot group undated rows.
    """
    builders: dict[str, _EventBuilder] = {}
    for signup in signups:
        if not signup.is_valid:
            continue
        key = event_key(signup.event_name_clean, signup.start_date, signup.end_date)
        builder = builders.get(key)
        if builder is None:
            builder = _EventBuilder(
                event_name=signup.event_name_clean,
                start_date=signup.start_date,
                end_date=signup.end_date or signup.start_date,
                category=signup.category,
            )
            builders[key] = builder
        target = builder.adults if signup.is_adult else builder.scouts
        target.add(signup.person_name)
    return [builder.build() for builder in builders.values()]
