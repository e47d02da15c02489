from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from event_roster.records import EventRecord, IdentityRecord, normalize_person_name

PersonRole = Literal["scouts", "adults"]


def split_full_name(full_name: str) -> tuple[str, str]:
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def extract_identities(
    future_events: Iterable[EventRecord],
    past_events: Iterable[EventRecord],
    role: PersonRole = "scouts",
) -> list[IdentityRecord]:
    """Collect unique people of one role across future events, then past events."""
    identities: dict[str, IdentityRecord] = {}
    for events in (future_events, past_events):
        for event in events or ():
            for raw_name in getattr(event, role):
                name = str(raw_name).strip()
                normalized = normalize_person_name(name)
                if not normalized or normalized in identities:
                    continue
                first_name, last_name = split_full_name(name)
                identities[normalized] = IdentityRecord(
                    full_name=name,
                    first_name=first_name,
                    last_name=last_name,
                    normalized_key=normalized,
                )
    return list(identities.values())


def extract_unique_scouts(
    future_events: Iterable[EventRecord],
    past_events: Iterable[EventRecord],
) -> list[IdentityRecord]:
    return extract_identities(future_events, past_events, role="scouts")


def extract_unique_adults(
    future_events: Iterable[EventRecord],
    past_events: Iterable[EventRecord],
) -> list[IdentityRecord]:
    return extract_identities(future_events, past_events, role="adults")
