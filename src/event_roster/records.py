from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventCategory(str, Enum):
    EagleProject = "Eagle Project"
    ServiceProject = "Service Project"
    Fundraiser = "Fundraiser"
    Camping = "Camping"
    Other = "Other"


@dataclass(frozen=True)
class TabularPayload:
    columns: tuple[str, ...] = ()
    rows: tuple[dict[str, str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class SignupRecord:
    person_name: str
    event_name_raw: str
    event_name_clean: str
    start_date: str
    end_date: str
    category: EventCategory
    is_adult: bool

    @property
    def is_valid(self) -> bool:
        return bool(self.event_name_clean and self.start_date and self.person_name)


@dataclass(frozen=True)
class EventRecord:
    event_name: str
    start_date: str
    end_date: str
    category: EventCategory
    scouts: tuple[str, ...] = ()
    adults: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return event_key(self.event_name, self.start_date, self.end_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "eventName": self.event_name,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "category": self.category.value,
            "scouts": list(self.scouts),
            "adults": list(self.adults),
        }


@dataclass(frozen=True)
class IdentityRecord:
    full_name: str
    first_name: str
    last_name: str
    normalized_key: str = field(default="")

    def __post_init__(self) -> None:
        if not self.normalized_key:
            object.__setattr__(self, "normalized_key", normalize_person_name(self.full_name))


def normalize_person_name(value: object) -> str:
    return str(value).strip().lower()


def event_key(event_name: str, start_date: str, end_date: str) -> str:
    return f"{event_name}_{start_date}_{end_date}".lower()
