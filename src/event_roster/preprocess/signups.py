from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

from event_roster.config import ColumnsConfig
from event_roster.preprocess.columns import ResolvedColumns, resolve_signup_columns
from event_roster.records import EventCategory, SignupRecord, TabularPayload

LOGGER = logging.getLogger(__name__)

# Event strings look like "2025 - 11/29 - Leaf Center Service Project (2 pm - 4 pm)".
EVENT_DATE_RE = re.compile(r"(\d{4})\s*-\s*(\d{1,2})/(\d{1,2})")
EVENT_DATE_PREFIX_RE = re.compile(r"^\d{4}\s*-\s*\d{1,2}/\d{1,2}\s*-\s*")
ADULT_MARKER = "adult"

CATEGORY_KEYWORDS: tuple[tuple[str, EventCategory], ...] = (
    ("eagle project", EventCategory.EagleProject),
    ("service project", EventCategory.ServiceProject),
    ("fundraiser", EventCategory.Fundraiser),
    ("camp", EventCategory.Camping),
)


def extract_event_dates(event_name: str) -> tuple[str, str]:
    """Return ISO (start, end) dates embedded in an event string, or empty strings."""
    match = EVENT_DATE_RE.search(event_name)
    if match is None:
        return "", ""
    year, month, day = match.groups()
    start_date = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    # Trailing time ranges like "(2 pm - 4 pm)" never move the end date.
    return start_date, start_date


def clean_event_name(event_name: str) -> str:
    return EVENT_DATE_PREFIX_RE.sub("", event_name.strip(), count=1).strip()


def classify_category(event_name: str) -> EventCategory:
    lowered = event_name.lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in lowered:
            return category
    return EventCategory.Other


def is_adult_role(role_value: str) -> bool:
    return ADULT_MARKER in role_value.lower()


def _signup_from_row(row: Mapping[str, str], columns: ResolvedColumns) -> SignupRecord:
    event_name_raw = row.get(columns.event) or ""
    first_name = row.get(columns.first_name) or ""
    last_name = row.get(columns.last_name) or ""
    role_value = row.get(columns.role) or ""

    start_date, end_date = extract_event_dates(event_name_raw.strip())
    event_name_clean = clean_event_name(event_name_raw)
    return SignupRecord(
        person_name=f"{first_name} {last_name}".strip(),
        event_name_raw=event_name_raw,
        event_name_clean=event_name_clean,
        start_date=start_date,
        end_date=end_date,
        category=classify_category(event_name_clean),
        is_adult=is_adult_role(role_value),
    )


def extract_signup(
    row: Mapping[str, str],
    columns: Sequence[str],
    config: ColumnsConfig | None = None,
) -> SignupRecord:
    """Derive a signup record from one normalized row."""
    return _signup_from_row(row, resolve_signup_columns(columns, config))


def extract_signups(
    payload: TabularPayload,
    config: ColumnsConfig | None = None,
) -> list[SignupRecord]:
    """Return the valid signups of a payload in row order."""
    resolved = resolve_signup_columns(payload.columns, config)
    LOGGER.debug("Resolved signup columns: %s", resolved)

    signups: list[SignupRecord] = []
    dropped = 0
    for row in payload.rows:
        signup = _signup_from_row(row, resolved)
        if signup.is_valid:
            signups.append(signup)
        else:
            dropped += 1
    if dropped:
        LOGGER.info("Dropped %d signup rows missing an event, date, or name", dropped)
    return signups
