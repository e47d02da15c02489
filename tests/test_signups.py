from __future__ import annotations

from event_roster.io.schema import normalize_rows
from event_roster.preprocess.signups import (
    classify_category,
    clean_event_name,
    extract_event_dates,
    extract_signup,
    extract_signups,
)
from event_roster.records import EventCategory, SignupRecord

COLUMNS = [
    "Timestamp",
    "Which event did you signup for?",
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Patrol Leader - Patrol?",
]


def _row(event: str, first: str, last: str, role: str = "Scout") -> dict[str, str]:
    return {
        "Timestamp": "11/1/2025 10:00:00",
        "Which event did you signup for?": event,
        "First Name": first,
        "Last Name": last,
        "Email": "",
        "Phone": "",
        "Patrol Leader - Patrol?": role,
    }


def test_extract_signup_parses_service_project_row() -> None:
    row = _row("2025 - 11/29 - Leaf Center Service Project (2 pm - 4 pm)", "Jane", "Doe")

    signup = extract_signup(row, COLUMNS)

    assert signup == SignupRecord(
        person_name="Jane Doe",
        event_name_raw="2025 - 11/29 - Leaf Center Service Project (2 pm - 4 pm)",
        event_name_clean="Leaf Center Service Project (2 pm - 4 pm)",
        start_date="2025-11-29",
        end_date="2025-11-29",
        category=EventCategory.ServiceProject,
        is_adult=False,
    )
    assert signup.is_valid


def test_extract_signup_detects_adults_case_insensitively() -> None:
    row = _row("2025 - 12/13 - Patrick Zhang Eagle Project Day #3", "Pat", "Lee", "ADULT Leader")

    signup = extract_signup(row, COLUMNS)

    assert signup.is_adult
    assert signup.category == EventCategory.EagleProject
    assert signup.start_date == "2025-12-13"


def test_extract_signup_trims_person_name_when_last_name_missing() -> None:
    signup = extract_signup(_row("2025 - 1/4 - Hike", " Prince ", ""), COLUMNS)
    assert signup.person_name == "Prince"


def test_extract_event_dates_zero_pads_and_tolerates_spacing() -> None:
    assert extract_event_dates("2026-3/7 - Winter Campout") == ("2026-03-07", "2026-03-07")
    assert extract_event_dates("2026 -  12/1 - Food Drive") == ("2026-12-01", "2026-12-01")
    assert extract_event_dates("Court of Honor") == ("", "")


def test_clean_event_name_strips_only_leading_date_prefix() -> None:
    assert clean_event_name("  2025 - 11/29 - Leaf Center  ") == "Leaf Center"
    assert clean_event_name("Court of Honor") == "Court of Honor"
    assert clean_event_name("2026-3/7 Campout") == "2026-3/7 Campout"


def test_classify_category_checks_keywords_in_order() -> None:
    assert classify_category("Eagle Project Fundraiser") == EventCategory.EagleProject
    assert classify_category("Spring Camp Service Project") == EventCategory.ServiceProject
    assert classify_category("Popcorn FUNDRAISER") == EventCategory.Fundraiser
    assert classify_category("Winter Campout") == EventCategory.Camping
    assert classify_category("Court of Honor") == EventCategory.Other


def test_extract_signups_drops_invalid_rows() -> None:
    payload = normalize_rows(
        COLUMNS,
        [
            list(_row("2025 - 11/29 - Hike", "Jane", "Doe").values()),
            list(_row("Court of Honor", "Jane", "Doe").values()),
            list(_row("2025 - 11/29 - Hike", "", "").values()),
            list(_row("2025 - 11/29 - ", "Jane", "Doe").values()),
        ],
    )

    signups = extract_signups(payload)

    assert [signup.event_name_clean for signup in signups] == ["Hike"]
