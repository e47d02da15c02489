from __future__ import annotations

from event_roster.config import ColumnsConfig
from event_roster.preprocess.columns import (
    COLUMN_RULES,
    LabelPattern,
    SignupField,
    resolve_column,
    resolve_signup_columns,
)

SHEET_COLUMNS = [
    "Timestamp",
    "Which event did you signup for?",
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Patrol Leader - Patrol?",
]


def test_label_pattern_all_and_any_modes() -> None:
    assert LabelPattern(("event", "signup")).matches("Event SIGNUP")
    assert not LabelPattern(("event", "signup")).matches("Event")
    assert LabelPattern(("event", "activity"), match_any=True).matches("Activity")


def test_resolve_signup_columns_prefers_label_heuristics() -> None:
    resolved = resolve_signup_columns(SHEET_COLUMNS)

    assert resolved.event == "Which event did you signup for?"
    assert resolved.first_name == "First Name"
    assert resolved.last_name == "Last Name"
    assert resolved.role == "Patrol Leader - Patrol?"


def test_event_rule_prefers_signup_label_over_earlier_event_label() -> None:
    columns = ["Event Notes", "Activity", "Event Signup"]
    assert resolve_column(columns, COLUMN_RULES[SignupField.event]) == "Event Signup"
    assert resolve_column(columns[:2], COLUMN_RULES[SignupField.event]) == "Event Notes"


def test_resolve_signup_columns_falls_back_to_positions() -> None:
    columns = ["Timestamp", "Outing", "Given", "Surname", "Email", "Phone", "Role"]
    resolved = resolve_signup_columns(columns)

    assert resolved.event == "Outing"
    assert resolved.first_name == "Given"
    assert resolved.last_name == "Surname"
    assert resolved.role == "Role"


def test_resolve_signup_columns_falls_back_to_literal_defaults() -> None:
    resolved = resolve_signup_columns(["Timestamp"])

    assert resolved.event == "Event"
    assert resolved.first_name == "First Name"
    assert resolved.last_name == "Last Name"
    assert resolved.role == "Patrol Leader - Patrol?"


def test_explicit_column_wins_only_when_present() -> None:
    columns = ["Timestamp", "Event Signup", "Outing"]

    assert resolve_signup_columns(columns, ColumnsConfig(event="Outing")).event == "Outing"
    assert resolve_signup_columns(columns, ColumnsConfig(event="Missing")).event == "Event Signup"
