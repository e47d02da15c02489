from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from event_roster.config import ColumnsConfig


class SignupField(str, Enum):
    event = "event"
    first_name = "first_name"
    last_name = "last_name"
    role = "role"


@dataclass(frozen=True)
class LabelPattern:
    keywords: tuple[str, ...]
    match_any: bool = False

    def matches(self, label: str) -> bool:
        lowered = label.lower()
        if self.match_any:
            return any(keyword in lowered for keyword in self.keywords)
        return all(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True)
class ColumnRule:
    """Fallback chain for one field: label patterns in order, then a position, then a literal."""

    patterns: tuple[LabelPattern, ...]
    position: int
    default: str


COLUMN_RULES: dict[SignupField, ColumnRule] = {
    SignupField.event: ColumnRule(
        patterns=(
            LabelPattern(("event", "signup")),
            LabelPattern(("event", "activity"), match_any=True),
        ),
        position=1,
        default="Event",
    ),
    SignupField.first_name: ColumnRule(
        patterns=(LabelPattern(("first", "name")),),
        position=2,
        default="First Name",
    ),
    SignupField.last_name: ColumnRule(
        patterns=(LabelPattern(("last", "name")),),
        position=3,
        default="Last Name",
    ),
    SignupField.role: ColumnRule(
        patterns=(LabelPattern(("patrol", "leader"), match_any=True),),
        position=6,
        default="Patrol Leader - Patrol?",
    ),
}


def resolve_column(
    columns: Sequence[str],
    rule: ColumnRule,
    explicit: str | None = None,
) -> str:
    if explicit and explicit in columns:
        return explicit

    for pattern in rule.patterns:
        for label in columns:
            if label and pattern.matches(label):
                return label

    if rule.position < len(columns) and columns[rule.position]:
        return columns[rule.position]
    return rule.default


@dataclass(frozen=True)
class ResolvedColumns:
    event: str
    first_name: str
    last_name: str
    role: str


def resolve_signup_columns(
    columns: Sequence[str],
    config: ColumnsConfig | None = None,
) -> ResolvedColumns:
    config = config or ColumnsConfig()
    resolved = {
        field.value: resolve_column(columns, COLUMN_RULES[field], getattr(config, field.value))
        for field in SignupField
    }
    return ResolvedColumns(**resolved)
