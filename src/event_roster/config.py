from __future__ import annotations

import os
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMEZONE = "America/Chicago"


class ColumnsConfig(BaseModel):
    """Explicit source labels; any label left unset falls back to the heuristic rules."""

    event: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None


class MatchingConfig(BaseModel):
    min_candidate_similarity: float = Field(default=0.3, ge=0.0, le=1.0)
    substring_floor: float = Field(default=0.7, ge=0.0, le=1.0)
    containment_similarity: float = Field(default=0.8, ge=0.0, le=1.0)
    part_weight: float = Field(default=0.9, ge=0.0, le=1.0)
    min_result_score: float = Field(default=0.3, ge=0.0, le=1.0)
    max_suggestions: int = Field(default=5, ge=1)


class TimeConfig(BaseModel):
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if not value:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"invalid timezone: {value}") from exc
        return value


class InputConfig(BaseModel):
    source_path: str | None = None


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    time: TimeConfig = Field(default_factory=TimeConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.source_path = _resolve_optional_path(config.input.source_path, base_dir)
    config.time.timezone = (
        config.time.timezone or os.getenv("EVENT_ROSTER_TIMEZONE") or DEFAULT_TIMEZONE
    )
    return config
