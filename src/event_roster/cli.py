from __future__ import annotations

from dataclasses import asdict
from datetime import date
from pathlib import Path

import typer

from event_roster.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from event_roster.features.history import build_person_history, summarize_events
from event_roster.features.similarity import rank_identities
from event_roster.io.read import load_payload
from event_roster.io.write import (
    build_events_table,
    write_events_backup,
    write_summary,
    write_table,
)
from event_roster.logging import configure_logging
from event_roster.paths import build_output_paths
from event_roster.pipeline.ingest import RosterState, run_ingestion

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            return load_config(DEFAULT_CONFIG_PATH)
        return AppConfig()
    return load_config(config_path)


def _resolve_source(source: Path | None, cfg: AppConfig) -> Path:
    if source is not None:
        return source
    if cfg.input.source_path:
        return Path(cfg.input.source_path)
    raise typer.BadParameter(
        "Missing --source. Pass a sheet export (.json gviz response or .csv) "
        "or set input.source_path in config."
    )


def _parse_today(today: str | None) -> date | None:
    if today is None:
        return None
    try:
        return date.fromisoformat(today)
    except ValueError as exc:
        raise typer.BadParameter(f"--today must be an ISO date (YYYY-MM-DD): {today}") from exc


def _ingest(
    source: Path | None,
    config: Path | None,
    today: str | None,
) -> tuple[AppConfig, RosterState]:
    try:
        cfg = _load_app_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    source_path = _resolve_source(source, cfg)
    reference_date = _parse_today(today)
    try:
        payload = load_payload(source_path)
        state = run_ingestion(payload, config=cfg, today=reference_date)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return cfg, state


@app.command()
def ingest(
    source: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    today: str | None = typer.Option(
        None, help="Reference date (YYYY-MM-DD) for the past/upcoming split."
    ),
) -> None:
    """Build the event catalog and write the backup, table, and summary outputs."""
    configure_logging()
    cfg, state = _ingest(source, config, today)
    paths = build_output_paths(out)

    backup_path = write_events_backup(
        state.future_events, state.past_events, paths.summary / "events-backup.json"
    )
    extension = "parquet" if cfg.outputs.tables_format == "parquet" else "csv"
    write_table(
        build_events_table(state.future_events, state.past_events),
        paths.tables / f"events.{extension}",
        fmt=cfg.outputs.tables_format,
    )
    summary = summarize_events(state.future_events, state.past_events)
    write_summary(
        {**asdict(summary), "reference_date": state.reference_date.isoformat()},
        paths.summary / "roster_summary.json",
    )

    typer.echo("Ingestion complete")
    typer.echo(f"- upcoming_events: {summary.future_events}")
    typer.echo(f"- past_events: {summary.past_events}")
    typer.echo(f"- unique_scouts: {summary.unique_scouts}")
    typer.echo(f"- unique_adults: {summary.unique_adults}")
    typer.echo(f"- backup: {backup_path}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text name to look up."),
    source: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    today: str | None = typer.Option(
        None, help="Reference date (YYYY-MM-DD) for the past/upcoming split."
    ),
    adults: bool = typer.Option(False, help="Search adult leaders instead of scouts."),
    limit: int | None = typer.Option(None, min=1, help="Defaults to matching.max_suggestions."),
) -> None:
    """Print the closest known names for a query."""
    configure_logging("WARNING")
    cfg, state = _ingest(source, config, today)
    corpus = state.adults if adults else state.scouts
    matches = rank_identities(query, corpus, cfg.matching)
    if not matches:
        typer.echo(f"No matches for: {query}")
        return
    for match in matches[: limit or cfg.matching.max_suggestions]:
        typer.echo(f"{match.score:.3f}  {match.identity.full_name}")


@app.command()
def history(
    name: str = typer.Argument(..., help="Exact scout name (case-insensitive)."),
    source: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    today: str | None = typer.Option(
        None, help="Reference date (YYYY-MM-DD) for the past/upcoming split."
    ),
) -> None:
    """Print a scout's upcoming and past events."""
    configure_logging("WARNING")
    _cfg, state = _ingest(source, config, today)
    person = build_person_history(name, state.future_events, state.past_events)

    typer.echo(person.name)
    typer.echo(
        f"- past: {person.total_past}  upcoming: {person.total_upcoming}  "
        f"total_days: {person.total_days}"
    )
    typer.echo("Upcoming events:")
    if not person.upcoming:
        typer.echo("  (none)")
    for event in person.upcoming:
        typer.echo(f"  {event.start_date}  {event.event_name} [{event.category.value}]")
    typer.echo("Past events:")
    if not person.past:
        typer.echo("  (none)")
    for event in person.past:
        typer.echo(f"  {event.start_date}  {event.event_name} [{event.category.value}]")


if __name__ == "__main__":
    app()
