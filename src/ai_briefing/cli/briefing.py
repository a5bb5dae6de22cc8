"""CLI commands for the AI briefing engine."""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click
import structlog
from pydantic import TypeAdapter, ValidationError

from ai_briefing import __version__
from ai_briefing.config.constants import COMPONENT_CLI
from ai_briefing.config.loader import ConfigLoader, ConfigValidationError, LoadedConfig
from ai_briefing.engine.engine import BriefingEngine
from ai_briefing.engine.models import RunInput, format_run_id
from ai_briefing.errors import BriefingEngineError
from ai_briefing.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from ai_briefing.settings.app import get_settings
from ai_briefing.sources.models import SourceItem
from ai_briefing.sources.url import dedupe_sources
from ai_briefing.sources.window import compute_run_window


logger = structlog.get_logger()

_SOURCES_ADAPTER = TypeAdapter(list[SourceItem])


def _parse_now(value: str | None) -> datetime:
    """Parse --now, defaulting to the current time in UTC."""
    if value is None:
        return datetime.now(UTC)
    parsed = datetime.fromisoformat(value)
    return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed


def _load_sources(sources_path: Path) -> list[SourceItem]:
    """Read a JSON batch of source items.

    Accepts either a bare list or an object with a ``sources`` list.

    Args:
        sources_path: Path to the JSON file.

    Returns:
        Validated source items in file order.
    """
    data: Any = json.loads(sources_path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("sources", [])
    return _SOURCES_ADAPTER.validate_python(data)


def _echo_config_errors(error: ConfigValidationError) -> None:
    click.echo(f"Configuration validation failed: {error.file_path}", err=True)
    for item in error.errors:
        click.echo(f"  - {item['loc']}: {item['msg']} ({item['type']})", err=True)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """AI briefing topic-formation engine CLI."""


@cli.command()
@click.option(
    "--sources",
    "sources_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a JSON batch of source items.",
)
@click.option(
    "--registry",
    "registry_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the publisher registry (YAML or JSON).",
)
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a rules.yaml replacing the built-in rule tables.",
)
@click.option(
    "--date",
    "briefing_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Briefing date label (default: date of the window end).",
)
@click.option(
    "--now",
    "now_value",
    type=str,
    help="Reference time as ISO 8601 (default: current time).",
)
@click.option(
    "--lookback-hours",
    type=click.IntRange(min=1),
    help="Window length in hours (default: BRIEFING_LOOKBACK_HOURS or 72).",
)
@click.option(
    "--dedupe/--no-dedupe",
    default=False,
    help="Drop items sharing a canonical URL before the run.",
)
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Log format on stderr (default: BRIEFING_JSON_LOGS or JSON).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def run(  # noqa: PLR0913
    sources_path: Path,
    registry_path: Path | None,
    rules_path: Path | None,
    briefing_date: datetime | None,
    now_value: str | None,
    lookback_hours: int | None,
    dedupe: bool,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Run the engine on a batch and print the run JSON to stdout."""
    settings = get_settings()
    json_format = settings.json_logs if json_logs is None else json_logs
    log_level = logging.DEBUG if (verbose or settings.verbose) else logging.INFO
    configure_logging(level=log_level, json_format=json_format)

    try:
        now = _parse_now(now_value)
    except ValueError:
        click.echo(f"Error: Invalid --now value '{now_value}'", err=True)
        sys.exit(1)

    window = compute_run_window(
        now,
        lookback_hours=lookback_hours or settings.lookback_hours,
        anchor_hour=settings.anchor_hour_utc,
    )
    date_label = (
        briefing_date.strftime("%Y-%m-%d") if briefing_date else window.briefing_date
    )
    run_id = format_run_id(date_label)
    bind_run_context(run_id)
    log = logger.bind(component=COMPONENT_CLI, command="run", run_id=run_id)

    try:
        loader = ConfigLoader(run_id=run_id)
        config: LoadedConfig = loader.load(
            rules_path=rules_path, registry_path=registry_path
        )

        try:
            sources = _load_sources(sources_path)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            log.warning("sources_load_failed", error=str(e))
            click.echo(f"Error: Invalid sources file {sources_path}: {e}", err=True)
            sys.exit(1)

        if dedupe:
            before = len(sources)
            sources = dedupe_sources(sources)
            log.info("sources_deduped", items_before=before, items_after=len(sources))

        run_input = RunInput(
            sources=sources,
            always_show=config.registry.always_show_map(),
            window_start=window.window_start,
            window_end=window.window_end,
            briefing_date=date_label,
            now=now,
        )
        engine = BriefingEngine(run_id=run_id, rules=config.rules)
        result = engine.run(run_input)

    except ConfigValidationError as e:
        log.warning("config_load_failed", file_path=e.file_path)
        _echo_config_errors(e)
        sys.exit(1)
    except BriefingEngineError as e:
        log.error("briefing_run_failed", error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        clear_run_context()

    click.echo(json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False))


@cli.command("validate-rules")
@click.argument(
    "rules_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate_rules(rules_path: Path) -> None:
    """Validate a rule table file without running the engine."""
    configure_logging(json_format=False)
    loader = ConfigLoader(run_id="validate-rules")

    try:
        config = loader.load(rules_path=rules_path)
    except ConfigValidationError as e:
        _echo_config_errors(e)
        sys.exit(1)

    rules = config.rules
    click.echo("Rule tables are valid!")
    click.echo(f"  Aliases: {len(rules.aliases)}")
    click.echo(f"  Entities: {len(rules.entities)}")
    click.echo(f"  Subdomain rules: {len(rules.subdomains)}")
    click.echo(f"  Title rules: {len(rules.title_rules)}")
    click.echo(f"  Stopwords: {len(rules.stopwords)}")
    for checksum in loader.file_checksums.values():
        click.echo(f"  Checksum: {checksum}")
