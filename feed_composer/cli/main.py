"""CLI commands for composing and loading the feed."""

import json
import logging
from datetime import datetime
from pathlib import Path

import click
import structlog

from feed_composer import __version__
from feed_composer.content.cards import Card, card_to_dict, estimated_height
from feed_composer.content.layout import LayoutConfigError, load_card_heights
from feed_composer.fetch.client import HttpFeedFetcher
from feed_composer.fetch.decode import decode_content, decode_sources
from feed_composer.observability.logging import configure_logging
from feed_composer.scorer.scorer import FeedScorer
from feed_composer.sequencer.sequencer import CardSequencer
from feed_composer.session.errors import FeedFetchError
from feed_composer.session.session import FeedSession
from feed_composer.settings import AppSettings, get_settings
from feed_composer.store.history import VisitHistory
from feed_composer.store.overrides import SourceOverrideStore


logger = structlog.get_logger()

# Width used for height estimates in JSON output.
DEFAULT_LAYOUT_WIDTH = 375.0


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"Not an ISO timestamp: {value}") from e


def _history_from(visited: tuple[str, ...]) -> VisitHistory:
    history = VisitHistory()
    for url in visited:
        history.record_visit(url)
    return history


def _emit_cards(cards: list[Card], layout_path: Path | None, width: float) -> None:
    try:
        heights = load_card_heights(layout_path)
    except LayoutConfigError as e:
        raise click.ClickException(str(e)) from e

    payload = []
    for card in cards:
        data = card_to_dict(card)
        data["estimated_height"] = round(estimated_height(card, width, heights), 2)
        payload.append(data)
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """Compose a personalized content feed."""
    settings = get_settings()
    level = logging.DEBUG if verbose else settings.logging_level()
    configure_logging(level=level, json_format=json_logs or settings.json_logs)
    ctx.obj = settings


@cli.command()
@click.option(
    "--feed",
    "feed_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to feed.json.",
)
@click.option(
    "--sources",
    "sources_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to sources.json.",
)
@click.option("--visited", multiple=True, help="Recently visited URL (repeatable).")
@click.option("--now", "now_value", default=None, help="Reference time (ISO 8601).")
@click.option("--width", default=DEFAULT_LAYOUT_WIDTH, show_default=True)
@click.pass_obj
def compose(  # noqa: PLR0913
    settings: AppSettings,
    feed_path: Path,
    sources_path: Path,
    visited: tuple[str, ...],
    now_value: str | None,
    width: float,
) -> None:
    """Compose cards from local sources and feed files."""
    try:
        sources, skipped_sources = decode_sources(
            sources_path.read_bytes(), str(sources_path)
        )
        items, skipped_items = decode_content(feed_path.read_bytes(), str(feed_path))
    except FeedFetchError as e:
        raise click.ClickException(e.message) from e

    history = _history_from(visited)
    scorer = FeedScorer(
        recent_domains=history.recent_domains(settings.history_limit),
        now=_parse_now(now_value),
    )
    cards = CardSequencer().generate(sorted(scorer.score_items(items, sources)))

    logger.info(
        "compose_complete",
        component="cli",
        sources=len(sources),
        items=len(items),
        skipped=skipped_sources + skipped_items,
        cards=len(cards),
    )
    _emit_cards(cards, settings.layout_path, width)


@cli.command()
@click.option("--visited", multiple=True, help="Recently visited URL (repeatable).")
@click.option("--width", default=DEFAULT_LAYOUT_WIDTH, show_default=True)
@click.pass_obj
def load(settings: AppSettings, visited: tuple[str, ...], width: float) -> None:
    """Load the remote feed through a session and print its cards."""
    fetcher = HttpFeedFetcher(settings.fetch_config())
    with (
        SourceOverrideStore(settings.state_path) as overrides,
        FeedSession(
            fetcher=fetcher,
            overrides=overrides,
            history=_history_from(visited),
            config=settings.session_config(),
        ) as session,
    ):
        snapshot = session.load()

    if snapshot.error is not None:
        raise click.ClickException(
            f"Feed load failed ({snapshot.error.error_class.value}): "
            f"{snapshot.error.message}"
        )
    _emit_cards(list(snapshot.cards), settings.layout_path, width)


@cli.command()
@click.argument("publisher_id")
@click.option("--enable/--disable", default=True, help="New enabled flag.")
@click.option(
    "--reset",
    is_flag=True,
    help="Drop the override so the fetched flag applies again.",
)
@click.pass_obj
def toggle(settings: AppSettings, publisher_id: str, enable: bool, reset: bool) -> None:
    """Persist an enabled override for a publisher."""
    with SourceOverrideStore(settings.state_path) as overrides:
        if reset:
            overrides.clear(publisher_id)
            state = "reset"
        else:
            overrides.set_enabled(publisher_id, enable)
            state = "enabled" if enable else "disabled"
    click.echo(f"{publisher_id} {state}")


if __name__ == "__main__":
    cli()
