"""Feed session owning load lifecycle, sources, and generated cards."""

import threading
import time
import uuid
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Annotated

import structlog
from pydantic import Field

from feed_composer.content.cards import Card, card_items, replacing
from feed_composer.content.models import ContentItem, Source
from feed_composer.data_model import StrictBaseModel
from feed_composer.observability.logging import session_log_context
from feed_composer.scorer.constants import DEFAULT_HISTORY_LIMIT
from feed_composer.scorer.scorer import FeedScorer
from feed_composer.sequencer.metrics import SequencerMetrics
from feed_composer.sequencer.rules import DEFAULT_RULES, RuleElement
from feed_composer.sequencer.sequencer import CardSequencer
from feed_composer.session.errors import FeedErrorClass, FeedFetchError
from feed_composer.session.metrics import SessionMetrics
from feed_composer.session.protocols import (
    EnablementStore,
    FeedFetcher,
    RecentDomainsProvider,
)
from feed_composer.session.state_machine import FeedSessionStateMachine, FeedState


logger = structlog.get_logger()


class SessionConfig(StrictBaseModel):
    """Configuration for a feed session."""

    history_limit: Annotated[int, Field(ge=0, le=10_000)] = DEFAULT_HISTORY_LIMIT
    max_workers: Annotated[int, Field(ge=2, le=32)] = 2


@dataclass(frozen=True)
class FeedSnapshot:
    """Read-only view of the session state.

    Attributes:
        state: Current lifecycle state.
        cards: Generated cards; empty unless the state is SUCCESS.
        error: Load failure; set only when the state is FAILURE.
    """

    state: FeedState
    cards: tuple[Card, ...] = field(default_factory=tuple)
    error: FeedFetchError | None = None

    @property
    def is_success(self) -> bool:
        """Check if cards are available."""
        return self.state == FeedState.SUCCESS


def _as_fetch_error(error: BaseException) -> FeedFetchError:
    if isinstance(error, FeedFetchError):
        return error
    return FeedFetchError(
        error_class=FeedErrorClass.UNKNOWN,
        message=f"Unexpected error: {error}",
    )


class FeedSession:
    """Stateful owner of the feed.

    Drives loading through ``FeedSessionStateMachine``:
        INITIAL -> LOADING -> SUCCESS | FAILURE

    Fetching and card generation run on a worker pool; every state change
    happens under the session lock, so completed loads and source toggles
    never interleave.
    """

    def __init__(  # noqa: PLR0913
        self,
        fetcher: FeedFetcher,
        overrides: EnablementStore,
        history: RecentDomainsProvider,
        config: SessionConfig | None = None,
        rules: Sequence[RuleElement] = DEFAULT_RULES,
        executor: Executor | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            fetcher: Source and content fetch collaborator.
            overrides: Persistence for source enablement overrides.
            history: Provider of recently visited domains.
            config: Session configuration.
            rules: Composition grammar used for card generation.
            executor: Worker pool; one is created and owned when omitted.
            session_id: Identifier for logging.
        """
        self._fetcher = fetcher
        self._overrides = overrides
        self._history = history
        self._config = config or SessionConfig()
        self._rules = tuple(rules)
        self._session_id = session_id or str(uuid.uuid4())

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix="feed-session",
        )

        self._lock = threading.RLock()
        self._state_machine = FeedSessionStateMachine(self._session_id)
        self._sources: list[Source] = []
        self._cards: list[Card] = []
        self._error: FeedFetchError | None = None

        self._metrics = SessionMetrics()
        self._sequencer_metrics = SequencerMetrics()
        self._log = logger.bind(component="session", session_id=self._session_id)

    def __enter__(self) -> "FeedSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool if the session created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    @property
    def session_id(self) -> str:
        """Get the session ID."""
        return self._session_id

    @property
    def state(self) -> FeedState:
        """Get the current lifecycle state."""
        return self._state_machine.state

    @property
    def snapshot(self) -> FeedSnapshot:
        """Get a consistent read-only view of state, cards, and error."""
        with self._lock:
            state = self._state_machine.state
            return FeedSnapshot(
                state=state,
                cards=tuple(self._cards) if state == FeedState.SUCCESS else (),
                error=self._error if state == FeedState.FAILURE else None,
            )

    @property
    def cards(self) -> list[Card] | None:
        """Get the generated cards, or None unless the state is SUCCESS."""
        with self._lock:
            if not self._state_machine.is_success():
                return None
            return list(self._cards)

    @property
    def error(self) -> FeedFetchError | None:
        """Get the load error if the state is FAILURE."""
        return self.snapshot.error

    @property
    def sources(self) -> list[Source]:
        """Get a copy of the current source list."""
        with self._lock:
            return list(self._sources)

    @property
    def is_content_expired(self) -> bool:
        """Whether the feed should be (re)loaded."""
        return not self._state_machine.is_success()

    @property
    def metrics(self) -> SessionMetrics:
        """Get the session metrics."""
        return self._metrics

    @property
    def sequencer_metrics(self) -> SequencerMetrics:
        """Get the card generation metrics."""
        return self._sequencer_metrics

    def load(self, now: datetime | None = None) -> FeedSnapshot:
        """Load sources and content and generate cards.

        Does nothing when the feed is already loaded or a load is in flight.
        Fetch failures leave the session in FAILURE; calling ``load`` again
        retries.

        Args:
            now: Reference time for scoring; defaults to now in UTC.

        Returns:
            Snapshot of the session after the load completes.
        """
        with self._lock:
            if self._state_machine.is_success() or self._state_machine.is_loading():
                self._metrics.loads_skipped += 1
                self._log.debug("load_skipped", state=self._state_machine.state.name)
                return self.snapshot
            self._state_machine.to_loading()
            self._error = None
            self._metrics.loads_started += 1

        with session_log_context(self._session_id):
            return self._run_load(now)

    def _run_load(self, now: datetime | None) -> FeedSnapshot:
        start = time.perf_counter()
        self._log.info("load_started")

        try:
            fetched_sources, items = self._fetch_all()
            sources = self._apply_overrides(
                fetched_sources, self._overrides.load_overrides()
            )
            recent_domains = self._history.recent_domains(self._config.history_limit)
            cards = self._executor.submit(
                self._generate, sources, items, recent_domains, now or datetime.now(UTC)
            ).result()
        except Exception as e:  # noqa: BLE001
            self._fail(_as_fetch_error(e), start)
            return self.snapshot

        with self._lock:
            self._sources = list(sources)
            self._cards = cards
            self._state_machine.to_success()
            self._metrics.loads_succeeded += 1
            self._metrics.last_load_duration_ms = (time.perf_counter() - start) * 1000

        self._log.info(
            "load_complete",
            sources=len(sources),
            items=len(items),
            cards=len(cards),
            duration_ms=round(self._metrics.last_load_duration_ms, 2),
        )
        return self.snapshot

    def toggle_source(self, source: Source, enabled: bool) -> None:
        """Enable or disable a source and relabel its items in existing cards.

        The card sequence is not regenerated: cards keep their items, which
        now carry the updated source. The change is persisted through the
        enablement store so the next session's pools honor it. Ignored
        unless the feed is loaded and the source is known.

        Args:
            source: Source to change, matched by id.
            enabled: New enabled flag.
        """
        with self._lock:
            if not self._state_machine.is_success():
                self._metrics.toggles_ignored += 1
                self._log.debug(
                    "toggle_ignored",
                    reason="not_loaded",
                    source_id=source.id,
                    state=self._state_machine.state.name,
                )
                return

            index = next(
                (i for i, s in enumerate(self._sources) if s.id == source.id), None
            )
            if index is None:
                self._metrics.toggles_ignored += 1
                self._log.debug(
                    "toggle_ignored", reason="unknown_source", source_id=source.id
                )
                return

            updated = self._sources[index].with_enabled(enabled)
            self._sources[index] = updated
            self._persist_override(updated.id, enabled)

            relabeled = 0
            for position, card in enumerate(self._cards):
                new_card = card
                for item in card_items(card):
                    if item.source == updated:
                        new_card = replacing(new_card, item, item.with_source(updated))
                if new_card is not card:
                    self._cards[position] = new_card
                    relabeled += 1

            self._metrics.toggles_applied += 1
            self._metrics.cards_relabeled += relabeled
            self._log.info(
                "source_toggled",
                source_id=updated.id,
                enabled=enabled,
                cards_relabeled=relabeled,
            )

    def _fetch_all(self) -> tuple[list[Source], list[ContentItem]]:
        """Fetch sources and content concurrently and join.

        Returns:
            Tuple of (sources, content items).

        Raises:
            FeedFetchError: If either fetch fails. When both fail, the
                sources error is reported.
        """
        sources_future: Future[list[Source]] = self._executor.submit(
            self._fetcher.fetch_sources
        )
        content_future: Future[list[ContentItem]] = self._executor.submit(
            self._fetcher.fetch_content
        )
        wait([sources_future, content_future])

        for name, future in (("sources", sources_future), ("content", content_future)):
            error = future.exception()
            if error is not None:
                self._log.warning("fetch_failed", fetch=name, error=str(error))
                raise error

        sources = sources_future.result()
        items = content_future.result()
        self._metrics.record_fetch(len(sources), len(items))
        return sources, items

    def _apply_overrides(
        self,
        sources: list[Source],
        overrides: dict[str, bool],
    ) -> list[Source]:
        """Apply persisted enabled flags to fetched sources.

        Args:
            sources: Fetched sources.
            overrides: Persisted enabled flag per publisher id.

        Returns:
            Sources with overrides applied, in fetched order.
        """
        merged = [
            source.with_enabled(overrides[source.id])
            if source.id in overrides
            else source
            for source in sources
        ]
        self._log.debug(
            "overrides_applied",
            overrides=len(overrides),
            disabled=sum(1 for s in merged if not s.enabled),
        )
        return merged

    def _generate(
        self,
        sources: list[Source],
        items: list[ContentItem],
        recent_domains: list[str],
        now: datetime,
    ) -> list[Card]:
        """Score, sort, and sequence items into cards.

        Runs on the worker pool against copies of session data.
        """
        scorer = FeedScorer(
            recent_domains=recent_domains, now=now, session_id=self._session_id
        )
        scored = sorted(scorer.score_items(items, sources))
        sequencer = CardSequencer(
            rules=self._rules,
            session_id=self._session_id,
            metrics=self._sequencer_metrics,
        )
        return sequencer.generate(scored)

    def _persist_override(self, publisher_id: str, enabled: bool) -> None:
        try:
            self._overrides.set_enabled(publisher_id, enabled)
        except Exception as e:  # noqa: BLE001
            self._log.warning(
                "override_persist_failed",
                source_id=publisher_id,
                error=str(e),
            )

    def _fail(self, error: FeedFetchError, start: float) -> None:
        with self._lock:
            self._error = error
            self._state_machine.to_failure()
            self._metrics.loads_failed += 1
            self._metrics.last_load_duration_ms = (time.perf_counter() - start) * 1000
        self._log.warning("load_failed", **error.to_dict())
