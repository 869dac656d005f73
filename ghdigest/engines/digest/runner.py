"""DigestRunner — fetch → window check → classify → aggregate → render."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from ghdigest.engines.digest.aggregator import aggregate
from ghdigest.engines.digest.classifier import classify_all
from ghdigest.engines.digest.renderer import render_digest
from ghdigest.engines.digest.window import validate_window
from ghdigest.engines.event_feed.feed import EventFeed

if TYPE_CHECKING:
    from ghdigest.core.config import DigestSettings

log = structlog.get_logger("ghdigest.digest")


class DigestRunner:
    """Runs one digest end to end against an :class:`EventFeed`.

    Every step is sequential; any fatal error aborts the run and no
    partial digest is produced.
    """

    def __init__(self, feed: EventFeed) -> None:
        self._feed = feed

    async def run(self, settings: DigestSettings, *, now: datetime | None = None) -> str:
        """Return the rendered digest for *settings*.

        1. Fetch up to ``n_events`` events for the user
        2. Check the page reaches back past the cutoff
        3. Classify and fold the events
        4. Render, resolving repo metadata in repo-name order
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - settings.event_cutoff
        structlog.contextvars.bind_contextvars(username=settings.username)
        try:
            events = await self._feed.fetch_events(settings.username, settings.n_events)
            validate_window(
                events, cutoff, n_events=settings.n_events, window=settings.event_cutoff
            )

            options = settings.classifier_options()
            aggregation = aggregate(
                classify_all(events, username=settings.username, cutoff=cutoff, options=options)
            )
            log.info("digest.aggregated", events=len(events), repos=len(aggregation))

            return await render_digest(
                aggregation,
                self._feed,
                layout=settings.layout,
                sanitize_titles=options.sanitize_titles,
            )
        finally:
            structlog.contextvars.unbind_contextvars("username")
