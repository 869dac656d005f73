"""Window check — make sure the fetched page reaches back to the cutoff."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

import structlog

from ghdigest.engines.event_feed.models import RawEvent
from ghdigest.exceptions import WindowTooNarrowError

log = structlog.get_logger("ghdigest.digest")


def validate_window(
    events: Sequence[RawEvent],
    cutoff: datetime,
    *,
    n_events: int,
    window: timedelta,
) -> None:
    """Raise :class:`WindowTooNarrowError` unless some event predates *cutoff*.

    If every fetched event is newer than the cutoff, the page most likely
    stopped short of the window and the digest would be silently
    truncated.  An empty page fails for the same reason.
    """
    if any(event.created_at < cutoff for event in events):
        return
    log.error(
        "digest.window_too_narrow",
        n_events=n_events,
        fetched=len(events),
        cutoff=cutoff.isoformat(),
    )
    raise WindowTooNarrowError(n_events, window)
