"""Custom exceptions for gh-digest.

Every condition that must abort a digest run derives from
:class:`DigestError`.  Skippable conditions (private events, unknown
payloads, filtered orgs) never raise.
"""

from __future__ import annotations

from datetime import timedelta

from ghdigest.core.duration import format_duration


class DigestError(Exception):
    """Base exception for all fatal digest errors."""


class WindowTooNarrowError(DigestError):
    """Raised when the fetched events do not reach back to the cutoff."""

    def __init__(self, n_events: int, window: timedelta):
        self.n_events = n_events
        self.window = window
        super().__init__(
            f"number of events ({n_events}) too low for given time period "
            f"({format_duration(window)}); try raising --n-events"
        )


class MalformedTopicSourceError(DigestError):
    """Raised when a pull request lacks a field required to render it."""

    def __init__(self, source: str, field: str):
        self.source = source
        self.field = field
        super().__init__(f"convert PR data: {field} missing ({source})")


MissingFieldError = MalformedTopicSourceError


class MissingRepoURLError(DigestError):
    """Raised when resolved repository metadata has no HTML URL."""

    def __init__(self, repo: str):
        self.repo = repo
        super().__init__(f"no html URL for repo: {repo}")


class FeedError(DigestError):
    """Raised when the event feed or repo lookup fails in transport."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {type(cause).__name__}: {cause}")
