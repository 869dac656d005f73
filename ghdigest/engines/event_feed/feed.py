"""Event feed — fetch a user's public events and resolve repo metadata."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

import httpx
import structlog

from ghdigest.engines.event_feed.github_client import GitHubClient, RateLimitError
from ghdigest.engines.event_feed.models import (
    CommentData,
    EventPayload,
    IssueCommentPayload,
    IssueData,
    IssuesPayload,
    PullRequestData,
    PullRequestPayload,
    PullRequestReviewCommentPayload,
    PullRequestReviewPayload,
    RawEvent,
    RepoMetadata,
)
from ghdigest.exceptions import FeedError

log = structlog.get_logger("ghdigest.feed")

# GitHub serves at most 100 events per page.
_MAX_PER_PAGE = 100


class EventFeed:
    """Reads activity events and repository metadata through a GitHubClient."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    async def fetch_events(self, username: str, n_events: int) -> list[RawEvent]:
        """GET /users/{username}/events — up to *n_events* newest first.

        The events API caps history at 300 events, so fewer than
        *n_events* may come back.
        """
        if n_events < 1:
            raise ValueError(f"n_events must be positive, got {n_events}")

        per_page = min(n_events, _MAX_PER_PAGE)
        max_pages = math.ceil(n_events / per_page)
        events: list[RawEvent] = []
        seen = 0
        try:
            async for item in self._client.get_paginated(
                f"/users/{username}/events", {"per_page": per_page}, max_pages=max_pages
            ):
                seen += 1
                event = parse_event(item)
                if event is not None:
                    events.append(event)
                if seen >= n_events:
                    break
        except (httpx.HTTPError, RateLimitError) as exc:
            raise FeedError(f"list events for {username}", exc) from exc

        log.info("feed.fetched", username=username, requested=n_events, fetched=len(events))
        return events

    async def resolve_repo(self, url: str) -> RepoMetadata:
        """GET the repository API *url* carried by an event."""
        try:
            data = await self._client.get(url)
        except (httpx.HTTPError, RateLimitError) as exc:
            raise FeedError(f"get repo: {url}", exc) from exc
        return RepoMetadata(full_name=data.get("full_name", ""), html_url=data.get("html_url"))


# ── parsing ───────────────────────────────────────────────────────────────


def parse_event(item: dict[str, Any]) -> RawEvent | None:
    """Convert one events-API JSON object into a :class:`RawEvent`.

    Returns ``None`` when the event has no usable creation time or repo.
    Unknown event types keep ``payload=None``.
    """
    created_at = _parse_datetime(item.get("created_at"))
    repo = item.get("repo") or {}
    if created_at is None or not repo.get("name"):
        log.debug("feed.event_dropped", event_id=item.get("id"), reason="missing created_at/repo")
        return None

    event_type = item.get("type") or ""
    actor = (item.get("actor") or {}).get("login")
    return RawEvent(
        id=str(item.get("id", "")),
        type=event_type,
        public=bool(item.get("public", False)),
        created_at=created_at,
        repo_name=repo["name"],
        repo_url=repo.get("url") or f"https://api.github.com/repos/{repo['name']}",
        actor=actor,
        payload=_parse_payload(event_type, item.get("payload") or {}),
    )


def _parse_payload(event_type: str, payload: dict[str, Any]) -> EventPayload | None:
    action = payload.get("action") or ""

    if event_type == "IssuesEvent":
        issue = _parse_issue(payload.get("issue"))
        return IssuesPayload(action, issue) if issue else None

    if event_type == "IssueCommentEvent":
        issue = _parse_issue(payload.get("issue"))
        if issue is None:
            return None
        comment = payload.get("comment") or {}
        return IssueCommentPayload(action, issue, CommentData(author=_login(comment.get("user"))))

    if event_type in _PR_PAYLOADS:
        pr = _parse_pull_request(payload.get("pull_request"))
        return _PR_PAYLOADS[event_type](action, pr) if pr else None

    return None


_PR_PAYLOADS: dict[str, type] = {
    "PullRequestEvent": PullRequestPayload,
    "PullRequestReviewEvent": PullRequestReviewPayload,
    "PullRequestReviewCommentEvent": PullRequestReviewCommentPayload,
}


def _parse_issue(data: dict[str, Any] | None) -> IssueData | None:
    if not data or data.get("number") is None:
        return None
    return IssueData(
        number=int(data["number"]),
        title=data.get("title") or "",
        html_url=data.get("html_url") or "",
        author=_login(data.get("user")),
    )


def _parse_pull_request(data: dict[str, Any] | None) -> PullRequestData | None:
    if not data or data.get("number") is None:
        return None
    return PullRequestData(
        number=int(data["number"]),
        title=data.get("title"),
        html_url=data.get("html_url"),
        author=_login(data.get("user")),
    )


def _login(user: dict[str, Any] | None) -> str | None:
    return (user or {}).get("login")


def _parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO-8601 datetime string, returning None on failure."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
