"""Tests for the event feed: JSON parsing, fetch limits, error wrapping."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from ghdigest.engines.event_feed.feed import EventFeed, parse_event
from ghdigest.engines.event_feed.github_client import GitHubClient, RateLimitError
from ghdigest.engines.event_feed.models import (
    IssueCommentPayload,
    IssuesPayload,
    PullRequestPayload,
    PullRequestReviewCommentPayload,
    PullRequestReviewPayload,
    RepoMetadata,
)
from ghdigest.exceptions import FeedError


def _item(event_type="IssuesEvent", payload=None, **overrides):
    item = {
        "id": "42",
        "type": event_type,
        "public": True,
        "created_at": "2026-03-14T09:30:00Z",
        "actor": {"login": "octocat"},
        "repo": {"name": "acme/widgets", "url": "https://api.github.com/repos/acme/widgets"},
        "payload": payload if payload is not None else {},
    }
    item.update(overrides)
    return item


_ISSUE = {
    "number": 7,
    "title": "Crash on start",
    "html_url": "https://github.com/acme/widgets/issues/7",
    "user": {"login": "someone"},
}
_PR = {
    "number": 12,
    "title": "Add widget",
    "html_url": "https://github.com/acme/widgets/pull/12",
    "user": {"login": "octocat"},
}


def _feed_with_items(items: list[dict]) -> tuple[EventFeed, MagicMock]:
    """EventFeed over a mocked client whose get_paginated yields *items*."""
    client = AsyncMock(spec=GitHubClient)
    calls = MagicMock()

    async def _paginated(*args, **kwargs):
        calls(*args, **kwargs)
        for item in items:
            yield item

    client.get_paginated = _paginated
    return EventFeed(client), calls


# ── parse_event ───────────────────────────────────────────────────────────


class TestParseEvent:
    def test_envelope_fields(self):
        event = parse_event(_item(payload={"action": "opened", "issue": _ISSUE}))
        assert event.id == "42"
        assert event.public is True
        assert event.created_at == datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)
        assert event.repo_name == "acme/widgets"
        assert event.repo_url == "https://api.github.com/repos/acme/widgets"
        assert event.actor == "octocat"

    def test_issues_event(self):
        event = parse_event(_item(payload={"action": "opened", "issue": _ISSUE}))
        assert isinstance(event.payload, IssuesPayload)
        assert event.payload.action == "opened"
        assert event.payload.issue.number == 7
        assert event.payload.issue.author == "someone"

    def test_issue_comment_event(self):
        payload = {"action": "created", "issue": _ISSUE, "comment": {"user": {"login": "octocat"}}}
        event = parse_event(_item("IssueCommentEvent", payload))
        assert isinstance(event.payload, IssueCommentPayload)
        assert event.payload.comment.author == "octocat"

    @pytest.mark.parametrize(
        "event_type, payload_cls",
        [
            ("PullRequestEvent", PullRequestPayload),
            ("PullRequestReviewEvent", PullRequestReviewPayload),
            ("PullRequestReviewCommentEvent", PullRequestReviewCommentPayload),
        ],
    )
    def test_pull_request_events(self, event_type, payload_cls):
        event = parse_event(_item(event_type, {"action": "opened", "pull_request": _PR}))
        assert isinstance(event.payload, payload_cls)
        assert event.payload.pull_request.title == "Add widget"

    def test_pull_request_missing_fields_kept_as_none(self):
        pr = {"number": 3}
        event = parse_event(_item("PullRequestEvent", {"action": "opened", "pull_request": pr}))
        assert event.payload.pull_request.html_url is None
        assert event.payload.pull_request.title is None

    def test_unknown_type_has_no_payload(self):
        event = parse_event(_item("WatchEvent", {"action": "started"}))
        assert event is not None
        assert event.payload is None

    def test_missing_nested_object_has_no_payload(self):
        assert parse_event(_item("IssuesEvent", {"action": "opened"})).payload is None
        assert parse_event(_item("PullRequestEvent", {"action": "opened"})).payload is None

    def test_private_flag_defaults_false(self):
        item = _item()
        del item["public"]
        assert parse_event(item).public is False

    def test_repo_url_fallback(self):
        event = parse_event(_item(repo={"name": "acme/widgets"}))
        assert event.repo_url == "https://api.github.com/repos/acme/widgets"

    @pytest.mark.parametrize(
        "overrides",
        [{"created_at": None}, {"created_at": "yesterday"}, {"repo": {}}, {"repo": None}],
    )
    def test_unusable_event_dropped(self, overrides):
        assert parse_event(_item(**overrides)) is None


# ── EventFeed.fetch_events ────────────────────────────────────────────────


class TestFetchEvents:
    @pytest.mark.anyio
    async def test_parses_items(self):
        feed, _ = _feed_with_items(
            [
                _item(payload={"action": "opened", "issue": _ISSUE}),
                _item("PushEvent", {}),
            ]
        )
        events = await feed.fetch_events("octocat", 10)
        assert len(events) == 2
        assert events[1].payload is None

    @pytest.mark.anyio
    async def test_stops_at_n_events(self):
        feed, _ = _feed_with_items([_item(id=str(i)) for i in range(10)])
        events = await feed.fetch_events("octocat", 4)
        assert [e.id for e in events] == ["0", "1", "2", "3"]

    @pytest.mark.anyio
    async def test_unusable_items_count_toward_limit(self):
        feed, _ = _feed_with_items([_item(created_at=None), _item(id="a"), _item(id="b")])
        events = await feed.fetch_events("octocat", 2)
        assert [e.id for e in events] == ["a"]

    @pytest.mark.anyio
    async def test_page_size_and_page_count(self):
        feed, calls = _feed_with_items([])
        await feed.fetch_events("octocat", 250)
        calls.assert_called_once_with("/users/octocat/events", {"per_page": 100}, max_pages=3)

    @pytest.mark.anyio
    async def test_small_request_uses_single_page(self):
        feed, calls = _feed_with_items([])
        await feed.fetch_events("octocat", 30)
        calls.assert_called_once_with("/users/octocat/events", {"per_page": 30}, max_pages=1)

    @pytest.mark.anyio
    async def test_rejects_non_positive_count(self):
        feed, _ = _feed_with_items([])
        with pytest.raises(ValueError):
            await feed.fetch_events("octocat", 0)

    @pytest.mark.anyio
    async def test_transport_error_wrapped(self):
        client = AsyncMock(spec=GitHubClient)

        async def _failing(*args, **kwargs):
            raise httpx.ConnectError("no route")
            yield  # pragma: no cover

        client.get_paginated = _failing
        with pytest.raises(FeedError) as exc_info:
            await EventFeed(client).fetch_events("octocat", 10)
        assert "list events for octocat" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


# ── EventFeed.resolve_repo ────────────────────────────────────────────────


class TestResolveRepo:
    @pytest.mark.anyio
    async def test_returns_metadata(self):
        client = AsyncMock(spec=GitHubClient)
        client.get.return_value = {
            "full_name": "acme/widgets",
            "html_url": "https://github.com/acme/widgets",
        }
        meta = await EventFeed(client).resolve_repo("https://api.github.com/repos/acme/widgets")
        assert meta == RepoMetadata("acme/widgets", "https://github.com/acme/widgets")
        client.get.assert_awaited_once_with("https://api.github.com/repos/acme/widgets")

    @pytest.mark.anyio
    async def test_missing_html_url_is_none(self):
        client = AsyncMock(spec=GitHubClient)
        client.get.return_value = {"full_name": "acme/widgets"}
        meta = await EventFeed(client).resolve_repo("https://api.github.com/repos/acme/widgets")
        assert meta.html_url is None

    @pytest.mark.anyio
    async def test_rate_limit_wrapped(self):
        client = AsyncMock(spec=GitHubClient)
        client.get.side_effect = RateLimitError(60)
        with pytest.raises(FeedError, match="get repo"):
            await EventFeed(client).resolve_repo("https://api.github.com/repos/acme/widgets")
