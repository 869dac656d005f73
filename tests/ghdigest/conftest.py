"""Shared fixtures for gh-digest tests.  No network access is needed."""

from datetime import datetime, timedelta, timezone

import pytest

from ghdigest.engines.event_feed.models import (
    CommentData,
    IssueCommentPayload,
    IssueData,
    IssuesPayload,
    PullRequestData,
    PullRequestPayload,
    PullRequestReviewCommentPayload,
    PullRequestReviewPayload,
    RawEvent,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
CUTOFF = NOW - timedelta(weeks=1)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def cutoff():
    return CUTOFF


def _issue(number=1, title="An issue", author="octocat", **kw):
    return IssueData(
        number=number,
        title=title,
        html_url=kw.get("html_url", f"https://github.com/acme/widgets/issues/{number}"),
        author=author,
    )


def _pr(number=1, title="A pull request", author="octocat", **kw):
    return PullRequestData(
        number=number,
        title=title,
        html_url=kw.get("html_url", f"https://github.com/acme/widgets/pull/{number}"),
        author=author,
    )


@pytest.fixture
def make_event():
    """Factory for RawEvent objects.

    ``kind`` picks the payload: issue, comment, pr, review, review_comment,
    or none (an event type the digest ignores).
    """

    def _make(
        kind="issue",
        action="opened",
        *,
        number=1,
        title=None,
        author="octocat",
        comment_author="octocat",
        repo="acme/widgets",
        public=True,
        created_at=None,
        html_url=None,
        event_id="1",
    ):
        extra = {"html_url": html_url} if html_url is not None else {}
        if kind == "issue":
            payload = IssuesPayload(
                action, _issue(number, title or f"Issue {number}", author, **extra)
            )
            event_type = "IssuesEvent"
        elif kind == "comment":
            payload = IssueCommentPayload(
                action,
                _issue(number, title or f"Issue {number}", author, **extra),
                CommentData(author=comment_author),
            )
            event_type = "IssueCommentEvent"
        elif kind == "pr":
            payload = PullRequestPayload(action, _pr(number, title or f"PR {number}", author, **extra))
            event_type = "PullRequestEvent"
        elif kind == "review":
            payload = PullRequestReviewPayload(
                action, _pr(number, title or f"PR {number}", author, **extra)
            )
            event_type = "PullRequestReviewEvent"
        elif kind == "review_comment":
            payload = PullRequestReviewCommentPayload(
                action, _pr(number, title or f"PR {number}", author, **extra)
            )
            event_type = "PullRequestReviewCommentEvent"
        else:
            payload = None
            event_type = "WatchEvent"
        return RawEvent(
            id=event_id,
            type=event_type,
            public=public,
            created_at=created_at or NOW - timedelta(hours=1),
            repo_name=repo,
            repo_url=f"https://api.github.com/repos/{repo}",
            actor="octocat",
            payload=payload,
        )

    return _make
