"""Data models for the event feed.

These mirror the parts of GitHub's ``/users/{user}/events`` payloads the
digest needs.  API reference:
https://docs.github.com/en/rest/using-the-rest-api/github-event-types
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class IssueData:
    number: int
    title: str
    html_url: str
    author: str | None = None


@dataclass(frozen=True)
class PullRequestData:
    """Pull request as embedded in an event; url and title may be absent."""

    number: int
    title: str | None = None
    html_url: str | None = None
    author: str | None = None


@dataclass(frozen=True)
class CommentData:
    author: str | None = None


@dataclass(frozen=True)
class IssuesPayload:
    action: str
    issue: IssueData


@dataclass(frozen=True)
class IssueCommentPayload:
    action: str
    issue: IssueData
    comment: CommentData


@dataclass(frozen=True)
class PullRequestPayload:
    action: str
    pull_request: PullRequestData


@dataclass(frozen=True)
class PullRequestReviewPayload:
    action: str
    pull_request: PullRequestData


@dataclass(frozen=True)
class PullRequestReviewCommentPayload:
    action: str
    pull_request: PullRequestData


EventPayload = Union[
    IssuesPayload,
    IssueCommentPayload,
    PullRequestPayload,
    PullRequestReviewPayload,
    PullRequestReviewCommentPayload,
]


@dataclass(frozen=True)
class RawEvent:
    """A single activity event as returned by the GitHub events API.

    ``payload`` is ``None`` for event types the digest does not understand
    (pushes, stars, forks, ...) and for malformed payloads.
    """

    id: str
    type: str
    public: bool
    created_at: datetime
    repo_name: str
    repo_url: str
    actor: str | None = None
    payload: EventPayload | None = None


@dataclass(frozen=True)
class RepoMetadata:
    """Repository details resolved from the repo API locator."""

    full_name: str
    html_url: str | None = None
