"""Event classifier — reduce one raw event to ``(repo, topic, kind)`` or nothing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

import structlog

from ghdigest.engines.digest.models import ClassifiedEvent, InteractionKind, RepoRef, Topic
from ghdigest.engines.event_feed.models import (
    IssueCommentPayload,
    IssueData,
    IssuesPayload,
    PullRequestData,
    PullRequestPayload,
    PullRequestReviewCommentPayload,
    PullRequestReviewPayload,
    RawEvent,
)
from ghdigest.exceptions import MalformedTopicSourceError

log = structlog.get_logger("ghdigest.digest")

_EDITED = "edited"

# action → kind; "edited" is resolved separately (own vs. someone else's).
_ISSUE_ACTIONS: dict[str, InteractionKind] = {
    "opened": InteractionKind.WRITE,
    "closed": InteractionKind.ASSIST,
    "reopened": InteractionKind.ASSIST,
    "assigned": InteractionKind.ASSIST,
    "unassigned": InteractionKind.ASSIST,
    "labeled": InteractionKind.ASSIST,
    "unlabeled": InteractionKind.ASSIST,
}

_ISSUE_COMMENT_ACTIONS: dict[str, InteractionKind] = {
    "created": InteractionKind.COMMENT,
    "deleted": InteractionKind.ASSIST,
}

_PULL_REQUEST_ACTIONS: dict[str, InteractionKind] = {
    "opened": InteractionKind.CODE,
    "closed": InteractionKind.ASSIST,
    "reopened": InteractionKind.ASSIST,
    "assigned": InteractionKind.ASSIST,
    "unassigned": InteractionKind.ASSIST,
    "review_requested": InteractionKind.ASSIST,
    "review_request_removed": InteractionKind.ASSIST,
    "labeled": InteractionKind.ASSIST,
    "unlabeled": InteractionKind.ASSIST,
    "synchronize": InteractionKind.ASSIST,
    "synchronized": InteractionKind.ASSIST,
}


@dataclass(frozen=True)
class ClassifierOptions:
    """Independently toggleable classifier features.

    Attributes:
        include_orgs: only keep repos under these orgs; empty/None = all.
        exclude_orgs: drop repos under these orgs; wins over include_orgs.
        track_assist: when False, Assist events are dropped and Write
            collapses into Comment.
        sanitize_titles: strip unsafe characters from titles when rendering.
        distinguish_self_edits: when False, every edit counts as Comment.
    """

    include_orgs: frozenset[str] | None = None
    exclude_orgs: frozenset[str] | None = None
    track_assist: bool = True
    sanitize_titles: bool = True
    distinguish_self_edits: bool = True


def org_allowed(repo_name: str, options: ClassifierOptions) -> bool:
    """Apply the include/exclude org lists to an ``owner/repo`` name."""
    if options.exclude_orgs and _in_orgs(repo_name, options.exclude_orgs):
        return False
    if options.include_orgs:
        return _in_orgs(repo_name, options.include_orgs)
    return True


def _in_orgs(repo_name: str, orgs: Iterable[str]) -> bool:
    return any(repo_name.startswith(f"{org}/") for org in orgs)


def classify(
    event: RawEvent,
    *,
    username: str,
    cutoff: datetime,
    options: ClassifierOptions | None = None,
) -> ClassifiedEvent | None:
    """Classify *event* for the digest of *username*.

    Returns ``None`` for anything that should not appear in the digest:
    private events, filtered orgs, events older than *cutoff*, and payload
    kinds or actions we do not track.

    Raises MalformedTopicSourceError if a pull request lacks its URL or title.
    """
    options = options or ClassifierOptions()

    if not event.public:
        return _skip(event, "private")
    if not org_allowed(event.repo_name, options):
        return _skip(event, "org filtered")
    if event.created_at < cutoff:
        return _skip(event, "before cutoff")

    payload = event.payload
    if isinstance(payload, IssuesPayload):
        kind = _kind_for(
            payload.action, _ISSUE_ACTIONS, payload.issue.author, username, options
        )
        source: IssueData | PullRequestData = payload.issue
    elif isinstance(payload, IssueCommentPayload):
        kind = _kind_for(
            payload.action, _ISSUE_COMMENT_ACTIONS, payload.comment.author, username, options
        )
        source = payload.issue
    elif isinstance(payload, PullRequestPayload):
        kind = _kind_for(
            payload.action,
            _PULL_REQUEST_ACTIONS,
            payload.pull_request.author,
            username,
            options,
        )
        source = payload.pull_request
    elif isinstance(payload, (PullRequestReviewPayload, PullRequestReviewCommentPayload)):
        kind = InteractionKind.REVIEW
        source = payload.pull_request
    else:
        return _skip(event, f"unhandled event type {event.type}")

    if kind is None:
        return _skip(event, f"unhandled action {payload.action!r}")

    kind = _apply_granularity(kind, options)
    if kind is None:
        return _skip(event, "assist not tracked")

    if isinstance(source, IssueData):
        topic = topic_from_issue(source)
    else:
        topic = topic_from_pull_request(source)

    return ClassifiedEvent(
        repo=RepoRef(name=event.repo_name, url=event.repo_url),
        topic=topic,
        kind=kind,
    )


def classify_all(
    events: Iterable[RawEvent],
    *,
    username: str,
    cutoff: datetime,
    options: ClassifierOptions | None = None,
) -> Iterator[ClassifiedEvent]:
    """Yield the classification of every event that is not skipped."""
    for event in events:
        classified = classify(event, username=username, cutoff=cutoff, options=options)
        if classified is not None:
            yield classified


def topic_from_issue(issue: IssueData) -> Topic:
    return Topic(url=issue.html_url, number=issue.number, title=issue.title)


def topic_from_pull_request(pr: PullRequestData) -> Topic:
    """Build a Topic from a pull request; URL and title are mandatory."""
    if not pr.html_url:
        raise MalformedTopicSourceError(f"pull request #{pr.number}", "html_url")
    if pr.title is None:
        raise MalformedTopicSourceError(f"pull request #{pr.number}", "title")
    return Topic(url=pr.html_url, number=pr.number, title=pr.title)


# ── helpers ───────────────────────────────────────────────────────────────


def _kind_for(
    action: str,
    table: dict[str, InteractionKind],
    author: str | None,
    username: str,
    options: ClassifierOptions,
) -> InteractionKind | None:
    if action == _EDITED:
        if not options.distinguish_self_edits or _same_user(author, username):
            return InteractionKind.COMMENT
        return InteractionKind.ASSIST
    return table.get(action)


def _apply_granularity(
    kind: InteractionKind, options: ClassifierOptions
) -> InteractionKind | None:
    if options.track_assist:
        return kind
    if kind is InteractionKind.ASSIST:
        return None
    if kind is InteractionKind.WRITE:
        return InteractionKind.COMMENT
    return kind


def _same_user(author: str | None, username: str) -> bool:
    # GitHub logins are case-insensitive.
    return author is not None and author.casefold() == username.casefold()


def _skip(event: RawEvent, reason: str) -> None:
    log.debug("classifier.skipped", event_id=event.id, repo=event.repo_name, reason=reason)
    return None
