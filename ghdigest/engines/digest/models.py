"""Data models for the digest engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InteractionKind(Enum):
    """How the user engaged with a topic.

    Declaration order is the rendering priority: CODE first, ASSIST last.
    """

    CODE = "code"  # opened a pull request
    WRITE = "write"  # opened an issue
    REVIEW = "review"  # reviewed a pull request
    COMMENT = "comment"  # commented, or edited own issue/PR/comment
    ASSIST = "assist"  # labeling, assigning, closing, editing others' items, ...

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_SYMBOLS: dict[InteractionKind, str] = {
    InteractionKind.CODE: "\N{HAMMER}",
    InteractionKind.WRITE: "\N{WRITING HAND}\N{VARIATION SELECTOR-16}",
    InteractionKind.REVIEW: "\N{SLEUTH OR SPY}\N{VARIATION SELECTOR-16}",
    InteractionKind.COMMENT: "\N{SPEECH BALLOON}",
    InteractionKind.ASSIST: "\N{GEAR}\N{VARIATION SELECTOR-16}",
}

_PRIORITY: dict[InteractionKind, int] = {kind: i for i, kind in enumerate(InteractionKind)}


def ordered_kinds(kinds: set[InteractionKind]) -> list[InteractionKind]:
    """Return *kinds* in rendering priority order."""
    return sorted(kinds, key=lambda kind: kind.priority)


@dataclass(frozen=True)
class RepoRef:
    """A repository touched by the user.

    Identity is the ``name`` (``owner/repo``); ``url`` is the API locator
    carried along for the metadata lookup.  See :func:`repo_key`.
    """

    name: str
    url: str


@dataclass(frozen=True)
class Topic:
    """An issue or pull request.  Identity is the ``number``; see :func:`topic_key`."""

    url: str
    number: int
    title: str | None = None


def repo_key(repo: RepoRef) -> str:
    return repo.name


def topic_key(topic: Topic) -> int:
    return topic.number


@dataclass(frozen=True)
class ClassifiedEvent:
    """One event reduced to ``(repo, topic, kind)``."""

    repo: RepoRef
    topic: Topic
    kind: InteractionKind
