"""Aggregator — fold classified events into ``repo → topic → {kind}``."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Generic, TypeVar

from ghdigest.engines.digest.models import (
    ClassifiedEvent,
    InteractionKind,
    RepoRef,
    Topic,
    repo_key,
    topic_key,
)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")
V = TypeVar("V")


class KeyedMap(Generic[K, T, V]):
    """Map keyed by ``key(item)`` that iterates in key order.

    Two items with the same key are the same entry: the first item stored
    is kept and later ones with differing non-key fields are ignored, so
    the result does not depend on arrival order.
    """

    def __init__(self, key: Callable[[T], K], factory: Callable[[], V]) -> None:
        self._key = key
        self._factory = factory
        self._entries: dict[K, tuple[T, V]] = {}

    def setdefault(self, item: T) -> V:
        """Return the value for *item*'s key, creating the entry if absent."""
        k = self._key(item)
        entry = self._entries.get(k)
        if entry is None:
            entry = (item, self._factory())
            self._entries[k] = entry
        return entry[1]

    def item_for(self, item: T) -> T | None:
        """Return the stored (first-seen) item sharing *item*'s key."""
        entry = self._entries.get(self._key(item))
        return entry[0] if entry else None

    def items(self) -> Iterator[tuple[T, V]]:
        for k in sorted(self._entries):  # type: ignore[type-var]
            yield self._entries[k]

    def __contains__(self, item: object) -> bool:
        return self._key(item) in self._entries  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        for item, _ in self.items():
            yield item


TopicMap = KeyedMap[int, Topic, set[InteractionKind]]


def _new_topic_map() -> TopicMap:
    return KeyedMap(topic_key, set)


class Aggregation:
    """``RepoRef → (Topic → set[InteractionKind])`` for one digest run."""

    def __init__(self) -> None:
        self._repos: KeyedMap[str, RepoRef, TopicMap] = KeyedMap(repo_key, _new_topic_map)

    def add(self, event: ClassifiedEvent) -> None:
        self._repos.setdefault(event.repo).setdefault(event.topic).add(event.kind)

    def repos(self) -> Iterator[tuple[RepoRef, TopicMap]]:
        """Repositories by name, each with its topics (iterate ``.items()``)."""
        return self._repos.items()

    def kinds(self, repo: RepoRef, topic: Topic) -> set[InteractionKind]:
        """Kinds recorded for *topic* in *repo*; empty if never seen."""
        if repo not in self._repos:
            return set()
        topics = self._repos.setdefault(repo)
        if topic not in topics:
            return set()
        return set(topics.setdefault(topic))

    def __len__(self) -> int:
        return len(self._repos)

    def __bool__(self) -> bool:
        return len(self._repos) > 0


def aggregate(events: Iterable[ClassifiedEvent]) -> Aggregation:
    """Fold *events* into a fresh :class:`Aggregation`."""
    result = Aggregation()
    for event in events:
        result.add(event)
    return result
