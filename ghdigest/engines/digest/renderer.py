"""Digest renderer — walk the aggregation and produce the text digest."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

import structlog

from ghdigest.engines.digest.aggregator import Aggregation
from ghdigest.engines.digest.models import InteractionKind, Topic, ordered_kinds
from ghdigest.engines.digest.sanitizer import sanitize_title
from ghdigest.engines.event_feed.models import RepoMetadata
from ghdigest.exceptions import MissingRepoURLError

log = structlog.get_logger("ghdigest.digest")

EN_SPACE = "\u2000"
TOPIC_SEPARATOR = ","


class DigestLayout(str, Enum):
    """LIST puts each repository on its own bullet line; INLINE uses one line."""

    LIST = "list"
    INLINE = "inline"


class RepoResolver(Protocol):
    async def resolve_repo(self, url: str) -> RepoMetadata: ...


def render_topic(topic: Topic, kinds: set[InteractionKind], *, sanitize: bool = True) -> str:
    """``🔨🕵️ [#12](url) (_title_)`` with kinds in priority order."""
    symbols = "".join(kind.symbol for kind in ordered_kinds(kinds))
    text = f"{symbols} [#{topic.number}]({topic.url})"
    title = topic.title or ""
    if sanitize:
        title = sanitize_title(title)
    if title.strip():
        text += f" (_{title}_)"
    return text


async def render_digest(
    aggregation: Aggregation,
    resolver: RepoResolver,
    *,
    layout: DigestLayout = DigestLayout.LIST,
    sanitize_titles: bool = True,
) -> str:
    """Render *aggregation* as text.

    Repositories come in name order and topics in number order.  Repo
    metadata is resolved one repository at a time, in that same order.

    Raises MissingRepoURLError if a repository has no HTML URL, and lets
    lookup failures from *resolver* propagate.
    """
    segments: list[str] = []
    for repo, topics in aggregation.repos():
        metadata = await resolver.resolve_repo(repo.url)
        if not metadata.html_url:
            raise MissingRepoURLError(repo.name)

        segment = f"*[{repo.name}]({metadata.html_url}):*"
        rendered = [
            EN_SPACE + render_topic(topic, kinds, sanitize=sanitize_titles)
            for topic, kinds in topics.items()
        ]
        segment += TOPIC_SEPARATOR.join(rendered)
        segments.append(segment)

    log.info("digest.rendered", repos=len(segments), layout=layout.value)
    if not segments:
        return ""
    if layout is DigestLayout.INLINE:
        return "; ".join(segments) + "\n"
    return "".join(f"- {segment}\n" for segment in segments)
