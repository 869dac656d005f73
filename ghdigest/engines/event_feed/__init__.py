"""Event feed engine — GitHub activity events and repo metadata lookup."""

from ghdigest.engines.event_feed.feed import EventFeed, parse_event
from ghdigest.engines.event_feed.github_client import GitHubClient, RateLimitError
from ghdigest.engines.event_feed.models import RawEvent, RepoMetadata

__all__ = [
    "EventFeed",
    "GitHubClient",
    "RateLimitError",
    "RawEvent",
    "RepoMetadata",
    "parse_event",
]
