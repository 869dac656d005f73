"""Run configuration — .env loading and the settings for one digest run."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from ghdigest.engines.digest.classifier import ClassifierOptions
from ghdigest.engines.digest.renderer import DigestLayout

DEFAULT_EVENT_CUTOFF = timedelta(weeks=1)
DEFAULT_N_EVENTS = 1000


def load_env(path: str | Path | None = None) -> bool:
    """Load a ``.env`` file, overriding variables already in the environment.

    Without *path*, python-dotenv searches upward from the working directory.
    Returns True if a file was found and set at least one variable.
    """
    dotenv_path = path or find_dotenv(usecwd=True)
    if not dotenv_path:
        return False
    return load_dotenv(dotenv_path, override=True)


def parse_org_list(value: str | None) -> frozenset[str] | None:
    """``"acme, other,,x"`` → ``{"acme", "other", "x"}``; blank → None."""
    if value is None:
        return None
    orgs = frozenset(part.strip().rstrip("/") for part in value.split(",") if part.strip())
    return orgs or None


@dataclass
class DigestSettings:
    """Everything a digest run needs besides the network."""

    username: str
    event_cutoff: timedelta = DEFAULT_EVENT_CUTOFF
    n_events: int = DEFAULT_N_EVENTS
    include_orgs: frozenset[str] | None = None
    exclude_orgs: frozenset[str] | None = None
    track_assist: bool = True
    sanitize_titles: bool = True
    distinguish_self_edits: bool = True
    layout: DigestLayout = DigestLayout.LIST
    token: str | None = None

    def __post_init__(self) -> None:
        if not self.username:
            raise ValueError("username is required")
        if self.n_events < 1:
            raise ValueError(f"n_events must be positive, got {self.n_events}")
        if self.event_cutoff <= timedelta(0):
            raise ValueError("event_cutoff must be positive")

    def classifier_options(self) -> ClassifierOptions:
        return ClassifierOptions(
            include_orgs=self.include_orgs,
            exclude_orgs=self.exclude_orgs,
            track_assist=self.track_assist,
            sanitize_titles=self.sanitize_titles,
            distinguish_self_edits=self.distinguish_self_edits,
        )
