"""Digest engine — classify, aggregate and render a user's activity."""

from ghdigest.engines.digest.aggregator import Aggregation, KeyedMap, aggregate
from ghdigest.engines.digest.classifier import ClassifierOptions, classify, classify_all
from ghdigest.engines.digest.models import ClassifiedEvent, InteractionKind, RepoRef, Topic
from ghdigest.engines.digest.renderer import DigestLayout, render_digest
from ghdigest.engines.digest.runner import DigestRunner
from ghdigest.engines.digest.sanitizer import sanitize_title
from ghdigest.engines.digest.window import validate_window

__all__ = [
    "Aggregation",
    "ClassifiedEvent",
    "ClassifierOptions",
    "DigestLayout",
    "DigestRunner",
    "InteractionKind",
    "KeyedMap",
    "RepoRef",
    "Topic",
    "aggregate",
    "classify",
    "classify_all",
    "render_digest",
    "sanitize_title",
    "validate_window",
]
