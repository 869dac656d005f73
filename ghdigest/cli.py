"""CLI entry point: gh-digest.

    gh-digest --username octocat
    gh-digest --username octocat --event-cutoff "2 weeks" --n-events 300
    gh-digest --username octocat --include-orgs acme,widgets --exclude-orgs acme-archive

The digest is the only thing written to stdout; logs and errors go to stderr.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import timedelta

import click

from ghdigest import __version__
from ghdigest.auth.credentials import default_credential_provider
from ghdigest.core.config import (
    DEFAULT_N_EVENTS,
    DigestSettings,
    load_env,
    parse_org_list,
)
from ghdigest.core.duration import parse_duration
from ghdigest.core.logging import setup_logging
from ghdigest.engines.digest.renderer import DigestLayout
from ghdigest.engines.digest.runner import DigestRunner
from ghdigest.engines.event_feed.feed import EventFeed
from ghdigest.engines.event_feed.github_client import GitHubClient
from ghdigest.exceptions import DigestError


def _duration_option(
    _ctx: click.Context, _param: click.Parameter, value: str | timedelta
) -> timedelta:
    if isinstance(value, timedelta):
        return value
    try:
        return parse_duration(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _orgs_option(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> frozenset[str] | None:
    # Accept both "--include-orgs a,b" and "--include-orgs a --include-orgs b".
    if not value:
        return None
    return parse_org_list(",".join(value))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--username", required=True, envvar="GHDIGEST_USERNAME", help="GitHub username")
@click.option(
    "--event-cutoff",
    default="1 week",
    show_default=True,
    envvar="GHDIGEST_EVENT_CUTOFF",
    callback=_duration_option,
    help="Only include events newer than this (e.g. '3d', '2 weeks')",
)
@click.option(
    "--n-events",
    type=click.IntRange(min=1),
    default=DEFAULT_N_EVENTS,
    show_default=True,
    envvar="GHDIGEST_N_EVENTS",
    help="Number of events to fetch",
)
@click.option(
    "--include-orgs",
    multiple=True,
    callback=_orgs_option,
    help="Only include these organizations (comma-separated; default: all)",
)
@click.option(
    "--exclude-orgs",
    multiple=True,
    callback=_orgs_option,
    help="Exclude these organizations (comma-separated; default: none)",
)
@click.option(
    "--user-access-token",
    default=None,
    envvar="GITHUB_USER_ACCESS_TOKEN",
    help="GitHub access token (default: GITHUB_TOKEN, GH_TOKEN or the gh CLI)",
)
@click.option(
    "--layout",
    type=click.Choice([layout.value for layout in DigestLayout]),
    default=DigestLayout.LIST.value,
    show_default=True,
    help="One line per repository (list) or a single line (inline)",
)
@click.option("--no-assist", is_flag=True, help="Drop assist events; count opened issues as comments")
@click.option("--raw-titles", is_flag=True, help="Do not sanitize topic titles")
@click.option(
    "--no-self-edit-distinction",
    is_flag=True,
    help="Count every edit as a comment, whoever authored the edited item",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging (stderr)")
@click.version_option(__version__, prog_name="gh-digest")
def digest(
    username: str,
    event_cutoff: timedelta,
    n_events: int,
    include_orgs: frozenset[str] | None,
    exclude_orgs: frozenset[str] | None,
    user_access_token: str | None,
    layout: str,
    no_assist: bool,
    raw_titles: bool,
    no_self_edit_distinction: bool,
    verbose: bool,
) -> None:
    """Print a digest of USERNAME's recent public GitHub activity."""
    setup_logging("DEBUG" if verbose else None)

    settings = DigestSettings(
        username=username,
        event_cutoff=event_cutoff,
        n_events=n_events,
        include_orgs=include_orgs,
        exclude_orgs=exclude_orgs,
        track_assist=not no_assist,
        sanitize_titles=not raw_titles,
        distinguish_self_edits=not no_self_edit_distinction,
        layout=DigestLayout(layout),
        token=user_access_token,
    )

    try:
        output = asyncio.run(_run(settings))
    except DigestError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(output, nl=False)


async def _run(settings: DigestSettings) -> str:
    token = default_credential_provider(settings.token).get_token()
    async with GitHubClient(token) as client:
        return await DigestRunner(EventFeed(client)).run(settings)


def main() -> None:
    """Console-script entry: load ``.env`` first so it can feed the options."""
    load_env()
    digest()


if __name__ == "__main__":
    main()
