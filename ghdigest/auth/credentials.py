"""Credential providers — where the GitHub access token comes from."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from typing import Protocol

import structlog

log = structlog.get_logger("ghdigest.auth")

TOKEN_ENV_VARS = ("GITHUB_USER_ACCESS_TOKEN", "GITHUB_TOKEN", "GH_TOKEN")


class CredentialProvider(Protocol):
    def get_token(self) -> str | None: ...


class StaticTokenProvider:
    """A token given explicitly, e.g. on the command line."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token or None


class EnvTokenProvider:
    """First non-empty variable among *names*."""

    def __init__(self, names: Sequence[str] = TOKEN_ENV_VARS) -> None:
        self._names = tuple(names)

    def get_token(self) -> str | None:
        for name in self._names:
            token = os.environ.get(name, "").strip()
            if token:
                log.debug("auth.token_from_env", variable=name)
                return token
        return None


class GhCliTokenProvider:
    """Token stored by the GitHub CLI (``gh auth token``)."""

    def __init__(self, timeout: float = 5) -> None:
        self._timeout = timeout

    def get_token(self) -> str | None:
        try:
            result = subprocess.run(
                ["gh", "auth", "token"],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None
        if result.returncode == 0 and result.stdout.strip():
            log.debug("auth.token_from_gh_cli")
            return result.stdout.strip()
        return None


class ChainedCredentialProvider:
    """Ask each provider in turn; the first token found wins."""

    def __init__(self, providers: Sequence[CredentialProvider]) -> None:
        self._providers = list(providers)

    def get_token(self) -> str | None:
        for provider in self._providers:
            token = provider.get_token()
            if token:
                return token
        log.info("auth.anonymous", hint="no token found, using unauthenticated access")
        return None


def default_credential_provider(explicit_token: str | None = None) -> ChainedCredentialProvider:
    """Explicit token, then environment, then the gh CLI."""
    return ChainedCredentialProvider(
        [StaticTokenProvider(explicit_token), EnvTokenProvider(), GhCliTokenProvider()]
    )
