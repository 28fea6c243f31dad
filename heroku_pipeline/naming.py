"""Derive platform app names from the repository's origin remote."""

from __future__ import annotations

import re

from heroku_pipeline.config import ConfigError
from heroku_pipeline.git import GitError, GitRepository

ORIGIN = "origin"


def parse_remote_url(listing: str, name: str = ORIGIN) -> str:
    """Return the fetch URL of remote ``name`` from ``git remote -v`` output, or ''."""
    for line in listing.splitlines():
        parts = line.split()
        # <name> <url> (fetch)
        if len(parts) == 3 and parts[0] == name and parts[2] == "(fetch)":
            return parts[1]
    return ""


def base_name_from_url(url: str) -> str:
    """Final path segment of a remote URL without its ``.git`` suffix.

    Handles both URL (``https://host/org/app.git``) and scp-style
    (``git@host:org/app.git``) remotes.
    """
    segment = re.split(r"[/:]", url.strip().rstrip("/"))[-1]
    if segment.endswith(".git"):
        segment = segment[: -len(".git")]
    return segment


def resolve_app_name(git: GitRepository, prefix: str = "") -> str:
    """Resolve ``{prefix}{repo name}`` for the repository behind ``git``.

    Raises ConfigError when there is no origin remote or it yields no name.
    """
    try:
        listing = git.list_remotes()
    except GitError as e:
        raise ConfigError(f"Could not read git remotes in {git.path}: {e}") from e

    url = parse_remote_url(listing)
    if not url:
        raise ConfigError(f"No '{ORIGIN}' fetch remote configured in {git.path}.")

    base = base_name_from_url(url)
    if not base:
        raise ConfigError(f"Could not derive an app name from remote URL '{url}'.")
    return f"{prefix}{base}"
