"""Configuration loading for heroku-pipeline.

Settings come from an optional per-user file of shell-style ``KEY=value``
lines (default ``~/.heroku-pipeline``) and from the process environment.
Environment values win over the file.

Keys:
    HEROKU_API_TOKEN            - Platform API token (required)
    HEROKU_APP_PREFIX           - Prefix prepended to every app name
    HEROKU_COLLABORATORS        - Collaborators, comma or whitespace separated
    HEROKU_API_URL              - Platform API base URL
    HEROKU_STRICT_COLLABORATORS - Fail the step when a collaborator add fails
    HEROKU_PROD_REMOTE          - Local git remote alias for the prod app
    HEROKU_MAIN_BRANCH          - Branch pushed to each app and deployed by CI
    CI_TEST_COMMAND             - Test command written into the CI config
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from heroku_pipeline.models import (
    DEFAULT_API_URL,
    DEFAULT_CONFIG_FILE,
    DEFAULT_MAIN_BRANCH,
    DEFAULT_PROD_REMOTE,
    DEFAULT_TEST_COMMAND,
    Tier,
)

CONFIG_PATH_ENV = "HEROKU_PIPELINE_CONFIG"
TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when configuration is missing or unusable."""


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at entry and passed explicitly."""

    api_token: str
    app_prefix: str = ""
    collaborators: tuple[str, ...] = ()
    api_url: str = DEFAULT_API_URL
    strict_collaborators: bool = False
    prod_remote: str = DEFAULT_PROD_REMOTE
    main_branch: str = DEFAULT_MAIN_BRANCH
    test_command: str = DEFAULT_TEST_COMMAND

    def remote_for(self, tier: Tier) -> str:
        """Local git remote alias for a tier."""
        if tier == Tier.PROD:
            return self.prod_remote
        return tier.value


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    return Path(environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE).expanduser()


def parse_collaborators(raw: str | None) -> tuple[str, ...]:
    """Split a collaborator list on commas and/or whitespace, keeping order.

    Shell quoting is honoured, so a sourced array such as
    ``("a@x.io" "b@x.io")`` yields the bare identifiers.
    """
    if not raw:
        return ()
    lexer = shlex.shlex(raw.strip().strip("()"), posix=True)
    lexer.whitespace += ","
    lexer.whitespace_split = True
    try:
        return tuple(part for part in lexer if part)
    except ValueError as e:
        raise ConfigError(f"Could not parse HEROKU_COLLABORATORS {raw!r}: {e}") from e


def read_config_file(path: Path) -> dict[str, str]:
    """Read shell-style variables from ``path``; a missing file yields nothing."""
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_path: Path | str | None = None,
    strict_collaborators: bool | None = None,
) -> Settings:
    """Merge the config file and the environment into a Settings instance.

    Raises ConfigError if the API token is absent.
    """
    environ = os.environ if environ is None else environ
    path = Path(config_path).expanduser() if config_path else default_config_path(environ)

    values = read_config_file(path)
    values.update({k: v for k, v in environ.items() if v != ""})

    token = values.get("HEROKU_API_TOKEN", "").strip()
    if not token:
        raise ConfigError(f"HEROKU_API_TOKEN is not set (environment or {path}).")

    if strict_collaborators is None:
        strict_collaborators = values.get("HEROKU_STRICT_COLLABORATORS", "").strip().lower() in TRUTHY

    return Settings(
        api_token=token,
        app_prefix=values.get("HEROKU_APP_PREFIX", ""),
        collaborators=parse_collaborators(values.get("HEROKU_COLLABORATORS")),
        api_url=values.get("HEROKU_API_URL", DEFAULT_API_URL),
        strict_collaborators=strict_collaborators,
        prod_remote=values.get("HEROKU_PROD_REMOTE", DEFAULT_PROD_REMOTE),
        main_branch=values.get("HEROKU_MAIN_BRANCH", DEFAULT_MAIN_BRANCH),
        test_command=values.get("CI_TEST_COMMAND", DEFAULT_TEST_COMMAND),
    )
