"""Data models and constants for heroku-pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "https://api.heroku.com"
API_ACCEPT = "application/vnd.heroku+json; version=3"
GIT_URL_TEMPLATE = "https://git.heroku.com/{app}.git"

DEFAULT_CONFIG_FILE = "~/.heroku-pipeline"
DEFAULT_MAIN_BRANCH = "master"
DEFAULT_PROD_REMOTE = "heroku"
DEFAULT_TEST_COMMAND = "make test"
CI_CONFIG_FILENAME = "circle.yml"
CI_COMMIT_MESSAGE = "Add CircleCI pipeline configuration"

# Platform CLI plugins installed on the CI machine before the build
CI_PLUGINS = ("heroku-pipeline", "heroku-repo")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Tier(Enum):
    DEV = "dev"
    STAGE = "stage"
    PROD = "prod"


class StepStatus(Enum):
    OK = "ok"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppNames:
    """Per-tier platform app names derived from a single base name."""

    base: str

    def for_tier(self, tier: Tier) -> str:
        return f"{self.base}-{tier.value}"

    @property
    def dev(self) -> str:
        return self.for_tier(Tier.DEV)

    @property
    def stage(self) -> str:
        return self.for_tier(Tier.STAGE)

    @property
    def prod(self) -> str:
        return self.for_tier(Tier.PROD)


@dataclass
class StepResult:
    """Outcome of one step executed by the runner."""

    label: str
    command: str
    status: StepStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == StepStatus.OK

    def to_dict(self) -> dict:
        d = {
            "label": self.label,
            "command": self.command,
            "status": self.status.value,
        }
        if self.detail:
            d["detail"] = self.detail
        return d
