"""Shared test fixtures for heroku-pipeline tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from heroku_pipeline.client import PlatformClient
from heroku_pipeline.config import Settings
from heroku_pipeline.git import GitError
from heroku_pipeline.runner import StepRunner

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_API_URL = "https://api.heroku.example.com"
ORIGIN_LISTING = (
    "origin\tgit@github.com:org/myapp.git (fetch)\n"
    "origin\tgit@github.com:org/myapp.git (push)\n"
)


class FakeGit:
    """In-memory stand-in for GitRepository that records every call."""

    def __init__(self, path, listing=ORIGIN_LISTING, fail_on=()):
        self.path = Path(path)
        self.listing = listing
        self.fail_on = set(fail_on)
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise GitError(["git", name, *args], 1, f"fatal: {name} failed")

    def list_remotes(self):
        self._call("list_remotes")
        return self.listing

    def add_remote(self, name, url):
        self._call("add_remote", name, url)

    def push(self, remote, branch):
        self._call("push", remote, branch)

    def add(self, *paths):
        self._call("add", *paths)

    def commit(self, message):
        self._call("commit", message)


class FakeExecutor:
    """Command executor returning canned exit codes, recording argv."""

    def __init__(self, returncodes=None):
        self.returncodes = returncodes or {}
        self.commands = []

    def __call__(self, argv):
        self.commands.append(list(argv))
        return self.returncodes.get(tuple(argv), 0)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by main() so they do not outlive the captured streams."""
    yield
    logging.getLogger("heroku-pipeline").handlers.clear()


@pytest.fixture
def settings():
    return Settings(api_token="test-token", api_url=MOCK_API_URL)


@pytest.fixture
def mock_client():
    """PlatformClient pointing at mock server."""
    return PlatformClient("test-token", base_url=MOCK_API_URL)


@pytest.fixture
def fake_git(tmp_path):
    return FakeGit(tmp_path)


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def runner(executor):
    return StepRunner(execute=executor)
