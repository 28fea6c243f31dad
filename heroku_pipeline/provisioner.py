"""Environment provisioning and the end-to-end setup workflow."""

from __future__ import annotations

import logging

import requests

from heroku_pipeline.ci_config import CIConfig, write_ci_config
from heroku_pipeline.client import PlatformClient, git_url
from heroku_pipeline.config import Settings
from heroku_pipeline.git import GitRepository
from heroku_pipeline.logging_utils import LOGGER_NAME
from heroku_pipeline.models import AppNames, Tier
from heroku_pipeline.naming import ORIGIN, resolve_app_name
from heroku_pipeline.pipeline import link_apps
from heroku_pipeline.runner import StepRunner


class Provisioner:
    """Creates the dev/stage/prod apps and wires them into a pipeline."""

    def __init__(self, settings: Settings, client: PlatformClient, git: GitRepository, runner: StepRunner):
        self.settings = settings
        self.client = client
        self.git = git
        self.runner = runner
        self.logger = logging.getLogger(LOGGER_NAME)

    def create_environment(self, app: str, remote: str) -> None:
        """Create ``app``, point local ``remote`` at it, add collaborators, push.

        Nothing is rolled back when a later part fails.
        """
        self.client.create_app(app)
        self.git.add_remote(remote, git_url(app))
        self.add_collaborators(app)
        self.git.push(remote, self.settings.main_branch)

    def add_collaborators(self, app: str) -> list[str]:
        """Add every configured collaborator to ``app`` in order.

        In lenient mode a failed add (error response or transport failure) is
        logged and skipped; in strict mode the exception propagates. Returns
        the collaborators that failed.
        """
        failed = []
        for user in self.settings.collaborators:
            try:
                self.client.add_collaborator(app, user)
            except requests.RequestException as e:
                if self.settings.strict_collaborators:
                    raise
                self.logger.warning(f"Could not add collaborator {user} to {app}: {e}")
                failed.append(user)
        return failed

    def setup(self) -> AppNames:
        """Run the full bootstrap. Raises ConfigError before any mutation, StepFailedError on a failed step."""
        names = AppNames(resolve_app_name(self.git, self.settings.app_prefix))
        self.logger.info(f"Bootstrapping pipeline for '{names.base}' in {self.git.path}")

        for tier in Tier:
            app = names.for_tier(tier)
            self.runner.run(
                f"Create {tier.value} environment {app}",
                self.create_environment,
                app,
                self.settings.remote_for(tier),
            )

        link_apps(self.runner, names.dev, names.stage)
        link_apps(self.runner, names.stage, names.prod)

        ci = CIConfig(
            deploy_app=names.dev,
            promote_app=names.stage,
            branch=self.settings.main_branch,
            test_command=self.settings.test_command,
        )
        self.runner.run("Write CI configuration", write_ci_config, self.git, ci)
        self.runner.run(
            f"Push {self.settings.main_branch} to {ORIGIN}", self.git.push, ORIGIN, self.settings.main_branch
        )
        return names


def run_setup(
    settings: Settings,
    repo_path: str = ".",
    client: PlatformClient | None = None,
    git: GitRepository | None = None,
    runner: StepRunner | None = None,
) -> AppNames:
    """Build the collaborators for ``repo_path`` and run the setup workflow."""
    client = client or PlatformClient(settings.api_token, base_url=settings.api_url)
    git = git or GitRepository(repo_path)
    runner = runner or StepRunner()
    return Provisioner(settings, client, git, runner).setup()
