"""CircleCI configuration rendering and commit."""

from __future__ import annotations

from dataclasses import dataclass
from string import Template

from heroku_pipeline.client import git_url
from heroku_pipeline.git import GitRepository
from heroku_pipeline.models import (
    CI_COMMIT_MESSAGE,
    CI_CONFIG_FILENAME,
    CI_PLUGINS,
    DEFAULT_MAIN_BRANCH,
    DEFAULT_TEST_COMMAND,
)

CI_TEMPLATE = Template(
    """\
machine:
  pre:
    - heroku plugins:install ${plugin_pipeline}
    - heroku plugins:install ${plugin_repo}
test:
  override:
    - ${test_command}
deployment:
  production:
    branch: ${branch}
    commands:
      - git push -f ${deploy_git_url} $$CIRCLE_SHA1:refs/heads/${branch}
      - heroku pipeline:promote --app ${deploy_app}
      - heroku pipeline:promote --app ${promote_app}
"""
)


@dataclass(frozen=True)
class CIConfig:
    """Values substituted into the CI template.

    ``deploy_app`` receives every green build on ``branch`` and is promoted
    first; ``promote_app`` is promoted second.
    """

    deploy_app: str
    promote_app: str
    branch: str = DEFAULT_MAIN_BRANCH
    test_command: str = DEFAULT_TEST_COMMAND

    def render(self) -> str:
        return CI_TEMPLATE.substitute(
            plugin_pipeline=CI_PLUGINS[0],
            plugin_repo=CI_PLUGINS[1],
            test_command=self.test_command,
            branch=self.branch,
            deploy_git_url=git_url(self.deploy_app),
            deploy_app=self.deploy_app,
            promote_app=self.promote_app,
        )


def write_ci_config(git: GitRepository, config: CIConfig, filename: str = CI_CONFIG_FILENAME) -> str:
    """Overwrite ``filename`` at the repository root, then stage and commit it.

    The commit is not pushed. Returns the path written.
    """
    path = git.path / filename
    path.write_text(config.render(), encoding="utf-8")
    git.add(filename)
    git.commit(CI_COMMIT_MESSAGE)
    return str(path)
