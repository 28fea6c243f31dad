"""Local git repository access through the ``git`` executable."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from heroku_pipeline.logging_utils import LOGGER_NAME


class GitError(RuntimeError):
    """A git invocation exited non-zero."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"'{' '.join(command)}' exited with status {returncode}{detail}")


class GitRepository:
    """Version-control port for the repository being bootstrapped."""

    def __init__(self, path: Path | str = "."):
        self.path = Path(path)
        self.logger = logging.getLogger(LOGGER_NAME)

    def __repr__(self) -> str:
        return f"GitRepository('{self.path}')"

    def _git(self, *args: str, capture: bool = True) -> str:
        """Run git in the repository. With ``capture=False`` output goes to the terminal."""
        cmd = ["git", *args]
        self.logger.debug(f"{' '.join(cmd)} (cwd={self.path})")
        result = subprocess.run(cmd, cwd=self.path, capture_output=capture, text=True)
        if result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr or "")
        return result.stdout or ""

    def list_remotes(self) -> str:
        """Raw ``git remote -v`` listing."""
        return self._git("remote", "-v")

    def add_remote(self, name: str, url: str) -> None:
        self._git("remote", "add", name, url)

    def push(self, remote: str, branch: str) -> None:
        # Pushes can take a while; let git report progress directly
        self._git("push", remote, branch, capture=False)

    def add(self, *paths: str) -> None:
        self._git("add", *paths)

    def commit(self, message: str) -> None:
        self._git("commit", "-m", message)
