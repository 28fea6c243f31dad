"""Step runner: announce, execute and check each setup step."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape

from heroku_pipeline.logging_utils import LOGGER_NAME
from heroku_pipeline.models import StepResult, StepStatus


class StepFailedError(Exception):
    """A step run through the StepRunner failed; the workflow must stop."""

    def __init__(self, result: StepResult):
        self.result = result
        super().__init__(f"{result.label} failed: {result.command}")


def run_subprocess(argv: Sequence[str]) -> int:
    """Default executor: run ``argv`` attached to the terminal and return its exit status."""
    return subprocess.run(list(argv)).returncode


def describe_call(func: Callable[..., Any], args: tuple, kwargs: dict) -> str:
    name = getattr(func, "__qualname__", None) or repr(func)
    params = [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
    return f"{name}({', '.join(params)})"


class StepRunner:
    """Runs labelled steps and halts the workflow on the first failure.

    A step is either a Python callable (``run``) or an external command
    (``run_command``). Only the step's own outcome is checked: a callable
    fails by raising, a command by exiting non-zero. Whatever a callable
    handles internally never reaches the runner.
    """

    def __init__(
        self,
        json_mode: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
        execute: Callable[[Sequence[str]], int] | None = None,
    ):
        self.json_mode = json_mode
        self.console = console or Console(soft_wrap=True, highlight=False)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True, highlight=False)
        self.execute = execute or run_subprocess
        self.logger = logging.getLogger(LOGGER_NAME)
        self.results: list[StepResult] = []

    def run(self, label: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``func(*args, **kwargs)`` as a step and return its value."""
        command = describe_call(func, args, kwargs)
        self._announce(label, command)
        try:
            value = func(*args, **kwargs)
        except Exception as e:
            self._fail(label, command, str(e), cause=e)
        self._record(StepResult(label=label, command=command, status=StepStatus.OK))
        return value

    def run_command(self, label: str, argv: Sequence[str]) -> None:
        """Run an external command as a step."""
        command = shlex.join(argv)
        self._announce(label, command)
        try:
            returncode = self.execute(argv)
        except OSError as e:
            self._fail(label, command, str(e), cause=e)
        if returncode != 0:
            self._fail(label, command, f"exit status {returncode}")
        self._record(StepResult(label=label, command=command, status=StepStatus.OK))

    def _announce(self, label: str, command: str) -> None:
        if self.json_mode:
            return
        self.console.print(f"[bold cyan]==> {escape(label)}[/bold cyan]")
        self.console.print(f"    [dim]$ {escape(command)}[/dim]")

    def _fail(self, label: str, command: str, detail: str, cause: BaseException | None = None) -> None:
        result = StepResult(label=label, command=command, status=StepStatus.FAILED, detail=detail)
        self._record(result)
        if not self.json_mode:
            self.err_console.print(f"[bold red]ERROR:[/bold red] command failed: {escape(command)}")
            if detail:
                self.err_console.print(f"[red]       {escape(detail)}[/red]")
        raise StepFailedError(result) from cause

    def _record(self, result: StepResult) -> StepResult:
        self.results.append(result)
        # Text mode already reported on the console; the log copy is debug-only there
        if self.json_mode:
            level = logging.INFO if result.ok else logging.ERROR
        else:
            level = logging.DEBUG
        if self.logger.isEnabledFor(level):
            record = self.logger.makeRecord(LOGGER_NAME, level, "", 0, result.label, (), None)
            record.step_result = result
            self.logger.handle(record)
        if not self.json_mode and result.ok:
            self.console.print("    [green]done[/green]")
        return result
