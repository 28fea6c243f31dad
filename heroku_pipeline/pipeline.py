"""Promotion pipeline wiring between tier apps."""

from __future__ import annotations

from heroku_pipeline.runner import StepRunner


def link_command(upstream: str, downstream: str) -> list[str]:
    """Platform CLI command making ``downstream`` the stage after ``upstream``."""
    return ["heroku", "pipeline:add", "--app", upstream, downstream]


def link_apps(runner: StepRunner, upstream: str, downstream: str) -> None:
    """Link two already-provisioned apps. Neither app's existence is checked."""
    runner.run_command(f"Link {upstream} -> {downstream} in pipeline", link_command(upstream, downstream))
