"""CLI entry point for heroku-pipeline."""

from __future__ import annotations

import argparse
import sys

from heroku_pipeline.config import ConfigError, load_settings
from heroku_pipeline.logging_utils import setup_logging
from heroku_pipeline.provisioner import run_setup
from heroku_pipeline.runner import StepFailedError, StepRunner


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="heroku-pipeline",
        description="Bootstrap a dev -> stage -> prod Heroku pipeline with CircleCI promotion for a repository.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Creates <name>-dev, <name>-stage and <name>-prod apps (name taken from the
repository's origin remote), links them into a pipeline, commits a circle.yml
that deploys to dev and promotes through stage on merge, and pushes it.

Environment (or ~/.heroku-pipeline):
    HEROKU_API_TOKEN     - Heroku API token (required)
    HEROKU_APP_PREFIX    - Prefix for app names
    HEROKU_COLLABORATORS - Collaborators added to every app

Examples:
    heroku-pipeline setup ~/src/myapp
    HEROKU_APP_PREFIX=co- heroku-pipeline --strict-collaborators setup .
""",
    )
    parser.add_argument("--config", default=None, help="Config file (default: $HEROKU_PIPELINE_CONFIG or ~/.heroku-pipeline)")
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output step results as JSON lines (to stderr)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--strict-collaborators",
        action="store_true",
        default=None,
        help="Fail the environment step when adding a collaborator fails",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")
    setup = subparsers.add_parser("setup", help="Provision apps, pipeline and CI config for a repository")
    setup.add_argument("repository", nargs="?", default=".", help="Path to the application repository")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(config_path=args.config, strict_collaborators=args.strict_collaborators)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)
    runner = StepRunner(json_mode=args.json_output)

    try:
        names = run_setup(settings, args.repository, runner=runner)
    except ConfigError as e:
        logger.error(str(e))
        return 1
    except StepFailedError as e:
        logger.error(f"Aborting: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    logger.info(f"Done: pipeline {names.dev} -> {names.stage} -> {names.prod}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
