"""
heroku-pipeline: bootstrap a continuous-delivery pipeline for one application repository.

Creates dev, stage and prod Heroku apps named after the repository's origin remote,
links them into a promotion pipeline, and commits a CircleCI config that runs the
tests and promotes green builds from dev through stage on merge to the main branch.

Environment:
    HEROKU_API_TOKEN - Heroku API token (required)
    HEROKU_APP_PREFIX - Prefix for app names (optional)
"""

from heroku_pipeline.cli import main

__version__ = "0.1.0"
__all__ = ["main", "__version__"]
