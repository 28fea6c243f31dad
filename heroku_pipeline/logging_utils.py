"""Logging utilities for heroku-pipeline."""

from __future__ import annotations

import json
import logging
import sys

LOGGER_NAME = "heroku-pipeline"


class StructuredFormatter(logging.Formatter):
    """Formats step results and plain messages as text lines or JSON lines.

    Records produced by the step runner carry a ``step_result`` attribute;
    those are rendered from the result rather than from the message.
    """

    def __init__(self, json_mode: bool = False):
        super().__init__()
        self.json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        result = getattr(record, "step_result", None)
        if self.json_mode:
            if result is not None:
                return json.dumps(result.to_dict())
            return json.dumps({"level": record.levelname, "message": record.getMessage()})
        if result is not None:
            detail = f" ({result.detail})" if result.detail else ""
            return f"[{record.levelname:<7}] {result.label}: {result.status.value}{detail} <- {result.command}"
        return f"[{record.levelname:<7}] {record.getMessage()}"


def setup_logging(json_mode: bool = False, verbose: bool = False) -> logging.Logger:
    """Route the heroku-pipeline logger to stderr; ``verbose`` enables DEBUG."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # main() may run more than once per process (tests); keep a single handler
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(json_mode=json_mode))
    logger.addHandler(handler)
    return logger
