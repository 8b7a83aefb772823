"""
Structured logging setup for the fleet operations platform.
"""

import logging
from typing import Optional

import structlog

from fleetops.core.config import get_config


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name (defaults to LOG_LEVEL from the environment)
        json_output: Render JSON lines instead of console output (defaults to LOG_JSON)
    """
    env = get_config().env
    level = (level or env.log_level).upper()
    if json_output is None:
        json_output = env.log_json

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
    )
