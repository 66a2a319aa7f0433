"""Logging for the assistant host, its tools and the remote API client."""

import logging
import os
import sys

from pydantic import BaseModel


class LogConfig(BaseModel):
    """Root logger settings; the level defaults to LOG_LEVEL."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: LogConfig | None = None) -> None:
    """Route all records to stdout and mute per-request transport chatter."""
    if config is None:
        config = LogConfig(level=os.getenv("LOG_LEVEL", "INFO"))

    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stdout,
        force=True,
    )

    # The client logs its own remote calls
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Module logger for tool and client code.

    Tool handlers prefix messages with the tool name, e.g. ``[dingtalk_ask]``.
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return logger
