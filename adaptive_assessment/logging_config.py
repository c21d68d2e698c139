"""Logging setup for the quiz entrypoints.

``setup_logging()`` is called once by ``main`` and by the simulation
script.  Engine modules only ever do ``logging.getLogger(__name__)``
and inherit whatever the host configured, so embedding hosts are free
to configure logging their own way.

Env vars:
    LOG_LEVEL   DEBUG | INFO | WARNING | ...   (default INFO)
    LOG_FORMAT  text | json                    (default text)
"""

from __future__ import annotations

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

TEXT_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class JsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per line with short ``time/level/logger`` keys."""

    def __init__(self) -> None:
        super().__init__(
            JSON_FIELDS,
            datefmt=DATE_FORMAT,
            rename_fields={"asctime": "time", "levelname": "level", "name": "logger"},
        )


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger.

    ``level`` overrides ``LOG_LEVEL``; unknown level names fall back to INFO.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = os.getenv("LOG_FORMAT", "text").lower()

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[handler],
        force=True,
    )

    # langgraph logs every checkpoint write at DEBUG
    logging.getLogger("langgraph").setLevel(logging.WARNING)
    logging.getLogger("langchain_core").setLevel(logging.WARNING)
