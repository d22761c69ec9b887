"""
Logging setup for Job Match Scout.

Module code logs through ``logging.getLogger(__name__)``. Batch runs log
through ``get_logger(name, run_id, step)``, which tags every line with the
short run id and the workflow step:

    [run:3f9a1c0b] [analysis] [2/5] Acme: 3 jobs

``configure_logging()`` installs one stdout handler on the ``job_scout``
package logger from LOG_LEVEL, LOG_FORMAT and DEBUG_MODE.
"""

import json
import logging
import sys
from typing import Optional

from job_scout.common.config import Config

PACKAGE_LOGGER = "job_scout"


def short_run_id(run_id: str) -> str:
    """Last eight characters of the random part of a run id."""
    return run_id.rsplit("_", 1)[-1][:8]


class RunLogger(logging.LoggerAdapter):
    """Prefixes messages with ``[run:<id>]`` and ``[<step>]``."""

    def __init__(self, logger: logging.Logger, run_id: Optional[str] = None, step: Optional[str] = None):
        super().__init__(logger, {"run_id": run_id, "step": step})
        self.run_id = run_id
        self.step = step

    def process(self, msg, kwargs):
        prefix = []
        if self.run_id:
            prefix.append(f"[run:{short_run_id(self.run_id)}]")
        if self.step:
            prefix.append(f"[{self.step}]")
        if prefix:
            msg = f"{' '.join(prefix)} {msg}"
        kwargs.setdefault("extra", {}).update(self.extra)
        return msg, kwargs


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with run_id/step when the record has them."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key in ("run_id", "step"):
            value = getattr(record, key, None)
            if value:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Install a single stdout handler on the package logger.

    Args:
        level: Log level name (defaults to Config.LOG_LEVEL; DEBUG_MODE forces DEBUG)
        fmt: "simple" or "json" (defaults to Config.LOG_FORMAT)

    Returns:
        The configured package logger
    """
    level_name = "DEBUG" if Config.DEBUG_MODE else (level or Config.LOG_LEVEL)
    log_level = getattr(logging, level_name.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        if getattr(handler, "_scout_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._scout_handler = True
    if (fmt or Config.LOG_FORMAT) == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )

    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    return package_logger


def get_logger(name: str, run_id: Optional[str] = None, step: Optional[str] = None) -> RunLogger:
    """Logger for one run and step."""
    return RunLogger(logging.getLogger(name), run_id=run_id, step=step)
