"""
ColonyBot Logger - persistent file-based logging.

Every decision a worker makes is written to a rotating log file so a long
unattended run can be reviewed afterwards, tick by tick, without relying on
in-world status text.

Usage
-----
    from ColonyBot.logger import get_logger

    log = get_logger()
    log.info("Colony started")
    log.debug("Selector picked %s", target_id, tick=world.time)

    # Colony-specific helpers
    log.colony_event("SPAWN", "Gatherer_1000 body=[work, carry, move, move]", tick=1000)
    log.worker(worker, "Resource tapped - Finding different resource", tick=1000)

The log file lives at  logs/colony_<timestamp>.log  relative to the working
directory. Old log files are kept for up to LOG_BACKUP_COUNT runs.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ColonyBot.world.objects import Worker


# ── Configuration ────────────────────────────────────────────────────────────

LOG_DIR          = Path("logs")
LOG_LEVEL        = logging.DEBUG        # file handler
CONSOLE_LEVEL    = logging.INFO         # console handler
LOG_BACKUP_COUNT = 10
MAX_BYTES        = 5 * 1024 * 1024


# ── Custom log levels ─────────────────────────────────────────────────────────

COLONY_LEVEL = 25   # between INFO (20) and WARNING (30)
WORKER_LEVEL = 15   # between DEBUG (10) and INFO (20)

logging.addLevelName(COLONY_LEVEL, "COLONY")
logging.addLevelName(WORKER_LEVEL, "WORKER")


# ── Custom formatter ──────────────────────────────────────────────────────────

class ColonyFormatter(logging.Formatter):
    """
    Adds a [tick] column when a 'tick' extra field is present.

    Example output:
        2026-10-18 21:14:03.412 | INFO    |       - | Colony started
        2026-10-18 21:14:05.001 | COLONY  |    1000 | SPAWN | Gatherer_1000
        2026-10-18 21:14:05.002 | WORKER  |    1001 | Gatherer_1000 at (4, 7) - No sources found
    """

    BASE_FMT = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(tick_col)7s | %(message)s"
    DATE_FMT = "%Y-%m-%d %H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        tick = getattr(record, "tick", None)
        record.tick_col = "-" if tick is None else str(tick)
        record.levelname = record.levelname[:7]
        return super().format(record)


# ── Logger factory ────────────────────────────────────────────────────────────

_logger_instance: Optional["ColonyLogger"] = None


def get_logger(name: str = "colony") -> "ColonyLogger":
    """Return the singleton ColonyLogger, creating it on first call."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = ColonyLogger(name)
    return _logger_instance


class ColonyLogger:
    """
    Thin wrapper around the standard logging module that adds colony helpers
    and wires up a rotating file handler plus a console handler.
    """

    def __init__(self, name: str = "colony") -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(LOG_LEVEL)

        if self._logger.handlers:
            return

        self._setup_handlers()

    # ── Setup ─────────────────────────────────────────────────────────────────

    def _setup_handlers(self) -> None:
        formatter = ColonyFormatter(
            fmt     = ColonyFormatter.BASE_FMT,
            datefmt = ColonyFormatter.DATE_FMT,
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(CONSOLE_LEVEL)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file  = LOG_DIR / f"colony_{timestamp}.log"
            file_handler = logging.handlers.RotatingFileHandler(
                filename    = log_file,
                maxBytes    = MAX_BYTES,
                backupCount = LOG_BACKUP_COUNT,
                encoding    = "utf-8",
            )
        except OSError as exc:
            self._logger.warning("File logging disabled: %s", exc)
            return

        file_handler.setLevel(LOG_LEVEL)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)
        self._logger.info("Logger initialised, writing to %s", log_file.resolve())

    def set_console_level(self, level: int) -> None:
        for handler in self._logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)

    # ── Standard log levels ───────────────────────────────────────────────────

    def debug(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.debug(msg, *args, extra={"tick": tick}, **kwargs)

    def info(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.info(msg, *args, extra={"tick": tick}, **kwargs)

    def warning(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.warning(msg, *args, extra={"tick": tick}, **kwargs)

    def error(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.error(msg, *args, extra={"tick": tick}, **kwargs)

    def exception(self, msg: str, *args, tick: Optional[int] = None, **kwargs) -> None:
        self._logger.exception(msg, *args, extra={"tick": tick}, **kwargs)

    # ── Colony-specific helpers ───────────────────────────────────────────────

    def colony_event(self, event_type: str, detail: str, tick: Optional[int] = None) -> None:
        """
        Log a lifecycle event (spawn, death, memory cleanup).

        Example:
            log.colony_event("DEATH", "Gatherer_1000 dropped 50 energy", tick=2499)
        """
        self._logger.log(
            COLONY_LEVEL,
            "%s | %s",
            event_type.upper(),
            detail,
            extra={"tick": tick},
        )

    def worker(self, worker: "Worker", msg: str, *args, tick: Optional[int] = None) -> None:
        """Log a per-worker decision, prefixed with the worker's name and position."""
        self._logger.log(
            WORKER_LEVEL,
            "%s at (%d, %d) - " + msg,
            worker.name,
            int(worker.pos.x),
            int(worker.pos.y),
            *args,
            extra={"tick": tick},
        )
