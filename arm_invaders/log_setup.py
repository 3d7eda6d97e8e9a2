"""
Logging setup for the simulator CLI.

Console output goes through rich's RichHandler (WARNING+ by default so the
HUD stays clean). A log directory is optional; when given, every record at
DEBUG+ also lands in ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``, including the
per-instruction trace and the register dump after each step.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import LOG_NAME


def _drop_handlers(*loggers: logging.Logger):
    seen = set()
    for lg in loggers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            if id(handler) not in seen:
                seen.add(id(handler))
                handler.close()


def setup_logging(
    name: str = LOG_NAME,
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """
    Configure and return a logger.

    The package modules log under ``arm_invaders.*``; that tree is attached
    to the same handlers so one call wires up the whole program.
    Calling again replaces the handlers from the previous call (closing any
    open log file), so the latest settings always apply.
    """
    logger = logging.getLogger(name)
    package_logger = logging.getLogger("arm_invaders")
    _drop_handlers(logger, package_logger)

    logger.setLevel(level)
    package_logger.setLevel(level)

    handlers = []

    # ── File handler: captures everything (DEBUG+) ──
    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        handlers.append(fh)

    # ── Console handler: only important stuff (WARNING+ default) ──
    if rich_console:
        ch = RichHandler(
            level=console_level,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    ch.setLevel(console_level)
    handlers.append(ch)

    for handler in handlers:
        logger.addHandler(handler)
        package_logger.addHandler(handler)

    if log_file is not None:
        logger.info("=" * 60)
        logger.info("Logger initialized: %s", name)
        logger.info("Log file: %s", log_file)
        logger.info("Console level: %s", logging.getLevelName(console_level))
        logger.info("=" * 60)

    return logger
