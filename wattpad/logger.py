from __future__ import annotations
"""Logging setup and a small logger wrapper used across the package.

Conventions:
  - Concise English messages, callers pre-format with f-strings
  - Console output carries no timestamp
  - HTTP timings at DEBUG, page boundaries at INFO, cache trouble at WARNING
"""
import json
import logging
import sys
import time
from logging.config import dictConfig
from pathlib import Path
from typing import Callable, Dict, Optional

from colorama import Fore, Style
from colorama import init as colorama_init


LEVEL_STYLE: Dict[int, str] = {
    logging.DEBUG: Style.DIM + Fore.CYAN,
    logging.INFO: Style.NORMAL + Fore.GREEN,
    logging.WARNING: Style.NORMAL + Fore.YELLOW,
    logging.ERROR: Style.BRIGHT + Fore.RED,
    logging.CRITICAL: Style.BRIGHT + Fore.RED,
}

CONSOLE_FORMAT = "[ %(levelname)5s ] %(name)s : %(message)s"
LOG_CONFIG_NAME = 'log.config.json'


class ColorFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base = super().format(record)
        prefix = LEVEL_STYLE.get(record.levelno)
        if not prefix:
            return base
        return f"{prefix}{base}{Style.RESET_ALL}"


def _apply_inline(level: int) -> None:
    colorama_init()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColorFormatter(fmt=CONSOLE_FORMAT))
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)


def setup_logging(level: int = logging.INFO, config_path: Optional[Path] = None) -> Optional[Path]:
    """Initialize logging.

    Priority:
      1. explicit config_path, then log.config.json at CWD or project root (dictConfig)
      2. Inline color fallback

    Returns the config file that was applied, or None for the inline fallback.
    """
    candidates = [config_path] if config_path else [
        Path.cwd() / LOG_CONFIG_NAME,
        Path(__file__).resolve().parent.parent / LOG_CONFIG_NAME,
    ]
    for p in candidates:
        if not p.is_file():
            continue
        try:
            with p.open('r', encoding='utf-8') as f:
                dictConfig(json.load(f))
        except (OSError, ValueError, TypeError) as e:
            print(f"[logging] config load fail {p}: {e}", file=sys.stderr)
            continue
        # CLI level wins over the file
        logging.getLogger().setLevel(level)
        logging.getLogger(__name__).debug(f"{p} loaded.")
        return p
    _apply_inline(level)
    logging.getLogger(__name__).debug("inline logging config active")
    return None


class Logger:
    """Thin module-bound wrapper over ``logging.getLogger``.

        log = Logger.bind(__name__)
        log.info("message")
    """

    def __init__(self, name: Optional[str] = None):
        self._logger = logging.getLogger(name or __name__)

    @staticmethod
    def bind(name: str) -> "Logger":
        return Logger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str) -> None:
        self._logger.debug(msg)

    def info(self, msg: str) -> None:
        self._logger.info(msg)

    def warn(self, msg: str) -> None:
        self._logger.warning(msg)

    def error(self, msg: str) -> None:
        self._logger.error(msg)

    def exception(self, msg: object) -> None:
        self._logger.exception(msg)

    def time_block(self, label: str) -> Callable[[], float]:
        """Return a closure that logs and returns elapsed ms when invoked.

            done = log.time_block("story fetch")
            ... work ...
            done()
        """
        start = time.perf_counter()

        def _end() -> float:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self.debug(f"{label} {elapsed_ms:.1f}ms")
            return elapsed_ms

        return _end


__all__ = ["Logger", "setup_logging", "ColorFormatter"]
