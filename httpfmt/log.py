from __future__ import annotations

import logging
import sys
from typing import Any

from colorama import Fore, Style
from colorama import init as colorama_init

LOGGER_NAME = "httpfmt"

_LEVEL_COLORS = {
    logging.DEBUG: Fore.BLUE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA + Style.BRIGHT,
}

_LEVEL_LABELS = {
    logging.DEBUG: "DEBU",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "FATA",
}


class ConsoleFormatter(logging.Formatter):
    """`LEVEL message key=value ...`, with the level colored when enabled.

    Structured context is passed as ``extra={"ctx": {...}}``.
    """

    def __init__(self, *, color: bool = True) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        label = _LEVEL_LABELS.get(record.levelno, record.levelname[:4].upper())
        if self.color:
            label = f"{_LEVEL_COLORS.get(record.levelno, '')}{label}{Style.RESET_ALL}"
        parts = [label, record.getMessage()]
        ctx: dict[str, Any] = getattr(record, "ctx", None) or {}
        for key, value in ctx.items():
            parts.append(self._format_pair(key, value))
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

    def _format_pair(self, key: str, value: Any) -> str:
        text = str(value)
        if "\n" in text:
            # Multi-line values (verbose document dumps) go on their own lines.
            text = "\n" + text
        elif not text or " " in text:
            text = repr(text)
        if self.color:
            key = f"{Style.DIM}{key}={Style.RESET_ALL}"
        else:
            key = f"{key}="
        return key + text


def setup_logging(level: int | str = logging.INFO, *, color: bool | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if color is None:
        color = sys.stderr.isatty()
    if color:
        colorama_init()

    for handler in list(logger.handlers):
        if getattr(handler, "_httpfmt_console", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter(color=color))
    handler._httpfmt_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
