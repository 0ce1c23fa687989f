"""Colorized console logging with Loguru."""

import json
import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from types import FrameType, MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

from loguru import logger

__all__ = [
    "LEVEL_COLORS",
    "STATUS",
    "colorize_json",
    "escape_markup",
    "print_banner",
    "setup_logging",
]

# Custom level for per-ping status lines, between INFO (20) and SUCCESS (25)
STATUS = "STATUS"
STATUS_NO = 23

# Severity -> loguru color markup. Read-only after import.
LEVEL_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "DEBUG": "<fg #808080>",
        "INFO": "<cyan>",
        STATUS: "<fg #9370DB>",
        "SUCCESS": "<fg #00FF00>",
        "WARNING": "<fg #FFA500>",
        "ERROR": "<fg #FF0000>",
    }
)

JSON_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "base": "fg #00FFFF",
        "key": "light-yellow",
        "true": "light-green",
        "false": "light-red",
        "null": "light-magenta",
    }
)

BANNER_BORDER = "#4B0082"
BANNER_TITLE = "#9370DB"
BANNER = (
    ("╔════════════════════════════════════════════════════════╗", BANNER_BORDER),
    ("║                                                        ║", BANNER_BORDER),
    ("║                   OCTANT AFK BOT                       ║", BANNER_TITLE),
    ("║                                                        ║", BANNER_BORDER),
    ("╚════════════════════════════════════════════════════════╝", BANNER_BORDER),
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_FORMAT = "<light-blue>[{extra[timestamp]}]</light-blue> <level>{message}</level>"
TEXT_FILE_FORMAT = "[{extra[timestamp]}] {level: <8} | {name}:{function}:{line} - {message}"

# Strings (with the colon when used as a key) or bare literals
_JSON_TOKEN = re.compile(r'("(?:[^"\\]|\\.)*")(\s*:)?|\b(true|false|null)\b')
# Anything loguru's colorizer reads as a tag
_MARKUP_TAG = re.compile(r"</?(?:[fb]g\s)?[^<>\s]*>")


def _register_levels() -> None:
    """Register the STATUS level and apply the color table to every level."""
    try:
        logger.level(STATUS)
    except ValueError:
        logger.level(STATUS, no=STATUS_NO, color=LEVEL_COLORS[STATUS])
    for name, color in LEVEL_COLORS.items():
        logger.level(name, color=color)


_register_levels()


def _make_timestamp_patcher(tz: ZoneInfo) -> Callable[[Dict[str, Any]], None]:
    """
    Build a patcher that stamps every record with a local timestamp.

    Loguru formats ``{time}`` in the host timezone; the bot reports times in
    a configured zone instead.
    """

    def patcher(record: Dict[str, Any]) -> None:
        time: datetime = record["time"]
        record["extra"]["timestamp"] = time.astimezone(tz).strftime(TIMESTAMP_FORMAT)

    return patcher


class InterceptHandler(logging.Handler):
    """Redirect standard logging (aiohttp, asyncio) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    level: str = "INFO",
    timezone: str = "Asia/Manila",
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> None:
    """
    Setup Loguru logging with colorized console output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        timezone: IANA timezone used for timestamps
        log_file: Optional rotating log file
        json_format: Serialize the log file as JSON lines
    """
    # Remove default handler
    logger.remove()

    logger.configure(patcher=_make_timestamp_patcher(ZoneInfo(timezone)))
    _register_levels()

    # Console handler - human readable
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format="{message}" if json_format else TEXT_FILE_FORMAT,
            level=level,
            rotation="10 MB",  # Rotate when file reaches 10MB
            retention="30 days",
            compression="zip",
            serialize=json_format,
        )

    # Intercept all standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(getattr(logging, level, logging.INFO))

    logger.debug(f"Logging initialized (level={level}, timezone={timezone})")


def escape_markup(text: str) -> str:
    """Escape text so loguru's ``opt(colors=True)`` prints it verbatim.

    Only ``<`` sequences that loguru would read as a tag are escaped; a lone
    ``<`` already prints as-is and must not gain a backslash.
    """
    return _MARKUP_TAG.sub(lambda m: "\\" + m.group(0), text)


def colorize_json(payload: Any) -> str:
    """
    Render a payload as colorized JSON markup.

    Keys are yellow, ``true`` green, ``false`` red and ``null`` magenta, on a
    cyan base. The result must be logged with ``logger.opt(colors=True)``.

    Args:
        payload: Any JSON-serializable value (non-serializable values are
            rendered with ``str``)

    Returns:
        Loguru markup string
    """
    text = json.dumps(payload, ensure_ascii=False, default=str)

    def paint(match: "re.Match[str]") -> str:
        string, colon, literal = match.groups()
        if literal:
            return f"<{JSON_COLORS[literal]}>{literal}</>"
        if colon:
            return f'"<{JSON_COLORS["key"]}>{escape_markup(string[1:-1])}</>"{colon}'
        return escape_markup(string)

    return f"<{JSON_COLORS['base']}>{_JSON_TOKEN.sub(paint, text)}</>"


def print_banner() -> None:
    """Log the startup banner."""
    for line, color in BANNER:
        logger.opt(colors=True).info(f"<fg {color}>{line}</>")
