"""Command line entry point."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from .core.config import AfkSettings
from .core.infra.shutdown import (
    restore_default_signal_handlers,
    set_shutdown_event,
    setup_signal_handlers,
)
from .core.logger import setup_logging
from .services.session import AfkOrchestrator, ExitCode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Octant AFK bot - keep hosting accounts active with periodic pings"
    )
    parser.add_argument(
        "--accounts",
        type=Path,
        default=None,
        help="Path to the email:password accounts file (default: accounts.txt)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Ping interval in milliseconds (default: 1000)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> AfkSettings:
    """Build settings from environment/.env, with command line flags taking precedence."""
    overrides: Dict[str, Any] = {}
    if args.accounts is not None:
        overrides["accounts_file"] = args.accounts
    if args.interval is not None:
        overrides["ping_interval_ms"] = args.interval
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return AfkSettings(**overrides)


async def run_bot(settings: AfkSettings) -> int:
    """
    Run the orchestrator until SIGINT/SIGTERM.

    Returns:
        Process exit code
    """
    shutdown_event = asyncio.Event()
    set_shutdown_event(shutdown_event)
    setup_signal_handlers(asyncio.get_running_loop())

    try:
        return await AfkOrchestrator(settings).run(shutdown_event)
    except Exception as e:
        logger.error("An unexpected error occurred:")
        logger.error(str(e) or type(e).__name__)
        logger.opt(exception=e).debug("Traceback")
        return ExitCode.FAILURE
    finally:
        set_shutdown_event(None)
        restore_default_signal_handlers()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(ExitCode.FAILURE)

    setup_logging(
        settings.log_level,
        timezone=settings.log_timezone,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )

    sys.exit(int(asyncio.run(run_bot(settings))))
