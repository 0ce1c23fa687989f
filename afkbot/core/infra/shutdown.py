"""
Shutdown and signal handling module.

An interrupt sets the shutdown event so the orchestrator can stop every ping
schedule and exit cleanly. A second interrupt exits immediately.
"""

import asyncio
import os
import signal
import threading
from typing import Optional

from loguru import logger

# Global shutdown event for coordinating graceful shutdown - thread-safe singleton
_shutdown_event: Optional[asyncio.Event] = None
_shutdown_lock = threading.Lock()

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def get_shutdown_event() -> Optional[asyncio.Event]:
    """Get shutdown event - thread-safe singleton pattern."""
    with _shutdown_lock:
        return _shutdown_event


def set_shutdown_event(event: Optional[asyncio.Event]) -> None:
    """Set shutdown event - thread-safe singleton pattern."""
    global _shutdown_event
    with _shutdown_lock:
        _shutdown_event = event


def setup_signal_handlers(loop: asyncio.AbstractEventLoop) -> None:
    """
    Route SIGINT/SIGTERM to the shutdown event.

    The handler runs outside the event loop, so the event is set through
    ``call_soon_threadsafe``.

    Args:
        loop: The running event loop that owns the shutdown event
    """

    def handle_signal(signum, frame):
        shutdown_event = get_shutdown_event()
        if shutdown_event and not shutdown_event.is_set():
            logger.info(f"Received signal {signal.Signals(signum).name}, shutting down bots...")
            loop.call_soon_threadsafe(shutdown_event.set)
        else:
            logger.warning("Second signal received, forcing exit")
            os._exit(1)

    for sig in SHUTDOWN_SIGNALS:
        signal.signal(sig, handle_signal)


def restore_default_signal_handlers() -> None:
    """Put back the default handlers (used once shutdown has finished)."""
    signal.signal(signal.SIGINT, signal.default_int_handler)
    signal.signal(signal.SIGTERM, signal.SIG_DFL)
