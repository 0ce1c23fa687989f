"""Process-level infrastructure."""

from .shutdown import get_shutdown_event, set_shutdown_event, setup_signal_handlers

__all__ = ["get_shutdown_event", "set_shutdown_event", "setup_signal_handlers"]
