"""Constants and configuration values for the AFK bot.

All classes can be imported directly from this package:
    from afkbot.constants import Endpoints, Intervals, AccountsFile
"""

from .endpoints import BrowserHeaders, Endpoints
from .files import AccountsFile
from .timing import Intervals, Timeouts

__all__ = [
    "AccountsFile",
    "BrowserHeaders",
    "Endpoints",
    "Intervals",
    "Timeouts",
]
