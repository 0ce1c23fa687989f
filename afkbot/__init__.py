"""Octant AFK bot - keeps hosting accounts active with periodic pings."""

__version__ = "1.0.0"
