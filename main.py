#!/usr/bin/env python3
"""
Octant AFK bot - keeps Octant hosting accounts active.

Main entry point for the application.
"""

from afkbot.cli import main

if __name__ == "__main__":
    main()
