"""AFK bot services."""
