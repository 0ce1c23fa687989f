"""Core infrastructure: errors, logging, configuration and shutdown."""
