"""Logging setup and JSON Lines error log for csvdesk."""
