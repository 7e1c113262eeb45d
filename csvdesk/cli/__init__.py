"""Command line interface for csvdesk."""

from .__main__ import EXIT_DATASET_ERROR, EXIT_FATAL, EXIT_SUCCESS, main

__all__ = ["EXIT_DATASET_ERROR", "EXIT_FATAL", "EXIT_SUCCESS", "main"]
