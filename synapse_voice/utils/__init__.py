"""Utility functions for synapse_voice.

The ``logging_system`` module provides the logger factory used by every
other module.  It honours ``LOG_LEVEL`` and ``NO_COLOR`` and renders through
Rich on a terminal.
"""

from .logging_system import setup_log_system, get_logger  # noqa: F401

__all__ = ["setup_log_system", "get_logger"]
