"""
Logging module for the application.
This module provides the root logger configuration used by the command line.
"""

from .setup import setup_logging, get_log_level

__all__ = ["setup_logging", "get_log_level"]
