"""
Utility module for logging and text helpers.
"""

from .logger import get_logger, configure_logging, LogCategory

__all__ = ["get_logger", "configure_logging", "LogCategory"]
