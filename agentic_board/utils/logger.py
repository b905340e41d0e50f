"""
Structured Logging Module for Agentic-Board

Provides differentiated logging for different system components:
- AGENT: Agent activity (prompts, streamed output summaries)
- BOARD: Message board appends and blackboard updates
- SYSTEM: Coordinator cycles, run lifecycle, operator-facing notices

Features:
- Color-coded terminal output for quick visual parsing
- JSON mode for structured log aggregation
- Category-based filtering to hide verbose agent activity
- Optional author tag naming the agent a record is about
"""

import logging
import json
import sys
from enum import Enum
from datetime import datetime


class LogCategory(Enum):
    """
    Log categories for filtering and visual differentiation.

    Each category maps to a prefix tag and a color code for terminal output.
    """
    AGENT = "AGENT"      # Agent prompts, generation, summaries
    BOARD = "BOARD"      # Appends to the shared board, index updates
    SYSTEM = "SYSTEM"    # Coordinator state, orchestration, lifecycle


# ANSI color codes for terminal output
COLORS = {
    LogCategory.AGENT: "\033[94m",   # Blue - agent activity
    LogCategory.BOARD: "\033[93m",   # Yellow - board traffic
    LogCategory.SYSTEM: "\033[92m",  # Green - system status
    "RESET": "\033[0m",
    "ERROR": "\033[91m",             # Red - errors
    "WARNING": "\033[95m",           # Magenta - warnings
}


class StructuredFormatter(logging.Formatter):
    """
    Formatter that supports both human-readable and JSON output.

    In terminal mode (default):
        [SYSTEM] 2024-01-15T10:30:45 | INFO    | Poll cycle 1...
        [AGENT:uiux] 2024-01-15T10:30:46 | INFO    | Output updated: Dashboard layout

    In JSON mode:
        {"timestamp": "...", "category": "AGENT", "author": "uiux", "level": "INFO", ...}
    """

    def __init__(self, json_mode: bool = False, use_colors: bool = True):
        super().__init__()
        self.json_mode = json_mode
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        category = getattr(record, 'category', LogCategory.SYSTEM)
        if isinstance(category, str):
            category = LogCategory[category]

        author = getattr(record, 'author', None)
        timestamp = datetime.now().isoformat(timespec='seconds')

        if self.json_mode:
            log_entry = {
                "timestamp": timestamp,
                "category": category.value,
                "author": author,
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            return json.dumps(log_entry, default=str)

        tag = f"{category.value}:{author}" if author else category.value
        level = record.levelname
        message = record.getMessage()

        if self.use_colors:
            cat_color = COLORS.get(category, "")
            reset = COLORS["RESET"]

            if level == "ERROR":
                level_color = COLORS["ERROR"]
            elif level == "WARNING":
                level_color = COLORS["WARNING"]
            else:
                level_color = ""

            return (
                f"{cat_color}[{tag}]{reset} "
                f"{timestamp} | {level_color}{level:7}{reset} | {message}"
            )

        return f"[{tag}] {timestamp} | {level:7} | {message}"


class CategoryAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects a category, and optionally the author role,
    into log records.

    Usage:
        logger = get_logger(__name__)
        logger.info("Starting run", category=LogCategory.SYSTEM)
        logger.info("Output updated", category=LogCategory.AGENT, author="uiux")
    """

    def process(self, msg: str, kwargs: dict) -> tuple:
        category = kwargs.pop('category', LogCategory.SYSTEM)
        author = kwargs.pop('author', None)
        extra = kwargs.get('extra', {})
        extra['category'] = category
        if author:
            extra['author'] = author
        kwargs['extra'] = extra
        return msg, kwargs


class AgentThoughtFilter(logging.Filter):
    """
    Filter that suppresses AGENT category logs when agent thoughts are disabled.
    """

    def __init__(self, show_thoughts: bool = True):
        super().__init__()
        self.show_thoughts = show_thoughts

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.show_thoughts:
            category = getattr(record, 'category', None)
            if category == LogCategory.AGENT:
                return False
        return True


# Module-level logger cache
_loggers: dict[str, CategoryAdapter] = {}

# Global configuration
_json_mode: bool = False
_show_agent_thoughts: bool = True
_log_level: str = "INFO"


def configure_logging(
    json_mode: bool = False,
    show_agent_thoughts: bool = True,
    log_level: str = "INFO"
) -> None:
    """
    Configure global logging settings.

    Should be called once at application startup. Loggers created before the
    call are reconfigured in place.

    Args:
        json_mode: If True, output logs in JSON format
        show_agent_thoughts: If False, suppress AGENT category logs
        log_level: Global minimum log level (DEBUG, INFO, WARNING, ERROR)
    """
    global _json_mode, _show_agent_thoughts, _log_level
    _json_mode = json_mode
    _show_agent_thoughts = show_agent_thoughts
    _log_level = log_level.upper()

    for logger_adapter in _loggers.values():
        _configure_logger(logger_adapter.logger)


def _configure_logger(logger: logging.Logger) -> None:
    """Apply current global configuration to a logger."""
    logger.setLevel(getattr(logging, _log_level, logging.INFO))

    logger.handlers.clear()
    logger.filters.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(json_mode=_json_mode))
    logger.addHandler(handler)
    logger.addFilter(AgentThoughtFilter(show_thoughts=_show_agent_thoughts))

    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> CategoryAdapter:
    """
    Get a configured logger instance for the given module name.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        CategoryAdapter wrapping a configured Logger

    Example:
        logger = get_logger(__name__)
        logger.error("Act failed", category=LogCategory.SYSTEM, author="backend")
    """
    if name not in _loggers:
        logger = logging.getLogger(f"agentic_board.{name}")
        _configure_logger(logger)
        _loggers[name] = CategoryAdapter(logger, {})

    return _loggers[name]
