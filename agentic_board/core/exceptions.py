"""
Exception hierarchy for Agentic-Board.

Upstream-absent and budget-exhausted agents are normal conditions and never
raise. Everything here is a genuine failure at some boundary.
"""


class AgenticBoardError(Exception):
    """Base class for all Agentic-Board errors."""


class BoardError(AgenticBoardError):
    """An append to the message board was rejected."""


class InvalidRequestError(AgenticBoardError):
    """The initiating request cannot start a pipeline run (e.g. it is empty)."""


class GenerationError(AgenticBoardError):
    """The text generation collaborator failed, timed out, or returned nothing."""


class ConfigurationError(AgenticBoardError):
    """Engine or agent parameters are invalid."""
