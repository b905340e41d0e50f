"""
Core module containing the board, shared state types and the coordinator.

The Engine lives in agentic_board.core.engine; import it from there.
"""

from .state import BoardMessage, MessageCategory, AgentRole, RunStatus, PipelineResult
from .board import MessageBoard, Blackboard

__all__ = [
    "BoardMessage",
    "MessageCategory",
    "AgentRole",
    "RunStatus",
    "PipelineResult",
    "MessageBoard",
    "Blackboard",
]
