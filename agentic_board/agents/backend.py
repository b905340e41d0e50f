"""
Backend Engineer Agent Module for Agentic-Board

Waits for a UI/UX spec, then designs the backend that supports it: APIs,
data models, auth, integrations and scaling concerns.
"""

from agentic_board.agents.base_agent import BaseAgent
from agentic_board.agents.manifest import BACKEND_MANIFEST
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.state import AgentRole, BoardMessage, MessageCategory


class BackendAgent(BaseAgent):
    """Consumer agent: uiux-spec -> backend-plan."""

    role = AgentRole.BACKEND
    manifest = BACKEND_MANIFEST
    upstream_category = MessageCategory.UIUX_SPEC
    output_category = MessageCategory.BACKEND_PLAN

    def build_user_prompt(
        self,
        trigger: BoardMessage,
        board: MessageBoard,
        blackboard: Blackboard
    ) -> str:
        if trigger.category == self.output_category:
            return self.prompt_manager.build_refine_prompt(
                trigger,
                blackboard.resolve(board, self.upstream_category),
                upstream_label="UI/UX specification",
            )
        return self.prompt_manager.build_engineer_prompt(
            trigger,
            blackboard.resolve(board, MessageCategory.FEATURE_REQUEST),
            deliverable="a backend design and implementation plan",
        )
