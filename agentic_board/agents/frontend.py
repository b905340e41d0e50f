"""
Frontend Engineer Agent Module for Agentic-Board

Waits for a UI/UX spec, then produces a frontend implementation plan:
component breakdown, routing, state management and the API surface it
needs from the backend.
"""

from agentic_board.agents.base_agent import BaseAgent
from agentic_board.agents.manifest import FRONTEND_MANIFEST
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.state import AgentRole, BoardMessage, MessageCategory


class FrontendAgent(BaseAgent):
    """Consumer agent: uiux-spec -> frontend-plan."""

    role = AgentRole.FRONTEND
    manifest = FRONTEND_MANIFEST
    upstream_category = MessageCategory.UIUX_SPEC
    output_category = MessageCategory.FRONTEND_PLAN

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
            deliverable="a frontend implementation plan",
        )
