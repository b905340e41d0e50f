"""
UI/UX Design Agent Module for Agentic-Board

The UI/UX agent is first in the coordination order. It reacts to the newest
feature request on the board and turns it into a UI/UX specification that
both engineering agents build on. Later iterations revise its own latest
spec against the newest feature request.
"""

from agentic_board.agents.base_agent import BaseAgent
from agentic_board.agents.manifest import UIUX_MANIFEST
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.state import AgentRole, BoardMessage, MessageCategory


class UIUXAgent(BaseAgent):
    """Design agent: feature-request -> uiux-spec."""

    role = AgentRole.UIUX
    manifest = UIUX_MANIFEST
    upstream_category = MessageCategory.FEATURE_REQUEST
    output_category = MessageCategory.UIUX_SPEC

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
                upstream_label="feature request",
            )
        return self.prompt_manager.build_uiux_prompt(trigger)
