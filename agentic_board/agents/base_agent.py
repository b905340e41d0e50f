"""
Base Agent Module for Agentic-Board

Provides the foundation for all agent classes:
- Runtime state (iteration counter, budget, last output summary)
- Trigger evaluation: decide from the board alone whether to act
- Act: stream an artifact from the text generator and return a draft

Every role follows the same trigger state machine and differs only in its
manifest, its upstream/output categories and how it builds prompts. Agents
read the board and the blackboard but never write to them; the Engine
appends what act() returns.
"""

from abc import ABC, abstractmethod
from typing import Optional

from config import settings
from agentic_board.agents.manifest import CapabilityManifest
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.exceptions import ConfigurationError
from agentic_board.core.state import (
    AgentRole,
    AgentRuntimeState,
    BoardMessage,
    MessageCategory,
    MessageDraft,
    TriggerState,
)
from agentic_board.tools.generator import TextGenerator
from agentic_board.utils.logger import get_logger, LogCategory
from agentic_board.utils.prompter import PromptManager
from agentic_board.utils.text import preview, summarize_content

logger = get_logger(__name__)


class BaseAgent(ABC):
    """
    Abstract base class for all agents on the message board.

    Subclasses declare:
    - role, manifest: who the agent is
    - upstream_category: what must exist on the board before it acts
    - output_category: what it appends
    - build_user_prompt(): how the trigger and board become a prompt

    Attributes:
        generator: Text generation collaborator
        prompt_manager: Template manager for consistent prompts
        summary_max_length: Maximum length of the stored last-output summary
        state: Mutable runtime state, advanced only by the Engine
    """

    role: AgentRole
    manifest: CapabilityManifest
    upstream_category: MessageCategory
    output_category: MessageCategory

    def __init__(
        self,
        generator: TextGenerator,
        iteration_budget: Optional[int] = None,
        summary_max_length: Optional[int] = None,
        prompt_manager: Optional[PromptManager] = None
    ):
        """
        Initialize the agent.

        Args:
            generator: Text generator used by act()
            iteration_budget: Override MAX_AGENT_ITERATIONS for this agent
            summary_max_length: Override SUMMARY_MAX_LENGTH
            prompt_manager: Shared prompt templates (a new one by default)

        Raises:
            ConfigurationError: If the budget is not positive
        """
        budget = iteration_budget if iteration_budget is not None else settings.MAX_AGENT_ITERATIONS
        if budget <= 0:
            raise ConfigurationError(
                f"{self.__class__.__name__}: iteration budget must be positive, got {budget}"
            )

        self.generator = generator
        self.prompt_manager = prompt_manager or PromptManager()
        self.summary_max_length = summary_max_length or settings.SUMMARY_MAX_LENGTH
        self.state = AgentRuntimeState(role=self.role, iteration_budget=budget)

        logger.debug(
            f"{self.__class__.__name__} initialized with budget={budget}",
            category=LogCategory.AGENT
        )

    @property
    def name(self) -> str:
        return self.role.value

    @property
    def iteration_count(self) -> int:
        return self.state.iteration_count

    @property
    def iteration_budget(self) -> int:
        return self.state.iteration_budget

    @property
    def last_summary(self) -> Optional[str]:
        return self.state.last_summary

    @property
    def system_prompt(self) -> str:
        return self.prompt_manager.get_system_prompt(self.role, self.manifest)

    def reset(self) -> None:
        """Clear per-run state before a new pipeline run."""
        self.state.reset()

    # =========================================================================
    # TRIGGER EVALUATION
    # =========================================================================

    def trigger_state(self, board: MessageBoard, blackboard: Blackboard) -> TriggerState:
        """
        Classify where this agent stands given the current board.

        Exhaustion is checked first so that a spent budget stops the agent
        even if an earlier act failed before producing anything.
        """
        if self.state.is_exhausted:
            return TriggerState.EXHAUSTED
        if blackboard.resolve(board, self.upstream_category) is None:
            return TriggerState.AWAITING_UPSTREAM
        if board.latest_by(self.name, self.output_category) is None:
            return TriggerState.FIRST_RESPONSE
        return TriggerState.REFINING

    def find_trigger(self, board: MessageBoard, blackboard: Blackboard) -> Optional[BoardMessage]:
        """
        Decide whether to act and on which message.

        Returns:
            The newest upstream message on a first response, the agent's own
            newest output when refining, otherwise None
        """
        state = self.trigger_state(board, blackboard)
        if state == TriggerState.FIRST_RESPONSE:
            return blackboard.resolve(board, self.upstream_category)
        if state == TriggerState.REFINING:
            return board.latest_by(self.name, self.output_category)
        return None

    # =========================================================================
    # ACT
    # =========================================================================

    @abstractmethod
    def build_user_prompt(
        self,
        trigger: BoardMessage,
        board: MessageBoard,
        blackboard: Blackboard
    ) -> str:
        """Build the user prompt for a first draft or a refinement."""

    async def act(
        self,
        trigger: BoardMessage,
        board: MessageBoard,
        blackboard: Blackboard
    ) -> MessageDraft:
        """
        Produce one new artifact in response to the trigger.

        Fragments from the generator are concatenated in arrival order and
        the result is trimmed. The board is only read.

        Args:
            trigger: Message selected by find_trigger()
            board: Current message board
            blackboard: Current category index

        Returns:
            A draft authored by this agent in its output category

        Raises:
            GenerationError: If the generator fails
        """
        user_prompt = self.build_user_prompt(trigger, board, blackboard)

        logger.info(
            f"{self.manifest.name} responding to #{trigger.id} ({trigger.category.value})",
            category=LogCategory.AGENT, author=self.name
        )
        logger.debug(
            f"User prompt: {preview(user_prompt, 200)}",
            category=LogCategory.AGENT, author=self.name
        )

        fragments: list[str] = []
        async for fragment in self.generator.stream(self.system_prompt, user_prompt):
            fragments.append(fragment)

        content = "".join(fragments).strip()
        if not content:
            logger.warning(
                f"{self.manifest.name} produced no content for #{trigger.id}",
                category=LogCategory.AGENT, author=self.name
            )

        summary = summarize_content(content, self.summary_max_length)
        self.state.last_summary = summary
        logger.info(f"Output updated: {summary}", category=LogCategory.AGENT, author=self.name)

        return MessageDraft(author=self.name, category=self.output_category, content=content)
