"""
Engine Module - The Coordinator for Agentic-Board

Runs the cycle loop that lets agents collaborate through the shared board:
1. The feature request is appended to a fresh board and indexed
2. Each cycle evaluates every agent, in a fixed order, against the board
   as it is at that moment
3. Eligible agents act one at a time; their drafts are appended and
   indexed before the next agent is evaluated
4. The run stops after IDLE_CYCLE_THRESHOLD consecutive idle cycles or
   after MAX_GLOBAL_CYCLES

Because later agents see appends made earlier in the same cycle, a whole
dependency chain (request -> UI/UX spec -> frontend and backend plans)
can complete in one cycle.

State Machine:
    RUNNING -> (no append for threshold cycles) -> IDLE_STOPPED
    RUNNING -> (cycle == max_global_cycles)     -> BUDGET_EXHAUSTED

The Engine is the single writer of the board and the blackboard. Acts are
awaited sequentially, so there is never more than one in flight.
"""

import asyncio
from typing import Optional, Sequence

from config import settings
from agentic_board.agents.backend import BackendAgent
from agentic_board.agents.base_agent import BaseAgent
from agentic_board.agents.frontend import FrontendAgent
from agentic_board.agents.uiux import UIUXAgent
from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.exceptions import ConfigurationError, GenerationError, InvalidRequestError
from agentic_board.core.pacing import PacingStrategy, pacing_for_interval
from agentic_board.core.state import (
    USER_AUTHOR,
    AgentFailure,
    AgentReport,
    BoardMessage,
    MessageCategory,
    MessageDraft,
    PipelineResult,
    RunStatus,
)
from agentic_board.tools.generator import OpenAIGenerator, TextGenerator
from agentic_board.utils.logger import get_logger, LogCategory
from agentic_board.utils.text import preview

logger = get_logger(__name__)


class Engine:
    """
    Coordinator for the multi-agent message board pipeline.

    Attributes:
        agents: Agents in their fixed coordination order
        max_global_cycles: Upper bound on cycles per run
        idle_threshold: Consecutive idle cycles that stop a run
        pacing: Wait policy between cycles
        act_timeout: Optional per-act time limit in seconds
        board: Board of the current (or last) run
        blackboard: Category index of the current (or last) run
    """

    def __init__(
        self,
        agents: Optional[Sequence[BaseAgent]] = None,
        generator: Optional[TextGenerator] = None,
        max_global_cycles: Optional[int] = None,
        idle_threshold: Optional[int] = None,
        iteration_budget: Optional[int] = None,
        pacing: Optional[PacingStrategy] = None,
        act_timeout: Optional[float] = None
    ):
        """
        Initialize the Engine with configuration.

        Args:
            agents: Custom agents in coordination order. Defaults to
                UI/UX, frontend, backend sharing one generator.
            generator: Text generator for the default agents
                (OpenAIGenerator if omitted)
            max_global_cycles: Override MAX_GLOBAL_CYCLES
            idle_threshold: Override IDLE_CYCLE_THRESHOLD
            iteration_budget: Override MAX_AGENT_ITERATIONS for default agents
            pacing: Inter-cycle wait policy (POLL_INTERVAL_SECONDS by default)
            act_timeout: Override ACT_TIMEOUT_SECONDS

        Raises:
            ConfigurationError: On non-positive limits, no agents or duplicate roles
        """
        self.max_global_cycles = (
            max_global_cycles if max_global_cycles is not None else settings.MAX_GLOBAL_CYCLES
        )
        self.idle_threshold = idle_threshold if idle_threshold is not None else settings.IDLE_CYCLE_THRESHOLD
        self.act_timeout = act_timeout if act_timeout is not None else settings.ACT_TIMEOUT_SECONDS
        self.pacing = pacing or pacing_for_interval(settings.POLL_INTERVAL_SECONDS)

        if self.max_global_cycles <= 0:
            raise ConfigurationError(f"max_global_cycles must be positive, got {self.max_global_cycles}")
        if self.idle_threshold <= 0:
            raise ConfigurationError(f"idle_threshold must be positive, got {self.idle_threshold}")

        if agents is None:
            generator = generator or OpenAIGenerator()
            agents = [
                UIUXAgent(generator, iteration_budget=iteration_budget),
                FrontendAgent(generator, iteration_budget=iteration_budget),
                BackendAgent(generator, iteration_budget=iteration_budget),
            ]
        self.agents: list[BaseAgent] = list(agents)

        if not self.agents:
            raise ConfigurationError("Engine needs at least one agent")
        roles = [agent.role for agent in self.agents]
        if len(set(roles)) != len(roles):
            raise ConfigurationError(f"Duplicate agent roles: {[r.value for r in roles]}")

        self.board = MessageBoard()
        self.blackboard = Blackboard()

        logger.info(
            f"Engine initialized: agents={[a.name for a in self.agents]}, "
            f"max_global_cycles={self.max_global_cycles}, idle_threshold={self.idle_threshold}, "
            f"budgets={[a.iteration_budget for a in self.agents]}",
            category=LogCategory.SYSTEM
        )

    def _reset_for_new_run(self) -> None:
        """Fresh board, fresh index and zeroed agent counters."""
        self.board = MessageBoard()
        self.blackboard = Blackboard()
        for agent in self.agents:
            agent.reset()

    def _post(self, author: str, category: MessageCategory, content: str) -> BoardMessage:
        """Append to the board and update the index in one step."""
        message = self.board.append(author, category, content)
        self.blackboard.update(message)
        return message

    async def run(self, request: str) -> PipelineResult:
        """
        Main entry point: run the pipeline for one feature request.

        Args:
            request: The initiating feature request

        Returns:
            PipelineResult with the final board and per-agent reports

        Raises:
            InvalidRequestError: If the request is empty or whitespace
        """
        request = (request or "").strip()
        if not request:
            raise InvalidRequestError("Feature request must not be empty")

        self._reset_for_new_run()
        feature = self._post(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, request)
        logger.info(
            f"Feature request posted to the message board as message #{feature.id}: {preview(request)}",
            category=LogCategory.SYSTEM
        )

        failures: list[AgentFailure] = []
        idle_cycles = 0
        status = RunStatus.BUDGET_EXHAUSTED
        cycle = 0

        for cycle in range(1, self.max_global_cycles + 1):
            logger.info(f"Poll cycle {cycle}...", category=LogCategory.SYSTEM)

            progressed = await self._run_cycle(cycle, failures)

            if progressed:
                idle_cycles = 0
            else:
                idle_cycles += 1
                logger.debug(
                    f"Idle cycle {idle_cycles}/{self.idle_threshold}",
                    category=LogCategory.SYSTEM
                )
                if idle_cycles >= self.idle_threshold:
                    logger.info(
                        "No agent activity for several cycles; stopping the multi-agent loop",
                        category=LogCategory.SYSTEM
                    )
                    status = RunStatus.IDLE_STOPPED
                    break

            if cycle < self.max_global_cycles:
                await self.pacing.wait(cycle)
        else:
            logger.warning(
                f"Max global cycles ({self.max_global_cycles}) reached",
                category=LogCategory.SYSTEM
            )

        result = PipelineResult(
            request=request,
            status=status,
            cycles=cycle,
            messages=self.board.all(),
            reports=[self._report_for(agent) for agent in self.agents],
            failures=failures,
        )
        logger.info(
            f"Multi-agent pipeline reached its stopping condition: {status.value} "
            f"after {cycle} cycles, {len(result.messages)} messages",
            category=LogCategory.SYSTEM
        )
        return result

    async def _run_cycle(self, cycle: int, failures: list[AgentFailure]) -> bool:
        """
        Evaluate every agent once, in order.

        Returns:
            True if at least one message was appended
        """
        progressed = False

        for agent in self.agents:
            trigger = agent.find_trigger(self.board, self.blackboard)
            if trigger is None or agent.state.is_exhausted:
                continue

            agent.state.record_iteration()
            logger.debug(
                f"{agent.name}: iteration {agent.iteration_count}/{agent.iteration_budget} "
                f"on #{trigger.id}",
                category=LogCategory.SYSTEM
            )

            try:
                draft = await self._act(agent, trigger)
            except Exception as e:
                # Isolated to this agent's turn; the budget still counts it
                logger.error(
                    f"{agent.name} failed on #{trigger.id} in cycle {cycle}: {e}",
                    category=LogCategory.SYSTEM, author=agent.name
                )
                failures.append(AgentFailure(
                    role=agent.role,
                    cycle=cycle,
                    trigger_id=trigger.id,
                    error=f"{type(e).__name__}: {e}",
                ))
                continue

            self._post(draft.author, draft.category, draft.content)
            progressed = True

        return progressed

    async def _act(self, agent: BaseAgent, trigger: BoardMessage) -> MessageDraft:
        if self.act_timeout is None:
            return await agent.act(trigger, self.board, self.blackboard)
        try:
            return await asyncio.wait_for(
                agent.act(trigger, self.board, self.blackboard),
                timeout=self.act_timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(
                f"{agent.name} act exceeded {self.act_timeout}s"
            ) from e

    def _report_for(self, agent: BaseAgent) -> AgentReport:
        authored = self.board.authored_by(agent.name)
        if not authored:
            return AgentReport(role=agent.role, iterations=0)
        return AgentReport(
            role=agent.role,
            iterations=len(authored),
            last_category=authored[-1].category,
            last_summary=agent.last_summary,
        )
