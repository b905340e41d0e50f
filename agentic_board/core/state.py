"""
State Management Module for Agentic-Board

Defines the value types shared between the board, the agents and the Engine:
- BoardMessage: one immutable record on the shared message board
- MessageDraft: what an agent's act returns, before the Engine appends it
- AgentRuntimeState: per-agent iteration counter, budget and last summary
- PipelineResult: the outcome of one run, returned by the Engine

Messages are owned by the MessageBoard. Everything else holds references to
the same frozen instances, never copies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


USER_AUTHOR = "user"


class MessageCategory(Enum):
    """Kinds of artifact that can appear on the board."""
    FEATURE_REQUEST = "feature-request"
    UIUX_SPEC = "uiux-spec"
    FRONTEND_PLAN = "frontend-plan"
    BACKEND_PLAN = "backend-plan"


class AgentRole(Enum):
    """Closed set of agent roles, in their default coordination order."""
    UIUX = "uiux"
    FRONTEND = "frontend"
    BACKEND = "backend"


class TriggerState(Enum):
    """
    Where an agent stands in its trigger state machine.

    AWAITING_UPSTREAM: required upstream category not yet on the board
    FIRST_RESPONSE: upstream present, agent has produced nothing yet
    REFINING: agent has output and budget left, it revises its own latest output
    EXHAUSTED: iteration budget spent, no further action this run
    """
    AWAITING_UPSTREAM = "awaiting-upstream"
    FIRST_RESPONSE = "first-response"
    REFINING = "refining"
    EXHAUSTED = "exhausted"


class RunStatus(Enum):
    """Terminal states of a pipeline run."""
    IDLE_STOPPED = "idle-stopped"
    BUDGET_EXHAUSTED = "budget-exhausted"


@dataclass(frozen=True)
class BoardMessage:
    """
    A single record on the message board.

    Attributes:
        id: Unique id, strictly increasing in append order
        author: USER_AUTHOR or an AgentRole value
        category: Kind of artifact this message carries
        content: Artifact text
        created_at: UTC timestamp stamped at append time
    """
    id: int
    author: str
    category: MessageCategory
    content: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "author": self.author,
            "category": self.category.value,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class MessageDraft:
    """Output of an agent's act; becomes a BoardMessage once appended."""
    author: str
    category: MessageCategory
    content: str


@dataclass
class AgentRuntimeState:
    """
    Mutable runtime state for one agent.

    iteration_count is advanced only by the Engine, once per act invocation,
    and only goes back to zero through reset() at the start of a run.

    Attributes:
        role: The agent's role
        iteration_budget: Maximum acts in one run (> 0)
        iteration_count: Acts invoked so far in this run
        last_summary: First line of the most recent output, for observability
    """
    role: AgentRole
    iteration_budget: int
    iteration_count: int = 0
    last_summary: Optional[str] = None

    @property
    def is_exhausted(self) -> bool:
        return self.iteration_count >= self.iteration_budget

    def record_iteration(self) -> None:
        self.iteration_count += 1

    def reset(self) -> None:
        """Clear per-run state. The budget is configuration and is kept."""
        self.iteration_count = 0
        self.last_summary = None


@dataclass(frozen=True)
class AgentFailure:
    """A generation failure isolated to one agent turn."""
    role: AgentRole
    cycle: int
    trigger_id: int
    error: str


@dataclass(frozen=True)
class AgentReport:
    """
    Per-agent outcome of a run.

    Attributes:
        role: The agent's role
        iterations: Number of messages this agent appended
        last_category: Category of its last appended message, if any
        last_summary: Summary of its last output, if any
    """
    role: AgentRole
    iterations: int
    last_category: Optional[MessageCategory] = None
    last_summary: Optional[str] = None

    @property
    def has_output(self) -> bool:
        return self.iterations > 0 and self.last_summary is not None

    def format_line(self) -> str:
        """Render the one-line operator summary for this agent."""
        if not self.has_output:
            return f"- {self.role.value}: no output"
        return (
            f"- {self.role.value} (iterations: {self.iterations}, "
            f"last kind: {self.last_category.value}): {self.last_summary}"
        )


@dataclass
class PipelineResult:
    """
    Outcome of one pipeline run.

    Attributes:
        request: The initiating feature request (trimmed)
        status: Terminal state of the run
        cycles: Number of cycles executed
        messages: Final contents of the board, in append order
        reports: One AgentReport per agent, in coordination order
        failures: Generation failures isolated during the run
    """
    request: str
    status: RunStatus
    cycles: int
    messages: tuple[BoardMessage, ...] = ()
    reports: list[AgentReport] = field(default_factory=list)
    failures: list[AgentFailure] = field(default_factory=list)

    def messages_by(self, author: str) -> list[BoardMessage]:
        return [m for m in self.messages if m.author == author]

    def format_agent_summaries(self) -> list[str]:
        """Operator-facing summary lines, one per agent."""
        return [report.format_line() for report in self.reports]

    def to_summary_dict(self) -> dict:
        """
        Create a summary dictionary for logging or JSON output.

        Returns a condensed view of the run with full message contents.
        """
        return {
            "request": self.request,
            "status": self.status.value,
            "cycles": self.cycles,
            "message_count": len(self.messages),
            "messages": [m.to_dict() for m in self.messages],
            "agents": [
                {
                    "role": r.role.value,
                    "iterations": r.iterations,
                    "last_category": r.last_category.value if r.last_category else None,
                    "last_summary": r.last_summary,
                }
                for r in self.reports
            ],
            "failures": [
                {
                    "role": f.role.value,
                    "cycle": f.cycle,
                    "trigger_id": f.trigger_id,
                    "error": f.error,
                }
                for f in self.failures
            ],
        }
