"""
Prompt Management Module for Agentic-Board

Centralized management of system prompts and user prompt templates for all
agents. Each role has:
- A system prompt that embeds its capability manifest and output format
- A first-draft user prompt built from the message that triggered it
- A refinement user prompt used when the agent revises its own last output

Keeping the text here lets prompts be tuned without touching agent logic.
"""

from typing import Optional

from agentic_board.agents.manifest import CapabilityManifest
from agentic_board.core.state import AgentRole, BoardMessage


class PromptManager:
    """
    Manages prompt templates for all agents in the Agentic-Board system.

    Usage:
        manager = PromptManager()
        system = manager.get_system_prompt(AgentRole.UIUX, UIUX_MANIFEST)
        user = manager.build_uiux_prompt(trigger)
    """

    # =========================================================================
    # SYSTEM PROMPTS
    # =========================================================================

    UIUX_SYSTEM = """You are the UI/UX Design Agent in a multi-agent engineering environment.

Your capability manifest:
{manifest}

You are handed a feature request from the global message board.
Produce a clear, implementation-ready UI/UX specification that frontend and backend engineer agents can act on.

Your output should be:
- A short summary of the feature from the user point-of-view
- Primary user flows, as bullet points or numbered steps
- Screen and component list, with responsibilities
- State and data that must be surfaced in the UI
- UX considerations (validation, loading, error, empty states)
- Open questions or assumptions (if any)

Write in concise, structured markdown. Do not include any code, only specifications."""

    FRONTEND_SYSTEM = """You are the Frontend Engineer Agent in a multi-agent engineering environment.

Your capability manifest:
{manifest}

You receive UI/UX specs from the UI/UX agent and the original feature request.
Produce an actionable frontend implementation plan.

Your output should be:
- Technical summary of the UI to build
- Component breakdown and responsibilities
- Suggested routing/navigation structure
- State management approach
- Data fetching strategy and API surface needed from backend
- Edge cases and validation in the UI"""

    BACKEND_SYSTEM = """You are the Backend Engineer Agent in a multi-agent engineering environment.

Your capability manifest:
{manifest}

You receive UI/UX specs from the UI/UX agent and the original feature request.
Produce an actionable backend design and implementation plan.

Your output should be:
- Proposed APIs and endpoints (just descriptions, not code)
- Data models and relationships
- Auth and permission considerations
- Integration points with external systems (if any)
- Performance/scaling considerations
- Open questions or assumptions"""

    # =========================================================================
    # USER PROMPT TEMPLATES
    # =========================================================================

    UIUX_DRAFT_TEMPLATE = """Feature request from the board (message #{trigger_id}):
{trigger_content}

Use the manifest and policies above to draft the UI/UX specification."""

    ENGINEER_DRAFT_TEMPLATE = """Original feature request:
{feature}

UI/UX specification (message #{trigger_id}):
{trigger_content}

Use the manifest and policies above to create {deliverable}."""

    REFINE_TEMPLATE = """Your previous {category} (message #{trigger_id}):
{trigger_content}

Latest {upstream_label} on the board{upstream_ref}:
{upstream_content}

Revise your previous {category}. Keep what still holds, fix gaps and inconsistencies
with the latest {upstream_label}, and return the complete revised version."""

    MISSING = "(not found on board)"

    _SYSTEM_BY_ROLE = {
        AgentRole.UIUX: UIUX_SYSTEM,
        AgentRole.FRONTEND: FRONTEND_SYSTEM,
        AgentRole.BACKEND: BACKEND_SYSTEM,
    }

    def get_system_prompt(self, role: AgentRole, manifest: CapabilityManifest) -> str:
        """System prompt for a role with its manifest rendered in place."""
        return self._SYSTEM_BY_ROLE[role].format(manifest=manifest.render()).strip()

    def build_uiux_prompt(self, trigger: BoardMessage) -> str:
        return self.UIUX_DRAFT_TEMPLATE.format(
            trigger_id=trigger.id,
            trigger_content=trigger.content,
        ).strip()

    def build_engineer_prompt(
        self,
        trigger: BoardMessage,
        feature: Optional[BoardMessage],
        deliverable: str
    ) -> str:
        """
        First-draft prompt for the frontend and backend engineers.

        Args:
            trigger: The UI/UX spec the engineer responds to
            feature: The original feature request, if still on the board
            deliverable: Phrase naming what to produce
        """
        return self.ENGINEER_DRAFT_TEMPLATE.format(
            feature=feature.content if feature else self.MISSING,
            trigger_id=trigger.id,
            trigger_content=trigger.content,
            deliverable=deliverable,
        ).strip()

    def build_refine_prompt(
        self,
        trigger: BoardMessage,
        upstream: Optional[BoardMessage],
        upstream_label: str
    ) -> str:
        """
        Prompt for revising the agent's own previous output.

        Args:
            trigger: The agent's own latest output
            upstream: Newest message of the agent's upstream category
            upstream_label: Human name of the upstream artifact
        """
        return self.REFINE_TEMPLATE.format(
            category=trigger.category.value,
            trigger_id=trigger.id,
            trigger_content=trigger.content,
            upstream_label=upstream_label,
            upstream_ref=f" (message #{upstream.id})" if upstream else "",
            upstream_content=upstream.content if upstream else self.MISSING,
        ).strip()
