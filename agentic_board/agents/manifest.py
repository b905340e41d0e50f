"""
Capability manifests: static, declarative descriptions of each agent role.

Manifests carry no runtime logic. They are rendered into system prompts so
the model knows what the agent consumes, produces and when it should act.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CapabilityManifest:
    """
    Declarative description of one agent role.

    Attributes:
        name: Human-readable agent name
        role: Role identifier (matches AgentRole.value)
        description: What the agent does
        inputs: Artifacts the agent reads
        outputs: Artifact categories the agent writes
        trigger_signatures: Situations that should make the agent act
        local_policy: Rules the agent follows when deciding to act
    """
    name: str
    role: str
    description: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    trigger_signatures: tuple[str, ...]
    local_policy: str

    def render(self) -> str:
        """Bullet-list rendering used inside system prompts."""
        return "\n".join([
            f"- Name: {self.name}",
            f"- Role: {self.role}",
            f"- Description: {self.description}",
            f"- Inputs: {', '.join(self.inputs)}",
            f"- Outputs: {', '.join(self.outputs)}",
            f"- Trigger signatures: {'; '.join(self.trigger_signatures)}",
            f"- Local policy: {self.local_policy}",
        ])


UIUX_MANIFEST = CapabilityManifest(
    name="UI/UX Design Agent",
    role="uiux",
    description=(
        "Designs user flows, screens, and interaction patterns based on feature requests. "
        "Produces clear, structured UI/UX specs for engineers."
    ),
    inputs=("feature-request", "existing UX context on the board"),
    outputs=("uiux-spec",),
    trigger_signatures=(
        "New feature request without an existing UI/UX spec",
        "User asks for a new flow or change in user experience",
    ),
    local_policy=(
        "Act once per feature request to produce a complete UI/UX spec. "
        "Do not re-act unless the feature request changes significantly."
    ),
)

FRONTEND_MANIFEST = CapabilityManifest(
    name="Frontend Engineer Agent",
    role="frontend",
    description=(
        "Implements UI/UX specifications in a modern frontend stack. "
        "Produces implementation plans and component breakdowns."
    ),
    inputs=("uiux-spec", "feature-request"),
    outputs=("frontend-plan",),
    trigger_signatures=(
        "UI/UX specs are posted / ready for review",
        "Frontend work is requested explicitly",
    ),
    local_policy=(
        "Wait until a UI/UX spec exists for the feature. Then translate specs into a "
        "concrete implementation plan and surface open questions."
    ),
)

BACKEND_MANIFEST = CapabilityManifest(
    name="Backend Engineer Agent",
    role="backend",
    description=(
        "Designs and implements APIs, data models, and backend workflows that support "
        "the requested feature and the UI/UX design."
    ),
    inputs=("feature-request", "uiux-spec"),
    outputs=("backend-plan",),
    trigger_signatures=(
        "UI/UX specs are posted / ready for review",
        "New data or API requirements implied by the request",
    ),
    local_policy=(
        "Wait until a UI/UX spec exists for the feature. Then design backend contracts, "
        "storage, and integration points to support the UI."
    ),
)
