"""State models for the conversation engine and the agent turn graph."""

from datetime import datetime
from typing import Any, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

View = Literal["entry", "conversation", "split", "completion"]
Role = Literal["user", "agent", "status", "error"]
StepStatus = Literal["pending", "in-progress", "success", "error"]
ResourceStatus = Literal["creating", "active", "error"]
Variant = Literal["primary", "normal"]


class UiDirective(BaseModel):
    """Opaque renderer payload. Serialized as ``{"type", "props"}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(alias="type", description="Component type for the renderer")
    attributes: dict[str, Any] = Field(
        default_factory=dict, alias="props", description="Component properties"
    )


class SuggestedAction(BaseModel):
    """A follow-up prompt the user can pick. Serialized as ``{"id", "text"}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    label: str = Field(alias="text")


class ConfirmAction(BaseModel):
    """Action the user must authorize before the agent proceeds."""

    model_config = ConfigDict(frozen=True)

    label: str
    variant: Variant = "primary"
    action: str
    params: Optional[dict[str, Any]] = None


class ActionButton(BaseModel):
    """Button attached to a scripted agent turn."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    variant: Variant = "normal"


class ConversationTurn(BaseModel):
    """A single entry in the conversation log. Never mutated after append."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    step_completed: Optional[str] = None
    actions: Optional[list[ActionButton]] = None
    directive: Optional[UiDirective] = None
    suggested_actions: Optional[list[SuggestedAction]] = None
    requires_confirmation: Optional[bool] = None
    confirm_action: Optional[ConfirmAction] = None


class Step(BaseModel):
    """A workflow stepper entry."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    title: str
    status: StepStatus = "pending"


class ResourceInfo(BaseModel):
    """Resource observed by the workflow. Replaced wholesale on every update."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    region: str
    status: ResourceStatus
    endpoint: Optional[str] = None
    details: Optional[dict[str, str]] = None


class WorkflowState(BaseModel):
    """The single mutable aggregate owned by ConversationEngine.

    Attributes:
        view: Current view
        selected_option_id: Option chosen in the entry view
        steps: Workflow stepper entries
        current_step_index: Index of the first unfinished step, or len(steps)
        turns: Ordered conversation log
        current_prompts: Prompts currently offered to the user
        selected_prompt_ids: Prompts toggled in multi-select mode
        is_agent_typing: Busy flag while an agent turn is pending
        resource: Resource created by the workflow, if any
    """

    model_config = ConfigDict(validate_assignment=True)

    view: View = "entry"
    selected_option_id: Optional[str] = None
    steps: list[Step] = Field(default_factory=list)
    current_step_index: int = 0
    turns: list[ConversationTurn] = Field(default_factory=list)
    current_prompts: list[SuggestedAction] = Field(default_factory=list)
    selected_prompt_ids: set[str] = Field(default_factory=set)
    is_agent_typing: bool = False
    resource: Optional[ResourceInfo] = None


class AgentTurnState(TypedDict, total=False):
    """The state object passed through the agent turn graph.

    Attributes:
        messages: Conversation history in model-boundary form
        context: Opaque context blob for the system prompt
        raw_text: Raw completion text
        was_truncated: Whether the completion hit the token limit
        response: Interpreted response
    """

    messages: list[dict]
    context: dict
    raw_text: str
    was_truncated: bool
    response: Any
