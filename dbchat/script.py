"""Declarative workflow scripts and the transition table built from them."""

from typing import Iterable, Literal, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dbchat.state import ActionButton, ResourceInfo, StepStatus, SuggestedAction, View

Trigger = Literal["initial", "user-message", "prompt-selection", "action"]


class ScriptModel(BaseModel):
    """Base for script entries; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ScriptedResponse(ScriptModel):
    """Shape of the agent turn a script step produces."""

    role: Literal["agent", "status"] = Field(
        "agent", validation_alias=AliasChoices("role", "type")
    )
    content: str
    actions: Optional[list[ActionButton]] = None
    requires_confirmation: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices(
            "requires_confirmation", "requiresConfirmation", "isConfirmation"
        ),
    )


class StepUpdate(ScriptModel):
    """Status change for a workflow stepper entry."""

    step_id: str
    status: StepStatus


class ScriptStep(ScriptModel):
    """One entry of a workflow script."""

    trigger: Trigger
    trigger_value: Optional[str] = None
    agent_response: ScriptedResponse
    next_prompts: Optional[list[SuggestedAction]] = None
    update_step: Optional[StepUpdate] = None
    create_resource: Optional[ResourceInfo] = None
    transition_to_view: Optional[View] = None
    delay_ms: int = Field(0, ge=0, validation_alias=AliasChoices("delay_ms", "delayMs", "delay"))


class ScriptTable:
    """Transition table keyed by ``(cursor, trigger, trigger_value)``.

    A step without a trigger value is stored under ``None`` and acts as a
    wildcard for its trigger at that cursor position.
    """

    def __init__(self, steps: Iterable[ScriptStep] = ()):
        """Initialize table.

        Args:
            steps: Script steps in the order they should run
        """
        self.steps: tuple[ScriptStep, ...] = tuple(steps)
        self._table: dict[tuple[int, str, Optional[str]], ScriptStep] = {
            (cursor, step.trigger, step.trigger_value): step
            for cursor, step in enumerate(self.steps)
        }

    @classmethod
    def from_dicts(cls, data: Iterable[dict]) -> "ScriptTable":
        """Build a table from raw script entries (e.g. loaded from JSON)."""
        return cls(ScriptStep.model_validate(entry) for entry in data)

    def lookup(
        self, cursor: int, trigger: str, values: Sequence[str] = ()
    ) -> Optional[ScriptStep]:
        """Find the step that handles a trigger at the cursor.

        Args:
            cursor: Current script position
            trigger: Trigger kind
            values: Candidate trigger values, most specific first

        Returns:
            ScriptStep, or None if the trigger does not qualify
        """
        for value in values:
            step = self._table.get((cursor, trigger, value))
            if step is not None:
                return step
        return self._table.get((cursor, trigger, None))

    def expected(self, cursor: int) -> Optional[ScriptStep]:
        """Step waiting at the cursor, or None once the script is exhausted."""
        if 0 <= cursor < len(self.steps):
            return self.steps[cursor]
        return None

    def __len__(self) -> int:
        return len(self.steps)
