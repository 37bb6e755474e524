"""Conversation engine: the state machine behind the workflow chat."""

import time
from typing import Callable, Optional, Sequence

from dbchat.constants import OPTION_DESCRIPTIONS
from dbchat.errors import AgentBusyError
from dbchat.interpreter import InterpretedResponse
from dbchat.script import ScriptStep, ScriptTable
from dbchat.state import (
    ConversationTurn,
    ResourceInfo,
    StepStatus,
    SuggestedAction,
    View,
    WorkflowState,
)
from dbchat.utils.logging import SessionLogger
from dbchat.workflows import WorkflowConfig

# Live agent call: (history, context) -> interpreted response
Responder = Callable[[list[dict], dict], InterpretedResponse]


class ConversationEngine:
    """Owns WorkflowState and applies scripted and live agent turns.

    Views move ``entry -> conversation`` on the first user message and
    afterwards only where a script step declares ``transition_to_view``;
    nothing returns to ``entry``. While ``is_agent_typing`` is set every
    submission raises AgentBusyError: there is one request in flight at most
    and nothing is queued.
    """

    def __init__(
        self,
        config: WorkflowConfig,
        script: Optional[ScriptTable] = None,
        responder: Optional[Responder] = None,
        simulate_delays: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[SessionLogger] = None,
        context: Optional[dict] = None,
    ):
        """Initialize the engine.

        Args:
            config: Workflow configuration (steps, initial prompts, options)
            script: Scripted conversation; empty means every turn is live
            responder: Live agent call used when no scripted step qualifies
            simulate_delays: Whether to wait out scripted typing delays
            sleep: Sleep function used for typing delays
            logger: Optional session logger for appended turns
            context: Extra context passed to the live agent
        """
        self.config = config
        self.script = script if script is not None else ScriptTable()
        self.responder = responder
        self.simulate_delays = simulate_delays
        self.logger = logger
        self.context = dict(context or {})
        self._sleep = sleep

        self._state = WorkflowState(
            steps=[step.model_copy() for step in config.steps],
            current_prompts=list(config.initial_prompts),
        )
        self._cursor = 0
        self._turn_count = 0

    @property
    def state(self) -> WorkflowState:
        """Snapshot of the workflow state (changes do not affect the engine)."""
        return self._state.model_copy(deep=True)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def script_exhausted(self) -> bool:
        return self._cursor >= len(self.script)

    def next_scripted_trigger(self) -> Optional[tuple[str, Optional[str]]]:
        """Trigger the script is waiting for, e.g. ``("action", "setup-progress-1")``.

        Returns:
            (trigger, trigger_value) tuple, or None once the script is exhausted
        """
        step = self.script.expected(self._cursor)
        if step is None:
            return None
        return step.trigger, step.trigger_value

    # Operations

    def submit_user_message(self, text: str, selected_option_id: Optional[str] = None) -> None:
        """Submit a free-typed user message.

        From the entry view this moves to the conversation view and records
        the selected option; the script is then consulted with the
        ``initial`` trigger, otherwise with ``user-message``.

        Args:
            text: Message text
            selected_option_id: Option chosen in the entry view
        """
        self._ensure_idle()
        text = text.strip()
        if not text:
            return

        if self._state.view == "entry" and selected_option_id is not None:
            self._state.selected_option_id = selected_option_id
        self._submit(text, "user-message", [text])

    def select_prompt(self, prompt_id: str) -> None:
        """Select one of the current prompts.

        In single-select mode the prompt's label is submitted as a user turn
        right away; in multi-select mode the selection is toggled.

        Args:
            prompt_id: ID of a prompt in ``current_prompts``
        """
        self._ensure_idle()
        if self.config.multi_select:
            self.toggle_prompt(prompt_id)
            return

        prompt = self._find_prompt(prompt_id)
        if prompt is None:
            return
        self._submit(prompt.label, "prompt-selection", [prompt.id])

    def toggle_prompt(self, prompt_id: str) -> None:
        """Toggle a prompt's membership in the multi-select selection.

        Args:
            prompt_id: ID of a prompt in ``current_prompts``
        """
        self._ensure_idle()
        if self._find_prompt(prompt_id) is None:
            return

        selected = set(self._state.selected_prompt_ids)
        if prompt_id in selected:
            selected.discard(prompt_id)
        else:
            selected.add(prompt_id)
        self._state.selected_prompt_ids = selected

    def confirm_selection(self) -> None:
        """Submit the selected prompts as one user turn.

        Labels are joined with ``", "`` in prompt order. Does nothing when
        nothing is selected.
        """
        self._ensure_idle()
        chosen = [p for p in self._state.current_prompts if p.id in self._state.selected_prompt_ids]
        if not chosen:
            return

        self._state.selected_prompt_ids = set()
        text = ", ".join(p.label for p in chosen)
        self._submit(text, "prompt-selection", [p.id for p in chosen])

    def perform_action(self, action_id: str) -> None:
        """Handle an action button or a simulated progress event.

        A qualifying scripted ``action`` step runs directly; otherwise the
        action is sent to the live agent as ``Execute action: <id>``.
        Actions are ignored in the entry view.

        Args:
            action_id: Action identifier
        """
        self._ensure_idle()
        if self._state.view == "entry":
            return

        step = self.script.lookup(self._cursor, "action", [action_id])
        if step is not None:
            self._apply_step(step)
            return

        self._append_turn("user", f"Execute action: {action_id}")
        self._live_turn()

    def update_step(self, step_id: str, status: StepStatus) -> None:
        """Set a workflow step's status. Unknown IDs are ignored.

        Args:
            step_id: Step identifier
            status: New status
        """
        for step in self._state.steps:
            if step.id == step_id:
                step.status = status
                break
        else:
            return

        self._state.current_step_index = next(
            (i for i, s in enumerate(self._state.steps) if s.status != "success"),
            len(self._state.steps),
        )

    def set_resource(self, resource: Optional[ResourceInfo]) -> None:
        """Replace the observed resource wholesale."""
        self._state.resource = resource

    def set_prompts(self, prompts: Sequence[SuggestedAction]) -> None:
        """Replace the current prompts and clear the selection."""
        self._state.current_prompts = list(prompts)
        self._state.selected_prompt_ids = set()

    def to_model_messages(self) -> list[dict]:
        """Conversation history in model-boundary form.

        Returns:
            List of ``{"role": "user" | "agent", "content": ...}`` dicts
        """
        return [
            {"role": turn.role, "content": turn.content}
            for turn in self._state.turns
            if turn.role in ("user", "agent")
        ]

    def model_context(self) -> dict:
        """Context blob sent along with the history to the live agent."""
        context = {"currentPage": self.config.current_page or None}
        option_id = self._state.selected_option_id
        if option_id:
            context["selectedOption"] = OPTION_DESCRIPTIONS.get(option_id, option_id)
        context.update(self.context)
        return {k: v for k, v in context.items() if v is not None}

    # Internals

    def _submit(self, text: str, trigger: str, values: Sequence[str]) -> None:
        if self._state.view == "entry":
            self._state.view = "conversation"
            trigger = "initial"

        self._append_turn("user", text)

        step = self.script.lookup(self._cursor, trigger, values)
        if step is not None:
            self._apply_step(step)
        else:
            self._live_turn()

    def _apply_step(self, step: ScriptStep) -> None:
        """Apply a scripted step: typing delay, turn, step, resource, prompts, view."""
        self._state.is_agent_typing = True
        try:
            if self.simulate_delays and step.delay_ms:
                self._sleep(step.delay_ms / 1000)

            update = step.update_step
            response = step.agent_response
            self._append_turn(
                response.role,
                response.content,
                actions=response.actions,
                requires_confirmation=response.requires_confirmation,
                step_completed=update.step_id if update and update.status == "success" else None,
            )

            if update is not None:
                self.update_step(update.step_id, update.status)
            if step.create_resource is not None:
                self.set_resource(step.create_resource)
            if step.next_prompts is not None:
                self.set_prompts(step.next_prompts)
            if step.transition_to_view is not None:
                self._transition(step.transition_to_view)

            self._cursor += 1
        finally:
            self._state.is_agent_typing = False

    def _live_turn(self) -> None:
        """Send the conversation to the live agent and append its reply."""
        if self.responder is None:
            return

        self._state.is_agent_typing = True
        try:
            response = self.responder(self.to_model_messages(), self.model_context())
        except Exception as e:  # upstream failures become a visible turn
            self._append_turn("error", f"Error: {str(e) or 'Failed to get response'}")
        else:
            self._append_turn(
                "agent",
                response.message,
                directive=response.directive,
                suggested_actions=response.suggested_actions,
                requires_confirmation=response.requires_confirmation,
                confirm_action=response.confirm_action,
            )
            if response.suggested_actions:
                self.set_prompts(response.suggested_actions)
        finally:
            self._state.is_agent_typing = False

    def _transition(self, view: View) -> None:
        # No edge leads back to the entry view
        if view != "entry":
            self._state.view = view

    def _append_turn(self, role: str, content: str, **fields) -> ConversationTurn:
        self._turn_count += 1
        turn = ConversationTurn(id=f"turn-{self._turn_count}", role=role, content=content, **fields)
        self._state.turns.append(turn)

        if self.logger:
            self.logger.log_turn(turn)
        return turn

    def _find_prompt(self, prompt_id: str) -> Optional[SuggestedAction]:
        return next((p for p in self._state.current_prompts if p.id == prompt_id), None)

    def _ensure_idle(self) -> None:
        if self._state.is_agent_typing:
            raise AgentBusyError("Agent is still responding; wait for the current turn")
