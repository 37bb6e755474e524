"""Workflow handler: renders the conversation engine's state in the terminal."""

import json

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax

from dbchat.conversation import ConversationEngine
from dbchat.state import ConversationTurn

_ROLE_STYLES = {
    "user": ("You", "cyan"),
    "agent": ("Agent", "green"),
    "status": ("Status", "blue"),
    "error": ("Error", "red"),
}

_STEP_ICONS = {
    "pending": "[dim]○[/dim]",
    "in-progress": "[yellow]◐[/yellow]",
    "success": "[green]●[/green]",
    "error": "[red]✗[/red]",
}


class WorkflowHandler:
    """Prints new turns, prompts, steps and the resource after each operation."""

    def __init__(self, engine: ConversationEngine, console: Console):
        """Initialize workflow handler.

        Args:
            engine: Conversation engine to render
            console: Rich console for output
        """
        self.engine = engine
        self.console = console
        self._rendered = 0

    def render_new_turns(self) -> None:
        """Render turns appended since the last call."""
        turns = self.engine.state.turns
        for turn in turns[self._rendered:]:
            if turn.role != "user":
                self.render_turn(turn)
        self._rendered = len(turns)

    def render_turn(self, turn: ConversationTurn) -> None:
        """Render a single turn."""
        title, style = _ROLE_STYLES[turn.role]
        self.console.print(Panel(Markdown(turn.content), title=title, border_style=style))

        if turn.directive is not None:
            self.console.print(f"[dim]Component: {turn.directive.kind}[/dim]")
            self.console.print(
                Syntax(json.dumps(turn.directive.attributes, indent=2), "json", theme="monokai")
            )

        if turn.actions:
            buttons = ", ".join(f"{a.label} [dim]({a.id})[/dim]" for a in turn.actions)
            self.console.print(f"Actions: {buttons}  [dim]/action <id>[/dim]")

        if turn.requires_confirmation and turn.confirm_action is not None:
            confirm = turn.confirm_action
            self.console.print(
                f"[yellow]Confirmation required:[/yellow] {confirm.label} "
                f"[dim](/action {confirm.action})[/dim]"
            )

    def render_prompts(self) -> None:
        """Render the current prompts."""
        state = self.engine.state
        if not state.current_prompts:
            return

        mode = "/toggle <id> then /confirm" if self.engine.config.multi_select else "/select <id>"
        lines = []
        for prompt in state.current_prompts:
            mark = "[x]" if prompt.id in state.selected_prompt_ids else "[ ]"
            prefix = f"{mark} " if self.engine.config.multi_select else "- "
            lines.append(f"{prefix}{prompt.label} [dim]({prompt.id})[/dim]")
        self.console.print("\n".join(lines))
        self.console.print(f"[dim]{mode}[/dim]")

    def render_state(self) -> None:
        """Render view, steps and resource."""
        state = self.engine.state
        steps = "  ".join(f"{_STEP_ICONS[s.status]} {s.title}" for s in state.steps)
        self.console.print(f"[bold]View:[/bold] {state.view}    {steps}")

        if state.resource is not None:
            resource = state.resource
            lines = [
                f"{resource.type}",
                f"Region: {resource.region}",
                f"Status: {resource.status}",
            ]
            if resource.endpoint:
                lines.append(f"Endpoint: {resource.endpoint}")
            for key, value in (resource.details or {}).items():
                lines.append(f"{key}: {value}")
            self.console.print(Panel("\n".join(lines), title=resource.name, border_style="magenta"))

    def run_progress(self) -> None:
        """Fire scripted progress events until the script waits on the user.

        An ``action`` step whose ID is not offered as a button on the latest
        turn is a simulated progress event and runs automatically.
        """
        while True:
            expected = self.engine.next_scripted_trigger()
            if expected is None or expected[0] != "action" or expected[1] is None:
                return

            turns = self.engine.state.turns
            offered = {a.id for a in (turns[-1].actions or [])} if turns else set()
            if expected[1] in offered:
                return

            self.engine.perform_action(expected[1])
            self.render_new_turns()
