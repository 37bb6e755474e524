"""CLI and REPL for dbchat."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from dbchat.config import Config
from dbchat.conversation import ConversationEngine
from dbchat.datasets import is_valid_dataset_type, list_datasets
from dbchat.errors import AgentBusyError
from dbchat.graph import AgentTurnGraph
from dbchat.handlers.query import QueryHandler
from dbchat.handlers.workflow import WorkflowHandler
from dbchat.llm import LLM
from dbchat.script import ScriptTable
from dbchat.system_prompt import SystemPromptBuilder
from dbchat.tools.simulator import suggested_queries
from dbchat.utils.logging import SessionLogger
from dbchat.workflows import CREATE_DATABASE, food_delivery_script

app = typer.Typer(help="dbchat - Conversational database console")
console = Console()


class REPL:
    """Interactive REPL over the create-database workflow."""

    def __init__(self, config: Config, use_script: bool = True, multi_select: bool = False):
        """Initialize REPL.

        Args:
            config: Configuration object
            use_script: Whether to follow the scripted demo conversation
            multi_select: Whether prompts toggle instead of submitting
        """
        self.config = config
        self.logger = SessionLogger(Path(config.log_dir))

        responder = None
        if config.anthropic_api_key:
            descriptor = LLM.parse_model_string(config.default_model)
            descriptor.max_output_tokens = config.max_output_tokens
            llm = LLM(descriptor, config.anthropic_api_key, SystemPromptBuilder())
            responder = AgentTurnGraph(llm.complete)

        workflow = CREATE_DATABASE.model_copy(update={"multi_select": multi_select})
        self.engine = ConversationEngine(
            workflow,
            script=food_delivery_script() if use_script else ScriptTable(),
            responder=responder,
            simulate_delays=config.simulate_delays,
            logger=self.logger,
            context=config.context,
        )
        self.workflow = WorkflowHandler(self.engine, console)
        self.queries = QueryHandler(config.default_dataset, console, logger=self.logger)
        self.running = True

    def start(self) -> None:
        """Start the REPL."""
        config = self.engine.config
        console.print(Panel.fit(
            f"[bold cyan]{config.title}[/bold cyan]\n"
            f"{config.subtitle}\n"
            "\n"
            f"Model: {self.config.default_model if self.engine.responder else 'offline (script only)'}\n"
            "Type /help for commands or /quit to exit",
            border_style="cyan"
        ))
        console.print(f"[dim]{config.placeholder}[/dim]\n")
        self.workflow.render_prompts()

        while self.running:
            try:
                user_input = console.input("[bold cyan]dbchat>[/bold cyan] ").strip()

                if not user_input:
                    continue

                self.handle_input(user_input)

            except KeyboardInterrupt:
                console.print("\n[dim]Use /quit to exit[/dim]")
                continue
            except EOFError:
                break

        self.logger.save_state(self.engine.state)
        console.print("\n[cyan]Goodbye![/cyan]")

    def handle_input(self, user_input: str) -> None:
        """Handle user input (command or message).

        Args:
            user_input: User input string
        """
        try:
            if user_input.startswith("/"):
                self.handle_command(user_input)
            else:
                self.engine.submit_user_message(user_input, selected_option_id="create-new")
                self.after_operation()
        except AgentBusyError as e:
            console.print(f"[yellow]{e}[/yellow]")

    def handle_command(self, command: str) -> None:
        """Handle slash command.

        Args:
            command: Command string (starting with /)
        """
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1].strip() if len(parts) > 1 else ""

        if cmd == "/help":
            self.show_help()
        elif cmd == "/quit" or cmd == "/exit":
            self.running = False
        elif cmd == "/prompts":
            self.workflow.render_prompts()
        elif cmd == "/select":
            if not args:
                console.print("[red]Usage: /select <id>[/red]")
                return
            self.engine.select_prompt(args)
            self.after_operation()
        elif cmd == "/toggle":
            if not args:
                console.print("[red]Usage: /toggle <id>[/red]")
                return
            self.engine.toggle_prompt(args)
            self.workflow.render_prompts()
        elif cmd == "/confirm":
            self.engine.confirm_selection()
            self.after_operation()
        elif cmd == "/action":
            if not args:
                console.print("[red]Usage: /action <id>[/red]")
                return
            self.engine.perform_action(args)
            self.after_operation()
        elif cmd == "/next":
            expected = self.engine.next_scripted_trigger()
            if expected is None or expected[0] != "action" or expected[1] is None:
                console.print("[dim]No pending scripted event[/dim]")
                return
            self.engine.perform_action(expected[1])
            self.after_operation()
        elif cmd == "/state":
            self.workflow.render_state()
        elif cmd == "/query" or cmd == "/sql":
            if not args:
                console.print(f"[red]Usage: {cmd} <text>[/red]")
                return
            self.queries.handle(args, is_sql=cmd == "/sql")
        elif cmd == "/history":
            self.queries.render_history()
        elif cmd == "/config":
            config_dict = self.config.to_dict()
            console.print(Panel(
                "\n".join(f"{k}: {v}" for k, v in config_dict.items()),
                title="Configuration",
                border_style="blue"
            ))
        elif cmd == "/log":
            console.print(f"[dim]Session logs: {self.logger.get_log_path()}[/dim]")
        else:
            console.print(f"[red]Unknown command: {cmd}[/red]")
            console.print("[dim]Type /help for available commands[/dim]")

    def after_operation(self) -> None:
        """Render new turns, run progress events and show what comes next."""
        self.workflow.render_new_turns()
        self.workflow.run_progress()
        self.workflow.render_prompts()
        self.logger.save_state(self.engine.state)

    def show_help(self) -> None:
        """Show help message."""
        help_text = """
**Available Commands:**

- `/prompts` - Show the current prompts
- `/select <id>` - Pick a prompt
- `/toggle <id>` - Toggle a prompt (multi-select mode)
- `/confirm` - Submit the toggled prompts
- `/action <id>` - Click an action button
- `/next` - Fire the next scripted progress event
- `/state` - Show view, steps and resource
- `/query <question>` - Ask the sample dataset a question
- `/sql <sql>` - Run SQL against the sample dataset
- `/history` - Show queries run this session
- `/config` - Show current configuration
- `/log` - Show session log path
- `/help` - Show this help message
- `/quit` - Exit dbchat

Anything else is sent to the agent as a message.
        """
        console.print(Markdown(help_text))


@app.command()
def chat(
    model: Optional[str] = typer.Option(
        None,
        "--model", "-m",
        help="Model to use (e.g., anthropic:claude-sonnet-4-5)"
    ),
    no_script: bool = typer.Option(
        False,
        "--no-script",
        help="Skip the scripted demo and send every turn to the model"
    ),
    multi_select: bool = typer.Option(
        False,
        "--multi-select",
        help="Toggle several prompts and submit them together"
    ),
) -> None:
    """Start an interactive create-database session."""
    try:
        config = Config.load(Path.cwd())
    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)

    if model:
        config.default_model = model

    # The scripted demo runs without a model
    errors = config.validate(require_api_key=no_script)
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        sys.exit(1)

    try:
        repl = REPL(config, use_script=not no_script, multi_select=multi_select)
        repl.start()
    except Exception as e:
        console.print(f"[red]Fatal error: {e}[/red]")
        sys.exit(1)


@app.command()
def query(
    text: str = typer.Argument(..., help="Question or SQL text"),
    dataset: Optional[str] = typer.Option(
        None,
        "--dataset", "-d",
        help="Dataset to query (default from DBCHAT_DEFAULT_DATASET)"
    ),
    sql: bool = typer.Option(False, "--sql", help="Treat the text as SQL"),
) -> None:
    """Run a query against a sample dataset."""
    config = Config.load(Path.cwd())
    dataset_type = dataset or config.default_dataset

    if not is_valid_dataset_type(dataset_type):
        console.print(f"[red]Unknown dataset: {dataset_type}[/red]")
        sys.exit(1)

    handler = QueryHandler(dataset_type, console, logger=SessionLogger(Path(config.log_dir)))
    result = handler.handle(text, is_sql=sql)
    if not result.success:
        sys.exit(1)


@app.command()
def datasets() -> None:
    """List the built-in datasets and their suggested queries."""
    table = Table(title="Datasets", title_justify="left")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Tables")
    table.add_column("Try asking")

    for ds in list_datasets():
        table.add_row(
            ds.id,
            ds.name,
            ", ".join(t.name for t in ds.database_schema.tables),
            "\n".join(q.name for q in suggested_queries(ds.id)),
        )

    console.print(table)


if __name__ == "__main__":
    app()
