"""Tests for the terminal handlers."""

import io

from rich.console import Console

from dbchat.handlers.query import QueryHandler
from dbchat.handlers.workflow import WorkflowHandler


def _console():
    return Console(file=io.StringIO(), width=120)


def test_query_handler_records_history(temp_dir):
    """Test that handled queries are rendered and recorded."""
    from dbchat.utils.logging import SessionLogger

    console = _console()
    logger = SessionLogger(temp_dir, run_id="abc")
    handler = QueryHandler("ecommerce", console, logger=logger)

    result = handler.handle("top customers")
    handler.handle("SELECT COUNT(*) FROM orders", is_sql=True)

    assert result.success
    assert [item.query for item in handler.history.items] == [
        "Custom SQL Query",
        "top customers",
    ]
    assert len(logger.queries_path.read_text().splitlines()) == 2
    assert "Sarah" in console.file.getvalue()


def test_query_handler_failure():
    """Test rendering of a failed query."""
    console = _console()
    handler = QueryHandler("nope", console)

    result = handler.handle("anything")

    assert not result.success
    assert "Unknown dataset: nope" in console.file.getvalue()


def test_run_progress_stops_at_user_input(engine):
    """Test that progress events run until the script waits on the user."""
    handler = WorkflowHandler(engine, _console())
    engine.submit_user_message("Food delivery app")
    engine.select_prompt("50-200")
    engine.select_prompt("prod-only")

    # The script waits for the offered auto-setup button
    handler.run_progress()
    assert engine.cursor == 3

    engine.perform_action("auto-setup")
    handler.run_progress()

    assert engine.cursor == 6
    assert engine.next_scripted_trigger() == ("prompt-selection", None)


def test_run_progress_through_completion(engine):
    """Test the build phase up to the completion button and past it."""
    handler = WorkflowHandler(engine, _console())
    engine.submit_user_message("Food delivery app")
    engine.select_prompt("50-200")
    engine.select_prompt("prod-only")
    engine.perform_action("auto-setup")
    handler.run_progress()
    engine.select_prompt("multi-region-no")

    handler.run_progress()
    assert engine.next_scripted_trigger() == ("action", "complete-setup")

    engine.perform_action("complete-setup")
    handler.run_progress()
    assert engine.script_exhausted
    assert engine.state.view == "completion"


def test_render_new_turns_only_once(engine):
    """Test that turns are rendered a single time."""
    console = _console()
    handler = WorkflowHandler(engine, console)
    engine.submit_user_message("Food delivery app")

    handler.render_new_turns()
    first = console.file.getvalue()
    handler.render_new_turns()

    assert console.file.getvalue() == first
    assert "How many restaurants" in first


def test_render_history():
    """Test the history table, most recent query first."""
    console = _console()
    handler = QueryHandler("ecommerce", console)

    handler.render_history()
    assert "No queries yet" in console.file.getvalue()

    handler.handle("top customers")
    handler.handle("SELECT COUNT(*) FROM orders", is_sql=True)
    start = len(console.file.getvalue())
    handler.render_history()

    output = console.file.getvalue()[start:]
    assert "Query history" in output
    assert output.index("Custom SQL Query") < output.index("top customers")
