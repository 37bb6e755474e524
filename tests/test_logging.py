"""Tests for session logging."""

import json

from dbchat.state import ConversationTurn, UiDirective, WorkflowState
from dbchat.tools.simulator import execute_natural_language_query
from dbchat.utils.logging import SessionLogger


def test_log_dir_created(temp_dir):
    """Test that the run directory is created."""
    logger = SessionLogger(temp_dir, run_id="abc")

    assert (temp_dir / "runs" / "abc").is_dir()
    assert logger.get_log_path().endswith("abc")


def test_log_turn(temp_dir):
    """Test transcript entries."""
    logger = SessionLogger(temp_dir, run_id="abc")

    logger.log_turn(ConversationTurn(id="turn-1", role="user", content="Hi"))
    logger.log_turn(
        ConversationTurn(
            id="turn-2",
            role="agent",
            content="Table",
            directive=UiDirective(kind="Table"),
            step_completed="configure",
        )
    )

    entries = [json.loads(line) for line in logger.transcript_path.read_text().splitlines()]
    assert [e["id"] for e in entries] == ["turn-1", "turn-2"]
    assert "directive" not in entries[0]
    assert entries[1]["directive"] == "Table"
    assert entries[1]["step_completed"] == "configure"


def test_log_query(temp_dir):
    """Test query log entries leave out the rows."""
    logger = SessionLogger(temp_dir, run_id="abc")
    result = execute_natural_language_query("ecommerce", "top customers")

    logger.log_query(result, "ecommerce")

    entry = json.loads(logger.queries_path.read_text())
    assert entry["dataset"] == "ecommerce"
    assert entry["row_count"] == 3
    assert "rows" not in entry


def test_save_state(temp_dir):
    """Test state snapshots."""
    logger = SessionLogger(temp_dir, run_id="abc")

    logger.save_state(WorkflowState(view="split"))

    assert json.loads(logger.state_path.read_text())["view"] == "split"
