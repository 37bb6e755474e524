"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from dbchat.cli import REPL, app
from dbchat.config import Config

runner = CliRunner()


@pytest.fixture
def project(monkeypatch, temp_dir):
    """Run commands from an empty directory."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.delenv("DBCHAT_LOG_DIR", raising=False)
    monkeypatch.delenv("DBCHAT_DEFAULT_DATASET", raising=False)
    return temp_dir


def test_datasets_command():
    """Test listing datasets."""
    result = runner.invoke(app, ["datasets"])

    assert result.exit_code == 0
    assert "ecommerce" in result.output
    assert "saas-analytics" in result.output


def test_query_command(project):
    """Test running a natural language query."""
    result = runner.invoke(app, ["query", "top customers"])

    assert result.exit_code == 0
    assert "Sarah" in result.output
    assert (project / ".dbchat" / "runs").is_dir()


def test_query_command_sql(project):
    """Test running SQL."""
    result = runner.invoke(app, ["query", "SELECT COUNT(*) FROM orders", "--sql"])

    assert result.exit_code == 0
    assert "Count" in result.output


def test_query_unknown_dataset(project):
    """Test that an unknown dataset is an error."""
    result = runner.invoke(app, ["query", "top customers", "--dataset", "nope"])

    assert result.exit_code == 1
    assert "Unknown dataset" in result.output


def test_repl_walks_script(temp_dir):
    """Test driving the scripted workflow through REPL commands."""
    config = Config(simulate_delays=False, log_dir=str(temp_dir))
    repl = REPL(config)

    repl.handle_input("I'm building a food delivery app")
    repl.handle_input("/select 50-200")
    repl.handle_input("/select prod-only")
    repl.handle_input("/action auto-setup")

    assert repl.engine.state.view == "split"
    assert repl.engine.state.resource.status == "creating"
    assert repl.engine.next_scripted_trigger() == ("prompt-selection", None)

    repl.handle_input("/quit")
    assert repl.running is False


def test_repl_multi_select(temp_dir):
    """Test the multi-select commands."""
    repl = REPL(Config(simulate_delays=False, log_dir=str(temp_dir)), multi_select=True)
    repl.handle_input("Food delivery app")

    repl.handle_input("/toggle under-50")
    repl.handle_input("/confirm")

    assert repl.engine.state.turns[2].content == "Under 50 restaurants"
    assert repl.engine.cursor == 2


def test_repl_query_and_history(temp_dir):
    """Test running queries from the REPL and listing them."""
    repl = REPL(Config(simulate_delays=False, log_dir=str(temp_dir)))

    repl.handle_input("/query top customers")
    repl.handle_input("/sql SELECT COUNT(*) FROM orders")
    repl.handle_input("/history")

    assert [item.query for item in repl.queries.history.items] == [
        "Custom SQL Query",
        "top customers",
    ]
    assert len(repl.logger.queries_path.read_text().splitlines()) == 2
    assert repl.engine.state.turns == []
