"""Session logging utilities."""

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dbchat.state import ConversationTurn, WorkflowState
    from dbchat.tools.results import QueryResult


class SessionLogger:
    """Handles logging for a dbchat session."""

    def __init__(self, log_root: Path, run_id: Optional[str] = None):
        """Initialize session logger.

        Args:
            log_root: Base log directory (e.g. ``.dbchat``)
            run_id: Optional run ID (generated if not provided)
        """
        self.log_root = log_root
        self.run_id = run_id or datetime.now().strftime("%Y%m%d_%H%M%S")

        # Create logs directory
        self.log_dir = log_root / "runs" / self.run_id
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # Log files
        self.transcript_path = self.log_dir / "transcript.ndjson"
        self.queries_path = self.log_dir / "queries.ndjson"
        self.state_path = self.log_dir / "state.json"

    def log_turn(self, turn: "ConversationTurn") -> None:
        """Log an appended conversation turn.

        Args:
            turn: The turn that was appended
        """
        entry = {
            "ts": turn.timestamp.isoformat(),
            "id": turn.id,
            "role": turn.role,
            "content": turn.content,
        }

        if turn.directive is not None:
            entry["directive"] = turn.directive.kind
        if turn.step_completed:
            entry["step_completed"] = turn.step_completed

        self._append(self.transcript_path, entry)

    def log_query(self, result: "QueryResult", dataset_type: str) -> None:
        """Log an executed query (without its rows).

        Args:
            result: Query result
            dataset_type: Dataset the query ran against
        """
        self._append(
            self.queries_path,
            {
                "ts": datetime.now().isoformat(),
                "dataset": dataset_type,
                "query": result.query,
                "sql": result.sql,
                "success": result.success,
                "row_count": result.row_count,
                "execution_time_ms": result.execution_time_ms,
                "error": result.error,
            },
        )

    def save_state(self, state: "WorkflowState") -> None:
        """Save a workflow state snapshot to disk.

        Args:
            state: Workflow state
        """
        with open(self.state_path, "w") as f:
            f.write(state.model_dump_json(indent=2))

    def get_log_path(self) -> str:
        """Get the path to the log directory.

        Returns:
            Absolute path to log directory
        """
        return str(self.log_dir.absolute())

    def _append(self, path: Path, entry: dict) -> None:
        with open(path, "a") as f:
            f.write(json.dumps(entry, default=str) + "\n")
