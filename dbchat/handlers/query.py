"""Query handler for running and rendering simulated queries."""

from typing import Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from dbchat.tools.results import QueryResult
from dbchat.tools.simulator import (
    QueryHistory,
    execute_natural_language_query,
    execute_sql_query,
    format_execution_time,
    generate_sql,
)
from dbchat.utils.logging import SessionLogger


class QueryHandler:
    """Runs queries against a sample dataset and renders the results."""

    def __init__(
        self,
        dataset_type: str,
        console: Console,
        logger: Optional[SessionLogger] = None,
    ):
        """Initialize query handler.

        Args:
            dataset_type: Dataset to query
            console: Rich console for output
            logger: Optional session logger
        """
        self.dataset_type = dataset_type
        self.console = console
        self.logger = logger
        self.history = QueryHistory()

    def handle(self, text: str, is_sql: bool = False) -> QueryResult:
        """Run a query, record it and render the result.

        Args:
            text: Natural language question or SQL text
            is_sql: Whether the text is SQL

        Returns:
            Query result
        """
        if is_sql:
            result = execute_sql_query(self.dataset_type, text)
        else:
            generated = generate_sql(self.dataset_type, text)
            self.console.print(f"[dim]{generated.explanation}[/dim]")
            self.console.print(Syntax(generated.sql, "sql", theme="monokai"))
            result = execute_natural_language_query(self.dataset_type, text)

        self.history.add(result, self.dataset_type)
        if self.logger:
            self.logger.log_query(result, self.dataset_type)

        self.render(result)
        return result

    def render(self, result: QueryResult) -> None:
        """Render a query result as a table."""
        if not result.success:
            self.console.print(f"[red]Error: {result.error}[/red]")
            return

        table = Table(
            title=f"{result.row_count} rows in {format_execution_time(result.execution_time_ms)}",
            title_justify="left",
        )
        for column in result.columns:
            justify = "right" if column.type in ("number", "currency", "percentage") else "left"
            table.add_column(column.label, justify=justify)

        for row in result.rows:
            table.add_row(*(self._format_cell(row.get(c.key), c.type) for c in result.columns))

        self.console.print(table)

    def render_history(self) -> None:
        """Render the queries run so far, most recent first."""
        if not self.history.items:
            self.console.print("[dim]No queries yet[/dim]")
            return

        table = Table(title="Query history", title_justify="left")
        table.add_column("Query")
        table.add_column("Rows", justify="right")
        table.add_column("Time", justify="right")

        for item in self.history.items:
            query = Text(item.query, style="" if item.success else "red")
            table.add_row(query, str(item.row_count), format_execution_time(item.execution_time_ms))

        self.console.print(table)

    def _format_cell(self, value, column_type: str) -> str:
        if value is None:
            return "-"
        if column_type == "currency":
            try:
                return f"${float(value):,.2f}"
            except (TypeError, ValueError):
                return str(value)
        if column_type == "percentage":
            return f"{value}%"
        return str(value)
