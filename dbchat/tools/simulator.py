"""Simulated query execution against the sample dataset catalog."""

import copy
import random
import re
import uuid
from typing import Optional

from dbchat.constants import DEFAULT_ROW_LIMIT, QUERY_HISTORY_LIMIT
from dbchat.datasets import CanonicalQuery, Dataset, TableSchema, get_dataset
from dbchat.errors import UnknownDatasetError
from dbchat.tools.query_matcher import match, match_sql
from dbchat.tools.results import GeneratedSQL, QueryHistoryItem, QueryResult, execution_time_ms
from dbchat.tools.synthesizer import column_kind, synthesize


def execute_natural_language_query(
    dataset_type: str, text: str, rng: Optional[random.Random] = None
) -> QueryResult:
    """Answer a natural language question from a dataset.

    Args:
        dataset_type: Dataset identifier
        text: User's question
        rng: Random source for synthesized results

    Returns:
        Canonical result on a match, otherwise a synthesized one
    """
    try:
        dataset = get_dataset(dataset_type)
    except UnknownDatasetError as e:
        return _failed(text, "", str(e))

    query = match(dataset.queries, text)
    if query is not None:
        return _canonical_result(dataset, query, text)

    generated = generate_sql(dataset_type, text)
    return synthesize(generated.sql, dataset.database_schema, rng=rng, query=text)


def execute_sql_query(
    dataset_type: str, sql: str, rng: Optional[random.Random] = None
) -> QueryResult:
    """Run SQL text against a dataset.

    Args:
        dataset_type: Dataset identifier
        sql: SQL text
        rng: Random source for synthesized results

    Returns:
        Canonical result if the SQL matches a known query, otherwise a synthesized one
    """
    try:
        dataset = get_dataset(dataset_type)
    except UnknownDatasetError as e:
        return _failed("Custom SQL Query", sql, str(e))

    query = match_sql(dataset.queries, sql)
    if query is not None:
        return _canonical_result(dataset, query, "Custom SQL Query", sql=sql)

    return synthesize(sql, dataset.database_schema, rng=rng, query="Custom SQL Query")


def generate_sql(dataset_type: str, text: str) -> GeneratedSQL:
    """Propose SQL for a natural language request.

    Args:
        dataset_type: Dataset identifier
        text: User's request

    Returns:
        GeneratedSQL with the matched query's SQL, or a fallback query
        against the table the request mentions
    """
    try:
        dataset = get_dataset(dataset_type)
    except UnknownDatasetError as e:
        return GeneratedSQL(sql=f"-- {e}", explanation=str(e))

    query = match(dataset.queries, text)
    if query is not None:
        return GeneratedSQL(sql=query.sql, explanation=query.description, query_id=query.id)

    tables = dataset.database_schema.tables
    lowered = text.lower()
    words = set(re.findall(r"\w+", lowered))
    table = next((t for t in tables if t.name.lower() in lowered), tables[0] if tables else None)
    table_name = table.name if table else "records"

    if "how many" in lowered or "count" in words:
        body = f"SELECT COUNT(*) FROM {table_name};"
        explanation = f"Counts rows in {table_name}."
    elif words & {"total", "sum"}:
        column = _first_column(table, ("number", "currency"), "amount")
        body = f"SELECT SUM({column}) AS total FROM {table_name};"
        explanation = f"Calculates the sum of {column} across {table_name}."
    elif words & {"average", "avg"}:
        column = _first_column(table, ("number", "currency"), "amount")
        body = f"SELECT AVG({column}) AS average FROM {table_name};"
        explanation = f"Calculates the average {column} across {table_name}."
    elif words & {"recent", "latest"}:
        column = _first_column(table, ("date",), "created_at")
        body = f"SELECT * FROM {table_name} ORDER BY {column} DESC LIMIT {DEFAULT_ROW_LIMIT};"
        explanation = f"Returns the {DEFAULT_ROW_LIMIT} most recent rows by {column}."
    elif words & {"top", "best"}:
        column = _first_column(table, ("number", "currency"), "value")
        body = f"SELECT * FROM {table_name} ORDER BY {column} DESC LIMIT {DEFAULT_ROW_LIMIT};"
        explanation = f"Returns the top {DEFAULT_ROW_LIMIT} rows by {column}."
    else:
        body = f"SELECT * FROM {table_name} LIMIT {DEFAULT_ROW_LIMIT};"
        explanation = f"Returns a sample of rows from {table_name}."

    return GeneratedSQL(sql=f'-- Generated SQL for: "{text}"\n{body}', explanation=explanation)


def suggested_queries(dataset_type: str, limit: int = 4) -> list[CanonicalQuery]:
    """First few canonical queries of a dataset, for prompts in the UI."""
    try:
        return get_dataset(dataset_type).queries[:limit]
    except UnknownDatasetError:
        return []


def format_execution_time(ms: int) -> str:
    """Format an execution time, e.g. ``"120ms"`` or ``"1.25s"``."""
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000:.2f}s"


class QueryHistory:
    """Most-recent-first list of executed queries."""

    def __init__(self, limit: int = QUERY_HISTORY_LIMIT):
        """Initialize history.

        Args:
            limit: Maximum number of entries kept
        """
        self.limit = limit
        self.items: list[QueryHistoryItem] = []

    def add(self, result: QueryResult, dataset_type: str) -> QueryHistoryItem:
        """Record a result.

        Args:
            result: Executed query result
            dataset_type: Dataset the query ran against

        Returns:
            The new history item
        """
        item = QueryHistoryItem(
            id=uuid.uuid4().hex[:8],
            query=result.query,
            sql=result.sql,
            dataset_type=dataset_type,
            row_count=result.row_count,
            execution_time_ms=result.execution_time_ms,
            success=result.success,
        )
        self.items = [item, *self.items][: self.limit]
        return item

    def clear(self) -> None:
        self.items = []

    def __len__(self) -> int:
        return len(self.items)


def _canonical_result(
    dataset: Dataset, query: CanonicalQuery, text: str, sql: Optional[str] = None
) -> QueryResult:
    rows = copy.deepcopy(dataset.data.get(query.result_key, []))
    return QueryResult(
        success=True,
        query=text,
        sql=sql if sql is not None else query.sql,
        execution_time_ms=execution_time_ms(query.sql),
        row_count=len(rows),
        columns=list(query.columns),
        rows=rows,
    )


def _failed(text: str, sql: str, error: str) -> QueryResult:
    return QueryResult(
        success=False,
        query=text,
        sql=sql,
        execution_time_ms=0,
        row_count=0,
        columns=[],
        rows=[],
        error=error,
    )


def _first_column(table: Optional[TableSchema], kinds: tuple[str, ...], default: str) -> str:
    """Name of the table's first column of one of the given kinds."""
    if table is not None:
        for col in table.columns:
            if column_kind(col.type) in kinds:
                return col.name
    return default
