"""Fabrication of plausible result sets for SQL with no canonical match.

Classification is a handful of substring checks on the lower-cased SQL,
tried in this order:

1. ``count(`` without ``group by``: one row with a ``count`` column
2. ``sum(`` or ``avg(``: one ``total``/``average`` row
3. ``select * from <known table>``: rows shaped like the table schema
4. ``group by <col>``: 5-10 labelled groups with counts (and totals if summed)
5. anything else: a generic ``id, name, value, created_at`` result

This is deliberately not a SQL parser.
"""

import random
import re
from datetime import date, timedelta
from typing import Any, Optional

from dbchat.constants import (
    DEFAULT_ROW_LIMIT,
    MAX_ROW_LIMIT,
    MIN_ROW_LIMIT,
    SAMPLE_NAMES,
    SAMPLE_STATUSES,
    SQL_TYPE_KINDS,
)
from dbchat.datasets import ColumnSpec, DatabaseSchema, TableSchema
from dbchat.tools.results import QueryResult, column_label, execution_time_ms

_GROUP_BY = re.compile(r"\bgroup\s+by\s+([\w.\"]+)")
_SELECT_STAR = re.compile(r"select\s+\*\s+from\s+([\w.\"]+)")
_LIMIT = re.compile(r"\blimit\s+(\d+)")
_COMMENT_LINE = re.compile(r"^\s*--.*$", re.MULTILINE)


def synthesize(
    sql: str,
    schema: Optional[DatabaseSchema] = None,
    rng: Optional[random.Random] = None,
    query: Optional[str] = None,
) -> QueryResult:
    """Build a shape-appropriate mock result for a SQL statement.

    Args:
        sql: SQL text to classify
        schema: Schema used to resolve ``SELECT *`` tables
        rng: Random source (a fresh one if not given)
        query: Original request text, defaults to the SQL

    Returns:
        Successful QueryResult with at least one column
    """
    rng = rng or random.Random()
    lowered = _COMMENT_LINE.sub("", sql).lower()
    group_by = _GROUP_BY.search(lowered)

    if "count(" in lowered and not group_by:
        columns = [ColumnSpec(key="count", label="Count", type="number")]
        rows = [{"count": rng.randrange(100, 10100)}]

    elif "sum(" in lowered or "avg(" in lowered:
        key = "total" if "sum(" in lowered else "average"
        columns = [ColumnSpec(key=key, label=column_label(key), type="number")]
        rows = [{key: round(rng.uniform(1000, 100000), 2)}]

    else:
        table = _select_star_table(lowered, schema)
        if table is not None:
            columns, rows = _table_rows(table, row_limit(lowered), rng)
        elif group_by:
            columns, rows = _group_rows(group_by.group(1), "sum(" in lowered, rng)
        else:
            columns, rows = _generic_rows(row_limit(lowered), rng)

    return QueryResult(
        success=True,
        query=query if query is not None else sql,
        sql=sql,
        execution_time_ms=execution_time_ms(sql),
        row_count=len(rows),
        columns=columns,
        rows=rows,
    )


def row_limit(sql: str) -> int:
    """Row count requested by a ``LIMIT`` clause, clamped to [1, 50]."""
    found = _LIMIT.search(sql.lower())
    if not found:
        return DEFAULT_ROW_LIMIT
    return max(MIN_ROW_LIMIT, min(MAX_ROW_LIMIT, int(found.group(1))))


def column_kind(sql_type: str) -> str:
    """Map a column type (SQL or display type) to a synthesized value kind."""
    lowered = sql_type.strip().lower()
    for prefixes, kind in SQL_TYPE_KINDS:
        if lowered.startswith(prefixes):
            return kind
    return "string"


def _select_star_table(sql: str, schema: Optional[DatabaseSchema]) -> Optional[TableSchema]:
    if schema is None:
        return None
    found = _SELECT_STAR.match(sql.strip())
    if not found:
        return None
    return schema.table(found.group(1))


def _table_rows(
    table: TableSchema, limit: int, rng: random.Random
) -> tuple[list[ColumnSpec], list[dict[str, Any]]]:
    columns = []
    for col in table.columns:
        kind = column_kind(col.type)
        columns.append(
            ColumnSpec(
                key=col.name,
                label=column_label(col.name),
                type=kind if kind in ("number", "currency", "date") else "string",
            )
        )

    rows = [
        {col.name: _cell(col.name, column_kind(col.type), i, rng) for col in table.columns}
        for i in range(limit)
    ]
    return columns, rows


def _group_rows(
    column: str, with_total: bool, rng: random.Random
) -> tuple[list[ColumnSpec], list[dict[str, Any]]]:
    key = column.split(".")[-1].strip('"')
    columns = [
        ColumnSpec(key=key, label=column_label(key)),
        ColumnSpec(key="count", label="Count", type="number"),
    ]
    if with_total:
        columns.append(ColumnSpec(key="total", label="Total", type="number"))

    rows = []
    for i in range(1, rng.randint(5, 10) + 1):
        row: dict[str, Any] = {key: f"Group {i}", "count": rng.randint(10, 1000)}
        if with_total:
            row["total"] = round(rng.uniform(1000, 50000), 2)
        rows.append(row)
    return columns, rows


def _generic_rows(limit: int, rng: random.Random) -> tuple[list[ColumnSpec], list[dict[str, Any]]]:
    columns = [
        ColumnSpec(key="id", label="Id", type="number"),
        ColumnSpec(key="name", label="Name"),
        ColumnSpec(key="value", label="Value", type="number"),
        ColumnSpec(key="created_at", label="Created At", type="date"),
    ]
    rows = [
        {
            "id": i + 1,
            "name": rng.choice(SAMPLE_NAMES),
            "value": rng.randint(100, 10000),
            "created_at": _recent_date(rng),
        }
        for i in range(limit)
    ]
    return columns, rows


def _cell(name: str, kind: str, index: int, rng: random.Random) -> Any:
    """Synthesize one cell from the column's kind, then its name."""
    if kind == "number":
        return rng.randint(1, 1000)
    if kind == "currency":
        return f"{rng.uniform(10, 1000):.2f}"
    if kind == "date":
        return _recent_date(rng)
    if kind == "boolean":
        return rng.random() < 0.5

    lowered = name.lower()
    if lowered == "id" or lowered.endswith("_id"):
        prefix = lowered.removesuffix("_id") or "id"
        return f"{prefix}-{1001 + index}"
    if "email" in lowered:
        return f"user{index + 1}@example.com"
    if lowered == "name" or lowered.endswith("_name"):
        return rng.choice(SAMPLE_NAMES)
    if "status" in lowered:
        return rng.choice(SAMPLE_STATUSES)
    return f"{column_label(name)} {index + 1}"


def _recent_date(rng: random.Random) -> str:
    return (date.today() - timedelta(days=rng.randrange(365))).isoformat()
