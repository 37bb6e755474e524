"""Result types shared by the query matcher, synthesizer and simulator."""

import random
import zlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from dbchat.constants import EXECUTION_SPREAD_MS, MIN_EXECUTION_MS
from dbchat.datasets import ColumnSpec


@dataclass
class QueryResult:
    """Result of a simulated query execution."""

    success: bool
    query: str
    sql: str
    execution_time_ms: int
    row_count: int
    columns: list[ColumnSpec]
    rows: list[dict[str, Any]]
    error: Optional[str] = None


@dataclass
class GeneratedSQL:
    """SQL proposed for a natural language request."""

    sql: str
    explanation: str
    query_id: Optional[str] = None


@dataclass
class QueryHistoryItem:
    """Entry in the query history."""

    id: str
    query: str
    sql: str
    dataset_type: str
    row_count: int
    execution_time_ms: int
    success: bool
    executed_at: datetime = field(default_factory=datetime.now)


def execution_time_ms(sql: str) -> int:
    """Simulated execution time, stable for a given SQL text."""
    rng = random.Random(zlib.crc32(sql.encode("utf-8")))
    return MIN_EXECUTION_MS + rng.randrange(EXECUTION_SPREAD_MS)


def column_label(key: str) -> str:
    return key.replace("_", " ").title()
