"""Tests for the query simulator."""

import pytest

from dbchat.datasets import DATASET_REGISTRY, Dataset, get_dataset, list_datasets
from dbchat.tools.results import QueryResult
from dbchat.tools.simulator import (
    QueryHistory,
    execute_natural_language_query,
    execute_sql_query,
    format_execution_time,
    generate_sql,
    suggested_queries,
)


@pytest.fixture
def readings(monkeypatch):
    """Register a one-table dataset with no canonical queries."""
    dataset = Dataset.model_validate({
        "id": "readings",
        "name": "Sensor Readings",
        "database_schema": {
            "name": "sensors",
            "tables": [{
                "name": "readings",
                "columns": [
                    {"name": "id", "type": "UUID"},
                    {"name": "reading", "type": "DECIMAL(10,2)"},
                    {"name": "recorded_at", "type": "TIMESTAMP"},
                ],
            }],
        },
    })
    monkeypatch.setitem(DATASET_REGISTRY, "readings", dataset)
    return "readings"


def test_canonical_hit():
    """Test that a matching question returns the pre-computed rows."""
    result = execute_natural_language_query("ecommerce", "Show me top customers by revenue")

    assert result.success
    assert result.query == "Show me top customers by revenue"
    assert result.row_count == len(result.rows) == 3
    assert result.rows[0]["first_name"] == "Sarah"
    assert [c.key for c in result.columns][:2] == ["first_name", "last_name"]


def test_canonical_rows_are_copies():
    """Test that callers cannot modify the catalog through a result."""
    result = execute_natural_language_query("ecommerce", "top customers")
    result.rows[0]["first_name"] = "Changed"

    again = execute_natural_language_query("ecommerce", "top customers")

    assert again.rows[0]["first_name"] == "Sarah"


def test_miss_synthesizes_result(rng):
    """Test that an unmatched question gets a synthesized result."""
    result = execute_natural_language_query("ecommerce", "count widgets", rng=rng)

    assert result.success
    assert [c.key for c in result.columns] == ["count"]
    assert result.sql.endswith("SELECT COUNT(*) FROM customers;")


def test_unknown_dataset():
    """Test that an unknown dataset fails without raising."""
    result = execute_natural_language_query("nope", "top customers")

    assert not result.success
    assert result.error == "Unknown dataset: nope"
    assert result.rows == []

    assert not execute_sql_query("nope", "SELECT 1").success


def test_sql_hit():
    """Test SQL matching a canonical query."""
    query = get_dataset("ecommerce").queries[1]

    result = execute_sql_query("ecommerce", query.sql.lower())

    assert result.success
    assert result.query == "Custom SQL Query"
    assert result.sql == query.sql.lower()
    assert result.rows[0]["category"] == "Electronics"


def test_sql_miss(rng):
    """Test custom SQL falls back to synthesis."""
    result = execute_sql_query("ecommerce", "SELECT * FROM orders LIMIT 4", rng=rng)

    assert result.success
    assert result.query == "Custom SQL Query"
    assert result.row_count == 4
    assert "order_id" in result.rows[0]


def test_generate_sql_for_match():
    """Test generated SQL for a canonical question."""
    generated = generate_sql("ecommerce", "low inventory")

    assert generated.query_id == "low-inventory"
    assert "stock_quantity < 20" in generated.sql


def test_generate_sql_fallback_uses_mentioned_table():
    """Test fallback SQL picks the table named in the request."""
    generated = generate_sql("saas-analytics", "xyzzy users")

    assert generated.query_id is None
    assert generated.sql.startswith("-- Generated SQL for:")
    assert generated.sql.endswith("SELECT * FROM users LIMIT 10;")


def test_generate_sql_count(readings):
    """Test the count fallback."""
    generated = generate_sql(readings, "How many readings are there?")

    assert generated.sql.endswith("\nSELECT COUNT(*) FROM readings;")


def test_generate_sql_total(readings, rng):
    """Test the sum fallback uses the first numeric column."""
    generated = generate_sql(readings, "total reading")
    result = execute_natural_language_query(readings, "total reading", rng=rng)

    assert generated.sql.endswith("\nSELECT SUM(reading) AS total FROM readings;")
    assert [c.key for c in result.columns] == ["total"]


def test_generate_sql_average(readings, rng):
    """Test the average fallback."""
    generated = generate_sql(readings, "average reading")
    result = execute_natural_language_query(readings, "avg reading", rng=rng)

    assert generated.sql.endswith("\nSELECT AVG(reading) AS average FROM readings;")
    assert [c.key for c in result.columns] == ["average"]


def test_generate_sql_recent(readings, rng):
    """Test the recent fallback orders by the first date column."""
    generated = generate_sql(readings, "latest readings")
    result = execute_natural_language_query(readings, "latest readings", rng=rng)

    assert generated.sql.endswith(
        "\nSELECT * FROM readings ORDER BY recorded_at DESC LIMIT 10;"
    )
    assert [c.key for c in result.columns] == ["id", "reading", "recorded_at"]
    assert result.row_count == 10


def test_generate_sql_top(readings):
    """Test the top fallback orders by the first numeric column."""
    generated = generate_sql(readings, "best readings")

    assert generated.sql.endswith("\nSELECT * FROM readings ORDER BY reading DESC LIMIT 10;")


def test_generate_sql_matches_whole_words(readings):
    """Test that keywords inside longer words do not pick a branch."""
    generated = generate_sql(readings, "list readings per account from the stop")

    assert generated.sql.endswith("\nSELECT * FROM readings LIMIT 10;")


def test_suggested_queries():
    """Test suggested queries per dataset."""
    assert [q.id for q in suggested_queries("ecommerce", limit=2)] == [
        "top-customers-ltv",
        "revenue-by-category",
    ]
    assert suggested_queries("nope") == []


def test_every_result_key_has_data():
    """Test that every canonical query points at rows in its dataset."""
    for dataset in list_datasets():
        for query in dataset.queries:
            assert query.result_key in dataset.data, query.id


def test_format_execution_time():
    """Test execution time formatting."""
    assert format_execution_time(120) == "120ms"
    assert format_execution_time(1250) == "1.25s"


def test_history_most_recent_first_and_capped():
    """Test history order and size limit."""
    history = QueryHistory(limit=3)
    for i in range(5):
        history.add(
            QueryResult(
                success=True, query=f"q{i}", sql="SELECT 1", execution_time_ms=60,
                row_count=1, columns=[], rows=[],
            ),
            "ecommerce",
        )

    assert len(history) == 3
    assert [item.query for item in history.items] == ["q4", "q3", "q2"]

    history.clear()
    assert len(history) == 0
