"""Tests for mock result synthesis."""

from dbchat.datasets import get_dataset
from dbchat.tools.synthesizer import column_kind, row_limit, synthesize


def test_count_query(rng):
    """Test a plain COUNT query yields one count row."""
    result = synthesize("SELECT COUNT(*) FROM orders", rng=rng)

    assert result.success
    assert [c.key for c in result.columns] == ["count"]
    assert result.row_count == 1
    assert 100 <= result.rows[0]["count"] < 10100


def test_sum_and_avg_queries(rng):
    """Test aggregate queries without GROUP BY."""
    total = synthesize("SELECT SUM(total_amount) FROM orders", rng=rng)
    average = synthesize("select avg(price) from products", rng=rng)

    assert [c.key for c in total.columns] == ["total"]
    assert [c.key for c in average.columns] == ["average"]
    assert total.row_count == average.row_count == 1


def test_select_star_known_table(rng):
    """Test SELECT * shapes rows after the table schema."""
    schema = get_dataset("ecommerce").database_schema

    result = synthesize("SELECT * FROM customers LIMIT 5", schema, rng=rng)

    assert [c.key for c in result.columns] == [
        "customer_id", "email", "first_name", "last_name",
        "lifetime_value", "order_count", "created_at",
    ]
    assert result.row_count == 5
    first = result.rows[0]
    assert first["customer_id"] == "customer-1001"
    assert first["email"] == "user1@example.com"
    assert isinstance(first["order_count"], int)


def test_select_star_unknown_table_is_generic(rng):
    """Test SELECT * on a table missing from the schema."""
    schema = get_dataset("ecommerce").database_schema

    result = synthesize("SELECT * FROM invoices", schema, rng=rng)

    assert [c.key for c in result.columns] == ["id", "name", "value", "created_at"]
    assert result.row_count == 10


def test_group_by(rng):
    """Test GROUP BY yields 5-10 labelled groups."""
    result = synthesize("SELECT status, COUNT(*) FROM orders GROUP BY status", rng=rng)

    assert [c.key for c in result.columns] == ["status", "count"]
    assert 5 <= result.row_count <= 10
    assert result.rows[0]["status"] == "Group 1"


def test_group_by_with_sum(rng):
    """Test that SUM is classified before GROUP BY."""
    result = synthesize(
        "SELECT category, SUM(price) FROM products GROUP BY category", rng=rng
    )

    assert [c.key for c in result.columns] == ["total"]
    assert result.row_count == 1


def test_group_by_with_avg(rng):
    """Test that AVG is classified before GROUP BY."""
    result = synthesize(
        "SELECT region, AVG(mrr) FROM accounts GROUP BY region", rng=rng
    )

    assert [c.key for c in result.columns] == ["average"]
    assert result.row_count == 1


def test_default_shape(rng):
    """Test the generic result for unclassified SQL."""
    result = synthesize("SELECT name FROM things WHERE x = 1 LIMIT 3", rng=rng)

    assert [c.key for c in result.columns] == ["id", "name", "value", "created_at"]
    assert result.row_count == 3
    assert [row["id"] for row in result.rows] == [1, 2, 3]


def test_comment_lines_ignored(rng):
    """Test that SQL comments do not affect classification."""
    result = synthesize('-- Generated SQL for: "count(x)"\nSELECT * FROM stuff', rng=rng)

    assert [c.key for c in result.columns] == ["id", "name", "value", "created_at"]


def test_row_limit_clamped():
    """Test LIMIT clamping."""
    assert row_limit("SELECT * FROM t") == 10
    assert row_limit("SELECT * FROM t LIMIT 0") == 1
    assert row_limit("SELECT * FROM t LIMIT 7") == 7
    assert row_limit("SELECT * FROM t LIMIT 500") == 50


def test_column_kind():
    """Test SQL type classification."""
    assert column_kind("INTEGER") == "number"
    assert column_kind("DECIMAL(10,2)") == "currency"
    assert column_kind("TIMESTAMP") == "date"
    assert column_kind("BOOLEAN") == "boolean"
    assert column_kind("VARCHAR(255)") == "string"


def test_query_label_and_timing(rng):
    """Test that the result carries the request and a stable timing."""
    first = synthesize("SELECT 1", rng=rng, query="anything")
    second = synthesize("SELECT 1", rng=rng)

    assert first.query == "anything"
    assert second.query == "SELECT 1"
    assert first.execution_time_ms == second.execution_time_ms
    assert 50 <= first.execution_time_ms < 350
