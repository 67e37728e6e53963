"""
Pytest configuration and shared fixtures
"""

import pytest
import sqlglot
from sqlglot.errors import ParseError

from bqddl.providers.bigquery import BigQueryDDLProvider, DbData
from tests.utils import ModelBuilder


@pytest.fixture
def temp_workspace(tmp_path):
    """Create a temporary workspace directory"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def provider():
    """BigQuery provider with default settings"""
    return BigQueryDDLProvider()


@pytest.fixture
def db_data():
    """Qualifiers for objects in proj.sales"""
    return DbData(project_id="proj", database_name="sales")


@pytest.fixture
def builder():
    """Raw model builder"""
    return ModelBuilder()


@pytest.fixture
def sample_model(builder):
    """One dataset with a table and a view over it"""
    return builder.model(
        builder.container(
            "sales",
            entities=[
                builder.entity(
                    "orders",
                    [
                        builder.column("id", "integer", dataTypeMode="Required"),
                        builder.column("total", "numeric", description="Order total"),
                    ],
                )
            ],
            views=[builder.view("v_orders", [builder.view_key("id", "orders")])],
        )
    )


# SQL Validation Helpers
def validate_sql(sql: str, dialect: str = "bigquery") -> tuple[bool, str]:
    """
    Validate SQL syntax using SQLGlot.

    Args:
        sql: SQL string to validate
        dialect: SQL dialect (default: bigquery)

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        parsed = sqlglot.parse_one(sql, read=dialect)
    except ParseError as e:
        return False, f"SQLGlot parsing error: {e}"

    if parsed is None:
        return False, "SQLGlot returned None (invalid SQL)"
    return True, "SQL is valid"


def assert_valid_sql(sql: str, dialect: str = "bigquery") -> None:
    """
    Assert that SQL is syntactically valid.

    Raises AssertionError if SQL is invalid.
    """
    is_valid, error_msg = validate_sql(sql, dialect)
    assert is_valid, f"Invalid SQL:\n{sql}\n\nError: {error_msg}"


@pytest.fixture
def assert_sql():
    """Fixture that provides SQL assertion function"""
    return assert_valid_sql
