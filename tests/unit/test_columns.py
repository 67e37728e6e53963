"""
Unit tests for column schema rendering
"""

import pytest

from bqddl.exceptions import UnsupportedTypeError
from bqddl.providers.bigquery.columns import render_column_definition, render_column_type
from bqddl.providers.bigquery.models import ColumnSpec


class TestScalarColumns:
    def test_required(self):
        column = ColumnSpec(name="id", type="integer", mode="REQUIRED")
        assert render_column_definition(column) == "id INT64 NOT NULL"

    def test_description(self):
        column = ColumnSpec(name="name", type="string", description="Full name")
        assert render_column_definition(column) == 'name STRING OPTIONS(description="Full name")'

    def test_dialect_name_accepted(self):
        assert render_column_type(ColumnSpec(name="f", type="FLOAT64")) == "FLOAT64"

    def test_string_length(self):
        column = ColumnSpec(name="code", type="string", length=3)
        assert render_column_definition(column) == "code STRING(3)"

    def test_numeric_precision_and_scale(self):
        column = ColumnSpec(name="price", type="numeric", precision=12, scale=2)
        assert render_column_type(column) == "NUMERIC(12, 2)"

    def test_unknown_type(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            render_column_type(ColumnSpec(name="id", type="uuid"))

        assert exc_info.value.type_name == "uuid"
        assert "Unsupported column type: 'uuid'" in str(exc_info.value)


class TestNestedColumns:
    """Test STRUCT and ARRAY rendering"""

    def test_repeated(self):
        column = ColumnSpec(name="tags", type="string", mode="REPEATED")
        assert render_column_definition(column) == "tags ARRAY<STRING>"

    def test_struct(self):
        column = ColumnSpec(
            name="address",
            type="record",
            fields=(
                ColumnSpec(name="city", type="string"),
                ColumnSpec(name="zip", type="string", mode="REQUIRED"),
            ),
        )
        assert render_column_definition(column) == (
            "address STRUCT<\n  city STRING,\n  zip STRING NOT NULL\n>"
        )

    def test_struct_in_struct(self):
        column = ColumnSpec(
            name="address",
            type="struct",
            fields=(
                ColumnSpec(name="city", type="string"),
                ColumnSpec(
                    name="geo", type="struct", fields=(ColumnSpec(name="lat", type="float"),)
                ),
            ),
        )
        assert render_column_type(column) == (
            "STRUCT<\n  city STRING,\n  geo STRUCT<\n    lat FLOAT64\n  >\n>"
        )

    def test_repeated_record(self):
        column = ColumnSpec(
            name="items",
            type="record",
            mode="REPEATED",
            fields=(ColumnSpec(name="sku", type="string"),),
        )
        assert render_column_type(column) == "ARRAY<STRUCT<\n  sku STRING\n>>"

    def test_empty_struct(self):
        assert render_column_type(ColumnSpec(name="s", type="record")) == "STRUCT<>"

    def test_array_items(self):
        column = ColumnSpec(
            name="scores",
            type="array",
            items=ColumnSpec(name="scores", type="numeric", precision=10, scale=2),
        )
        assert render_column_definition(column) == "scores ARRAY<NUMERIC(10, 2)>"

    def test_array_without_items(self):
        with pytest.raises(UnsupportedTypeError):
            render_column_type(ColumnSpec(name="scores", type="array"))

    def test_struct_with_unknown_field_type(self):
        column = ColumnSpec(
            name="s", type="record", fields=(ColumnSpec(name="x", type="hstore"),)
        )
        with pytest.raises(UnsupportedTypeError):
            render_column_type(column)
