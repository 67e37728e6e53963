"""
Unit tests for CREATE SCHEMA and CREATE TABLE generation

Verifies statement skeletons, column ordering under deactivation,
partitioning, clustering and external tables.
"""

import pytest

from bqddl.config import GeneratorConfig
from bqddl.exceptions import UnsupportedTypeError
from bqddl.providers.bigquery import (
    BigQueryDDLProvider,
    ColumnSpec,
    DatabaseSpec,
    DbData,
    ExternalTableOptions,
    Label,
    PartitioningDescriptor,
    PartitioningMode,
    TableSpec,
    TableType,
)


class TestCreateDatabase:
    """Test CREATE SCHEMA generation"""

    def test_minimal(self, provider, assert_sql):
        database = DatabaseSpec(name="sales", project_id="proj", if_not_exists=True)

        sql = provider.create_database(database)
        assert sql == "CREATE SCHEMA IF NOT EXISTS proj.sales"
        assert_sql(sql)

    def test_options(self, provider):
        database = DatabaseSpec(
            name="sales",
            description="Sales data",
            default_expiration=30,
            labels=(Label(key="env", value="prod"),),
        )

        assert provider.create_database(database) == (
            "CREATE SCHEMA sales\n"
            "OPTIONS(\n"
            '  description="Sales data",\n'
            "  default_table_expiration_days=30,\n"
            "  labels=[\n"
            '    ("env", "prod")\n'
            "  ]\n"
            ")"
        )

    def test_deactivated(self, provider):
        database = DatabaseSpec(name="sales", is_activated=False)
        assert provider.create_database(database) == "/*\nCREATE SCHEMA sales\n*/"


class TestCreateTable:
    """Test CREATE TABLE generation"""

    def test_simple_table(self, provider, assert_sql):
        table = TableSpec(
            name="t1",
            if_not_exists=True,
            columns=(
                ColumnSpec(name="id", type="INT64", mode="REQUIRED"),
                ColumnSpec(name="name", type="STRING"),
            ),
        )

        sql = provider.create_table(table)
        assert sql == "CREATE TABLE IF NOT EXISTS t1 (\n  id INT64 NOT NULL,\n  name STRING\n)"
        assert_sql(sql)

    def test_deactivated_columns_trail_in_one_comment(self, provider):
        """Activated columns keep their order; deactivated ones follow"""
        table = TableSpec(
            name="t",
            columns=(
                ColumnSpec(name="a", type="string"),
                ColumnSpec(name="b", type="string", is_activated=False),
                ColumnSpec(name="c", type="string"),
            ),
        )

        assert provider.create_table(table) == (
            "CREATE TABLE t (\n  a STRING,\n  c STRING\n  /*\n  b STRING\n  */\n)"
        )

    def test_deactivated_table_has_no_nested_comments(self, provider):
        table = TableSpec(
            name="t",
            is_activated=False,
            columns=(
                ColumnSpec(name="a", type="string"),
                ColumnSpec(name="b", type="string", is_activated=False),
            ),
        )

        sql = provider.create_table(table)
        assert sql == "/*\nCREATE TABLE t (\n  a STRING,\n  b STRING\n)\n*/"
        assert sql.count("/*") == 1

    def test_partitioning_clustering_and_options(self, provider, assert_sql):
        table = TableSpec(
            name="events",
            db_data=DbData(project_id="p", database_name="d"),
            columns=(
                ColumnSpec(name="event_date", type="date"),
                ColumnSpec(name="user_id", type="integer"),
            ),
            partitioning=PartitioningDescriptor(
                mode=PartitioningMode.COLUMN, column="event_date"
            ),
            clustering_key=("user_id",),
            partitioning_filter_required=True,
            description="Events",
        )

        sql = provider.create_table(table)
        assert sql == (
            "CREATE TABLE p.d.events (\n"
            "  event_date DATE,\n"
            "  user_id INT64\n"
            ")\n"
            "PARTITION BY event_date\n"
            "CLUSTER BY user_id\n"
            "OPTIONS(\n"
            '  description="Events",\n'
            "  require_partition_filter=true\n"
            ")"
        )
        assert_sql(sql)

    def test_incomplete_range_is_commented(self, provider):
        table = TableSpec(
            name="t",
            columns=(ColumnSpec(name="id", type="integer"),),
            partitioning=PartitioningDescriptor(
                mode=PartitioningMode.RANGE, column="id", start=0, interval=10
            ),
        )

        sql = provider.create_table(table)
        assert sql.endswith("\n/* PARTITION BY RANGE_BUCKET(id, GENERATE_ARRAY(0, , 10)) */")

    def test_deactivated_partition_key_is_commented(self, provider):
        table = TableSpec(
            name="t",
            columns=(ColumnSpec(name="created", type="date"),),
            partitioning=PartitioningDescriptor(
                mode=PartitioningMode.COLUMN, column="created", is_activated=False
            ),
        )

        assert provider.create_table(table).endswith("\n/* PARTITION BY created */")

    def test_ingestion_time_partitioning(self, provider):
        table = TableSpec(
            name="t",
            columns=(ColumnSpec(name="a", type="string"),),
            partitioning=PartitioningDescriptor(mode=PartitioningMode.INGESTION_TIME),
        )

        assert provider.create_table(table) == (
            "CREATE TABLE t (\n  a STRING\n)\nPARTITION BY _PARTITIONDATE"
        )

    def test_ingestion_time_by_hour(self, provider):
        table = TableSpec(
            name="t",
            columns=(ColumnSpec(name="a", type="string"),),
            partitioning=PartitioningDescriptor(
                mode=PartitioningMode.INGESTION_TIME, unit="HOUR"
            ),
        )

        assert provider.create_table(table).endswith(
            "\nPARTITION BY TIMESTAMP_TRUNC(_PARTITIONTIME, HOUR)"
        )

    def test_filter_requires_partitioning(self, provider):
        table = TableSpec(
            name="t",
            columns=(ColumnSpec(name="a", type="string"),),
            partitioning_filter_required=True,
        )

        assert "require_partition_filter" not in provider.create_table(table)

    def test_clustering_suppressed_for_deactivated_table(self, provider):
        table = TableSpec(
            name="t",
            is_activated=False,
            columns=(ColumnSpec(name="a", type="string"),),
            clustering_key=("a",),
        )

        assert "CLUSTER BY" not in provider.create_table(table)

    def test_modifiers(self, provider):
        table = TableSpec(
            name="t",
            or_replace=True,
            temporary=True,
            columns=(ColumnSpec(name="a", type="string"),),
        )

        assert provider.create_table(table) == (
            "CREATE OR REPLACE TEMPORARY TABLE t (\n  a STRING\n)"
        )

    def test_no_columns(self, provider):
        assert provider.create_table(TableSpec(name="t")) == "CREATE TABLE t"

    def test_quoted_identifiers(self):
        provider = BigQueryDDLProvider(GeneratorConfig(quote_identifiers=True))
        table = TableSpec(
            name="t",
            db_data=DbData(project_id="p", database_name="d"),
            columns=(ColumnSpec(name="a", type="string"),),
        )

        assert provider.create_table(table).startswith("CREATE TABLE `p.d.t` (")

    def test_unsupported_type(self, provider):
        table = TableSpec(name="t", columns=(ColumnSpec(name="a", type="money"),))

        with pytest.raises(UnsupportedTypeError):
            provider.create_table(table)


class TestCreateExternalTable:
    """Test CREATE EXTERNAL TABLE generation"""

    def test_csv_options(self, provider):
        table = TableSpec(
            name="ext",
            table_type=TableType.EXTERNAL,
            columns=(ColumnSpec(name="a", type="string"),),
            external_options=ExternalTableOptions(
                format="CSV", uris=("gs://b/f.csv",), skip_leading_rows=1
            ),
            clustering_key=("a",),
        )

        assert provider.create_table(table) == (
            "CREATE EXTERNAL TABLE ext (\n"
            "  a STRING\n"
            ")\n"
            "OPTIONS(\n"
            '  format="CSV",\n'
            '  uris=["gs://b/f.csv"],\n'
            "  skip_leading_rows=1\n"
            ")"
        )

    def test_autodetect_omits_columns(self, provider):
        table = TableSpec(
            name="ext",
            table_type=TableType.EXTERNAL,
            autodetect=True,
            columns=(ColumnSpec(name="a", type="string"),),
            external_options=ExternalTableOptions(format="PARQUET", uris=("gs://b/*",)),
        )

        assert provider.create_table(table) == (
            'CREATE EXTERNAL TABLE ext\nOPTIONS(\n  format="PARQUET",\n  uris=["gs://b/*"]\n)'
        )

    def test_external_skips_partitioning(self, provider):
        table = TableSpec(
            name="ext",
            table_type=TableType.EXTERNAL,
            columns=(ColumnSpec(name="d", type="date"),),
            partitioning=PartitioningDescriptor(mode=PartitioningMode.COLUMN, column="d"),
            partitioning_filter_required=True,
        )

        sql = provider.create_table(table)
        assert "PARTITION BY" not in sql
        assert "require_partition_filter" not in sql
