"""
BigQuery DDL Provider

Assembles CREATE/ALTER/DROP statements for datasets, tables, columns and
views from normalized spec records. Statements are returned without a
trailing terminator; batching them into a script is left to the caller.
"""

import logging
from typing import Any

from bqddl.providers.base.ddl_provider import DDLProvider
from bqddl.providers.base.formatting import is_present

from .columns import render_column_definition, render_column_type
from .external import external_option_specs
from .models import (
    ColumnSpec,
    DatabaseSpec,
    DbData,
    PartitioningDescriptor,
    PartitioningMode,
    TableSpec,
    ViewColumn,
    ViewSpec,
)
from .options import (
    COLUMN_OPTIONS,
    CONTAINER_OPTIONS,
    TABLE_OPTIONS,
    VIEW_OPTIONS,
    format_inline_options,
    format_options,
)
from .partitioning import is_partition_active, resolve_cluster_clause, resolve_partition_clause

logger = logging.getLogger(__name__)


class BigQueryDDLProvider(DDLProvider):
    """BigQuery DDL statement assembler"""

    # Database statements
    def create_database(self, database: DatabaseSpec) -> str:
        name = self.full_name(database.project_id, database.name)
        if_not_exists = " IF NOT EXISTS" if database.if_not_exists else ""
        options = self._container_options(database)
        statement = f"CREATE SCHEMA{if_not_exists} {name}{options}"
        return self.comment(statement, database.is_activated)

    def alter_database(self, database: DatabaseSpec) -> str:
        options = self._container_options(database)
        if not options:
            return ""
        name = self.full_name(database.project_id, database.name)
        return f"ALTER SCHEMA {name} SET{options}"

    def drop_database(self, database_name: str, project_id: str | None = None) -> str:
        return f"DROP SCHEMA IF EXISTS {self.full_name(project_id, database_name)}"

    # Table statements
    def create_table(self, table: TableSpec) -> str:
        """
        Generate CREATE TABLE.

        Deactivated columns follow the activated ones inside a single block
        comment. A deactivated table is rendered without inner comments and
        commented out as a whole.
        """
        name = self._object_name(table.name, table.db_data)
        is_activated = table.is_activated
        is_external = table.is_external

        or_replace = "OR REPLACE " if table.or_replace else ""
        temporary = "TEMPORARY " if table.temporary else ""
        external = "EXTERNAL " if is_external else ""
        if_not_exists = "IF NOT EXISTS " if table.if_not_exists else ""

        if is_external and table.autodetect:
            column_definitions = ""
        else:
            column_definitions = self._column_definitions(table.columns, is_activated)

        partitions = ""
        clustering = ""
        if not is_external:
            partitions = self._partition_statement(name, table.partitioning, is_activated)
            cluster_clause = resolve_cluster_clause(table.clustering_key, is_activated)
            clustering = f"\n{cluster_clause}" if cluster_clause else ""
        elif table.clustering_key or table.partitioning.mode != PartitioningMode.NONE:
            logger.debug("Skipping partitioning and clustering of external table %s", name)

        options = self._table_options(table, include_external=True)

        statement = (
            f"CREATE {or_replace}{temporary}{external}TABLE {if_not_exists}{name}"
            f"{column_definitions}{partitions}{clustering}{options}"
        )
        return self.comment(statement, is_activated)

    def alter_table_options(self, table: TableSpec) -> str:
        options = self._table_options(table, include_external=False)
        if not options:
            return ""
        name = self._object_name(table.name, table.db_data)
        return f"ALTER TABLE {name} SET{options}"

    def drop_table(self, table_name: str, db_data: DbData | None = None) -> str:
        return f"DROP TABLE IF EXISTS {self._object_name(table_name, db_data)}"

    # Column statements
    def add_column(self, table_name: str, column: ColumnSpec, db_data: DbData | None = None) -> str:
        name = self._object_name(table_name, db_data)
        definition = render_column_definition(column, self.config.indent)
        statement = f"ALTER TABLE {name} ADD COLUMN IF NOT EXISTS {definition}"
        return self.comment(statement, column.is_activated)

    def drop_column(
        self, table_name: str, column_name: str, db_data: DbData | None = None
    ) -> str:
        name = self._object_name(table_name, db_data)
        return f"ALTER TABLE {name} DROP COLUMN IF EXISTS {column_name}"

    def alter_column_type(
        self, table_name: str, column: ColumnSpec, db_data: DbData | None = None
    ) -> str:
        name = self._object_name(table_name, db_data)
        column_type = render_column_type(column, self.config.indent)
        return f"ALTER TABLE {name} ALTER COLUMN {column.name} SET DATA TYPE {column_type}"

    def alter_column_drop_not_null(
        self, table_name: str, column_name: str, db_data: DbData | None = None
    ) -> str:
        name = self._object_name(table_name, db_data)
        return f"ALTER TABLE {name} ALTER COLUMN {column_name} DROP NOT NULL"

    def alter_column_options(
        self,
        table_name: str,
        column_name: str,
        description: str | None,
        db_data: DbData | None = None,
    ) -> str:
        options = format_inline_options({"description": description}, COLUMN_OPTIONS)
        if not options:
            return ""
        name = self._object_name(table_name, db_data)
        return f"ALTER TABLE {name} ALTER COLUMN {column_name} SET {options}"

    # View statements
    def create_view(self, view: ViewSpec) -> str:
        """
        Generate CREATE VIEW.

        When every projected column is deactivated (or the view itself is),
        the whole statement is commented out, since the view would be empty.
        """
        name = self._object_name(view.name, view.db_data)
        all_deactivated = bool(view.keys) and all(not key.is_activated for key in view.keys)
        is_live = view.is_activated and not all_deactivated

        materialized = "MATERIALIZED " if view.materialized else ""
        or_replace = "OR REPLACE " if view.or_replace and not view.materialized else ""
        if_not_exists = "IF NOT EXISTS " if view.if_not_exists else ""

        columns = ""
        partitions = ""
        clustering = ""
        if view.materialized:
            partitions = self._partition_statement(name, view.partitioning, is_live)
            cluster_clause = resolve_cluster_clause(view.clustering_key, view.is_activated)
            clustering = f"\n{cluster_clause}" if cluster_clause else ""
        else:
            columns = self._view_column_list(view.keys, is_live)

        if is_present(view.select_statement):
            select = view.select_statement.strip()
        else:
            select = self._view_select_statement(view, is_live)

        statement = (
            f"CREATE {or_replace}{materialized}VIEW {if_not_exists}{name}"
            f"{columns}{partitions}{clustering}{self._view_options(view)}\nAS {select}"
        )
        if not is_live:
            logger.debug("View %s has no active columns; commenting it out", name)
            return self.comment(statement, False)
        return statement

    def alter_view(self, view: ViewSpec) -> str:
        options = self._view_options(view)
        if not options:
            return ""
        materialized = "MATERIALIZED " if view.materialized else ""
        name = self._object_name(view.name, view.db_data)
        return f"ALTER {materialized}VIEW {name} SET{options}"

    def drop_view(
        self, view_name: str, db_data: DbData | None = None, materialized: bool = False
    ) -> str:
        kind = "MATERIALIZED VIEW" if materialized else "VIEW"
        return f"DROP {kind} IF EXISTS {self._object_name(view_name, db_data)}"

    # ====================
    # CLAUSE HELPERS
    # ====================

    def _object_name(self, object_name: str, db_data: DbData | None) -> str:
        db_data = db_data or DbData()
        return self.full_name(db_data.project_id, db_data.database_name, object_name)

    def _column_definitions(self, columns: tuple[ColumnSpec, ...], is_activated: bool) -> str:
        activated = [
            render_column_definition(column, self.config.indent)
            for column in columns
            if column.is_activated
        ]
        deactivated = [
            render_column_definition(column, self.config.indent)
            for column in columns
            if not column.is_activated
        ]
        if not activated and not deactivated:
            return ""

        if not is_activated:
            # The whole statement gets commented; avoid nested comments
            body = ",\n".join(activated + deactivated)
        else:
            blocks = []
            if activated:
                blocks.append(",\n".join(activated))
            if deactivated:
                blocks.append(self.comment(",\n".join(deactivated), False))
            body = "\n".join(blocks)
        return f" (\n{self.tab(body)}\n)"

    def _partition_statement(
        self, name: str, descriptor: PartitioningDescriptor, is_activated: bool
    ) -> str:
        clause = resolve_partition_clause(descriptor)
        if not clause:
            return ""
        if is_activated:
            is_active = is_partition_active(descriptor)
            if not is_active:
                logger.debug("Partitioning of %s is incomplete or deactivated", name)
            clause = self.comment(clause, is_active, inline=True)
        return f"\n{clause}"

    def _container_options(self, database: DatabaseSpec) -> str:
        values = {
            "friendly_name": database.friendly_name,
            "description": database.description,
            "default_expiration": database.default_expiration,
            "customer_encryption_key": database.customer_encryption_key,
            "labels": database.labels,
        }
        return format_options(values, CONTAINER_OPTIONS, self.config.indent)

    def _table_options(self, table: TableSpec, include_external: bool) -> str:
        is_partitioned = table.partitioning.mode != PartitioningMode.NONE
        values: dict[str, Any] = {
            "friendly_name": table.friendly_name,
            "description": table.description,
            "expiration": table.expiration,
            "partitioning_filter_required": (
                table.partitioning_filter_required and is_partitioned and not table.is_external
            ),
            "customer_encryption_key": table.customer_encryption_key,
            "labels": table.labels,
        }
        specs = TABLE_OPTIONS
        if include_external and table.is_external and table.external_options is not None:
            values.update(table.external_options.model_dump())
            specs = TABLE_OPTIONS + external_option_specs(table.external_options)
        return format_options(values, specs, self.config.indent)

    def _view_options(self, view: ViewSpec) -> str:
        values: dict[str, Any] = {
            "friendly_name": view.friendly_name,
            "description": view.description,
            "expiration": view.expiration,
            "labels": view.labels,
        }
        if view.materialized:
            values["enable_refresh"] = view.enable_refresh
            if view.enable_refresh:
                values["refresh_interval"] = view.refresh_interval
        return format_options(values, VIEW_OPTIONS, self.config.indent)

    def _view_column_list(self, keys: tuple[ViewColumn, ...], is_live: bool) -> str:
        if is_live:
            activated = [key.output_name for key in keys if key.is_activated]
            deactivated = [key.output_name for key in keys if not key.is_activated]
            column_list = ", ".join(activated)
            if deactivated:
                column_list += " " + self.comment(", ".join(deactivated), False, inline=True)
        else:
            column_list = ", ".join(key.output_name for key in keys)
        return f" ({column_list})" if column_list else ""

    def _view_select_statement(self, view: ViewSpec, is_live: bool) -> str:
        tables: list[str] = []
        activated: list[str] = []
        deactivated: list[str] = []

        for key in view.keys:
            table_name = key.table_name or view.table_name
            if table_name and table_name not in tables:
                tables.append(table_name)
            projection = f"{table_name}.{key.name}" if table_name else key.name
            if key.alias:
                projection = f"{projection} AS {key.alias}"
            if key.is_activated or not is_live:
                activated.append(projection)
            else:
                deactivated.append(projection)

        if not tables and view.table_name:
            tables.append(view.table_name)

        select_list = ", ".join(activated) or "*"
        if deactivated:
            select_list += " " + self.comment(", ".join(deactivated), False, inline=True)

        select = f"SELECT {select_list}"
        if tables:
            sources = ", ".join(self._object_name(table, view.db_data) for table in tables)
            select += f"\nFROM {sources}"
        return select
