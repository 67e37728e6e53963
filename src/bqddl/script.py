"""
Script generation

Batches provider statements into complete create or alter scripts. The
provider returns bare statements; terminators and separators are added here.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from .config import GeneratorConfig
from .exceptions import HydrationError
from .models import DeltaFile, ModelFile
from .providers.base.formatting import BLOCK_COMMENT_END, BLOCK_COMMENT_START, is_present
from .providers.bigquery import BigQueryDDLProvider, DbData, bigquery_provider
from .providers.bigquery.hydration import (
    hydrate_column,
    hydrate_container,
    hydrate_database,
    hydrate_db_data,
    hydrate_table,
    hydrate_view,
)

logger = logging.getLogger(__name__)


class ScriptResult(BaseModel):
    """Generated script with its individual statements"""

    sql: str  # Combined script
    statements: list[str] = []  # Statements in execution order, without terminators


def join_statements(statements: Iterable[str], config: GeneratorConfig) -> str:
    """
    Join statements into a script.

    Statements that are entirely commented out get no terminator, so a
    reviewer can uncomment them without leaving a stray empty statement.
    """
    rendered = []
    for statement in statements:
        if not statement:
            continue
        if statement.startswith(BLOCK_COMMENT_START) and statement.endswith(BLOCK_COMMENT_END):
            rendered.append(statement)
        else:
            rendered.append(f"{statement}{config.statement_terminator}")
    return config.statement_separator.join(rendered)


def generate_create_script(
    model: ModelFile, provider: BigQueryDDLProvider | None = None
) -> ScriptResult:
    """
    Generate CREATE statements for every dataset, table and view of a model.

    Datasets come first, then their tables, then their views.
    """
    provider = provider or bigquery_provider
    statements: list[str] = []

    for container in model.containers:
        hydrated = hydrate_container(container, model.model_data)
        statements.append(provider.create_database(hydrated.database))
        statements.extend(provider.create_table(table) for table in hydrated.tables)
        statements.extend(provider.create_view(view) for view in hydrated.views)

    return _result(statements, provider.config)


def generate_alter_script(
    delta: DeltaFile, provider: BigQueryDDLProvider | None = None
) -> ScriptResult:
    """
    Generate statements that apply a precomputed delta.

    Drops run first (views, columns, tables, datasets), followed by creates
    and alters from datasets down to views.
    """
    provider = provider or bigquery_provider
    model_data = delta.model_data
    statements: list[str] = []

    def db_data(item: Mapping[str, Any]) -> DbData:
        return hydrate_db_data({"name": item.get("containerName")}, model_data)

    # Drops
    for view in delta.views.deleted:
        name = _field(view, "name", "view")
        statements.append(provider.drop_view(name, db_data(view), bool(view.get("materialized"))))
    for column in delta.columns.deleted:
        table_name = _field(column, "entityName", "column")
        name = _field(column, "name", "column")
        statements.append(provider.drop_column(table_name, name, db_data(column)))
    for entity in delta.entities.deleted:
        statements.append(provider.drop_table(_entity_name(entity), db_data(entity)))
    for container in delta.containers.deleted:
        name = _field(container, "name", "database")
        statements.append(provider.drop_database(name, _project_id(model_data)))

    # Datasets
    for container in delta.containers.added:
        statements.append(provider.create_database(hydrate_database(container, model_data)))
    for container in delta.containers.modified:
        statements.append(provider.alter_database(hydrate_database(container, model_data)))

    # Tables
    for entity in delta.entities.added:
        statements.append(provider.create_table(hydrate_table(entity, db_data=db_data(entity))))
    for entity in delta.entities.modified:
        table = hydrate_table(entity, db_data=db_data(entity))
        statements.append(provider.alter_table_options(table))

    # Columns
    for change in delta.columns.added:
        table_name = _field(change, "entityName", "column")
        column = hydrate_column(_field(change, "column", "column", Mapping))
        statements.append(provider.add_column(table_name, column, db_data(change)))
    for change in delta.columns.type_changed:
        table_name = _field(change, "entityName", "column")
        column = hydrate_column(_field(change, "column", "column", Mapping))
        statements.append(provider.alter_column_type(table_name, column, db_data(change)))
    for change in delta.columns.dropped_not_null:
        table_name = _field(change, "entityName", "column")
        name = _field(change, "name", "column")
        statements.append(provider.alter_column_drop_not_null(table_name, name, db_data(change)))
    for change in delta.columns.description_changed:
        table_name = _field(change, "entityName", "column")
        name = _field(change, "name", "column")
        statements.append(
            provider.alter_column_options(
                table_name, name, change.get("description"), db_data(change)
            )
        )

    # Views
    for view in delta.views.added:
        statements.append(provider.create_view(hydrate_view(view, db_data(view))))
    for view in delta.views.modified:
        statements.append(provider.alter_view(hydrate_view(view, db_data(view))))

    return _result(statements, provider.config)


def _result(statements: list[str], config: GeneratorConfig) -> ScriptResult:
    statements = [statement for statement in statements if statement]
    logger.debug("Generated %d statements", len(statements))
    return ScriptResult(sql=join_statements(statements, config), statements=statements)


def _entity_name(entity: Mapping[str, Any]) -> str:
    name = entity.get("code") or entity.get("collectionName") or entity.get("name")
    if not isinstance(name, str) or not is_present(name):
        raise HydrationError("table", None, "no code, collectionName or name")
    return name


def _project_id(model_data: list[dict[str, Any]]) -> str | None:
    return hydrate_db_data({}, model_data).project_id


def _field(item: Mapping[str, Any], key: str, kind: str, expected: type = str) -> Any:
    """Read a required key of a delta item"""
    value = item.get(key)
    if not isinstance(value, expected) or not is_present(value):
        raise HydrationError(kind, item.get("name"), f"'{key}' is missing or invalid")
    return value
