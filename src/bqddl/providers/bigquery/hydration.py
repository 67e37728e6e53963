"""
Hydration of raw model data

Maps the camelCase objects of the modeling tool's JSON into the flat spec
records the provider consumes: field renames, defaults, and picking the
format-specific subset of external table options.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bqddl.exceptions import HydrationError
from bqddl.providers.base.formatting import is_present

from .external import COMMON_KEYS, FORMAT_KEYS, ExternalFormat, parse_format
from .models import (
    ColumnSpec,
    DatabaseSpec,
    DbData,
    ExternalTableOptions,
    Label,
    PartitioningDescriptor,
    PartitioningMode,
    TableSpec,
    TableType,
    ViewColumn,
    ViewSpec,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PARTITIONING_MODES: dict[str, PartitioningMode] = {
    "no partitioning": PartitioningMode.NONE,
    "by column": PartitioningMode.COLUMN,
    "by time-unit column": PartitioningMode.TIME_UNIT,
    "by ingestion time": PartitioningMode.INGESTION_TIME,
    "by integer-range": PartitioningMode.RANGE,
}

TIME_UNITS: dict[str, str] = {
    "by hour": "HOUR",
    "by day": "DAY",
    "by month": "MONTH",
    "by year": "YEAR",
}

# Raw option keys that are consumed by hydration itself
_HOST_OPTION_KEYS = frozenset({"autodetect", "bigtableUri"})


@dataclass
class HydratedContainer:
    """A dataset with the tables and views it owns"""

    database: DatabaseSpec
    tables: list[TableSpec] = field(default_factory=list)
    views: list[ViewSpec] = field(default_factory=list)


def hydrate_database(
    container: Mapping[str, Any], model_data: Sequence[Mapping[str, Any]] | None = None
) -> DatabaseSpec:
    """Hydrate a dataset from container data"""
    name = container.get("name")
    expiration = container.get("defaultExpiration")
    encryption_key = container.get("customerEncryptionKey")
    data = {
        "name": name,
        "friendly_name": container.get("businessName"),
        "description": container.get("description"),
        "project_id": _project_id(model_data),
        "default_expiration": expiration if container.get("enableTableExpiration") else None,
        "customer_encryption_key": (
            encryption_key if container.get("encryption") == "Customer-managed" else None
        ),
        "labels": _labels(container.get("labels")),
        "if_not_exists": bool(container.get("ifNotExist")),
        "is_activated": container.get("isActivated", True) is not False,
    }
    return _validate(DatabaseSpec, "database", name, _blank_to_none(data))


def hydrate_db_data(
    container: Mapping[str, Any], model_data: Sequence[Mapping[str, Any]] | None = None
) -> DbData:
    name = container.get("name")
    data = {"project_id": _project_id(model_data), "database_name": name}
    return _validate(DbData, "dataset reference", name, _blank_to_none(data))


def hydrate_column(definition: Mapping[str, Any]) -> ColumnSpec:
    """Hydrate a column, recursing into struct properties and array items"""
    name = definition.get("name")
    mode = definition.get("dataTypeMode") or definition.get("mode") or "Nullable"
    data = {
        "name": name,
        "type": definition.get("type"),
        "mode": str(mode).upper(),
        "description": definition.get("refDescription") or definition.get("description"),
        "is_activated": definition.get("isActivated", True) is not False,
        "fields": [hydrate_column(child) for child in _properties(definition.get("properties"))],
        "items": _items(definition.get("items"), name),
        "length": definition.get("length"),
        "precision": definition.get("precision"),
        "scale": definition.get("scale"),
    }
    return _validate(ColumnSpec, "column", name, _blank_to_none(data))


def hydrate_partitioning(data: Mapping[str, Any]) -> PartitioningDescriptor:
    """Hydrate partitioning settings of a table or materialized view"""
    raw_mode = str(data.get("partitioning") or "").strip()
    mode = PARTITIONING_MODES.get(raw_mode.lower(), raw_mode or PartitioningMode.NONE)
    raw_unit = str(data.get("partitioningType") or "").strip()
    values: dict[str, Any] = {
        "mode": mode,
        "unit": TIME_UNITS.get(raw_unit.lower(), raw_unit),
    }

    if mode == PartitioningMode.RANGE:
        range_options = data.get("rangeOptions") or {}
        if isinstance(range_options, Sequence):
            range_options = range_options[0] if range_options else {}
        column, is_activated = _key_reference(range_options.get("rangePartitionKey"))
        values.update(
            column=column,
            is_activated=is_activated,
            start=range_options.get("rangeStart"),
            end=range_options.get("rangeEnd"),
            interval=range_options.get("rangeinterval", range_options.get("rangeInterval")),
        )
    elif mode in (PartitioningMode.TIME_UNIT, PartitioningMode.COLUMN):
        column, is_activated = _key_reference(
            data.get("timeUnitpartitionKey") or data.get("partitionKey")
        )
        values.update(column=column, is_activated=is_activated)

    return _validate(PartitioningDescriptor, "partitioning", None, values)


def pick_external_options(table_options: Mapping[str, Any] | None) -> ExternalTableOptions | None:
    """
    Select the options recognized by the declared external format.

    Options not allowed for the format are dropped.
    """
    if not table_options:
        return None
    external_format = parse_format(table_options.get("format"))
    if external_format is None:
        if table_options.get("format"):
            logger.debug("Ignoring unknown external format %s", table_options.get("format"))
        return None

    if external_format == ExternalFormat.CLOUD_BIGTABLE:
        uris = [table_options.get("bigtableUri")]
    else:
        uris = [_unwrap(uri, "uri") for uri in table_options.get("uris") or []]
    decimal_target_types = [
        _unwrap(value, "value") for value in table_options.get("decimal_target_types") or []
    ]

    picked: dict[str, Any] = {
        "format": external_format.value,
        "uris": [uri for uri in uris if is_present(uri)],
        "decimal_target_types": [value for value in decimal_target_types if is_present(value)],
    }
    allowed = FORMAT_KEYS[external_format]
    for key in allowed:
        if is_present(table_options.get(key)):
            picked[key] = table_options[key]

    dropped = sorted(
        key
        for key in table_options
        if key not in allowed and key not in COMMON_KEYS and key not in _HOST_OPTION_KEYS
    )
    if dropped:
        logger.debug("Dropping options not supported by %s: %s", external_format, dropped)

    return _validate(ExternalTableOptions, "external options", external_format.value, picked)


def hydrate_table(
    entity: Mapping[str, Any],
    columns: Sequence[ColumnSpec] | None = None,
    db_data: DbData | None = None,
) -> TableSpec:
    """
    Hydrate a table from entity data.

    Args:
        entity: Raw entity (table) data
        columns: Hydrated columns; taken from the entity's `columns` if omitted
        db_data: Dataset qualifiers
    """
    name = entity.get("code") or entity.get("collectionName")
    if columns is None:
        columns = [hydrate_column(column) for column in entity.get("columns") or []]
    table_options = entity.get("tableOptions") or {}
    title = entity.get("title")
    encryption = entity.get("encryption")
    data = {
        "name": name,
        "db_data": db_data or DbData(),
        "columns": list(columns),
        "partitioning": hydrate_partitioning(entity),
        "partitioning_filter_required": bool(entity.get("partitioningFilterRequired")),
        "clustering_key": _key_names(entity.get("clusteringKey")),
        "table_type": (
            TableType.EXTERNAL
            if str(entity.get("tableType", "")).lower() == TableType.EXTERNAL
            else TableType.NATIVE
        ),
        "temporary": bool(entity.get("temporary")),
        "or_replace": bool(entity.get("orReplace")),
        "if_not_exists": bool(entity.get("ifNotExist")),
        "external_options": pick_external_options(table_options),
        "autodetect": bool(table_options.get("autodetect")),
        "customer_encryption_key": (
            entity.get("customerEncryptionKey")
            if encryption in (True, "Customer-managed")
            else None
        ),
        "labels": _labels(entity.get("labels")),
        "description": entity.get("description"),
        "friendly_name": title if title and title != entity.get("collectionName") else None,
        "expiration": entity.get("expiration"),
        "is_activated": entity.get("isActivated", True) is not False,
    }
    return _validate(TableSpec, "table", name, _blank_to_none(data))


def hydrate_view_column(key: Mapping[str, Any]) -> ViewColumn:
    data = {
        "name": key.get("name"),
        "table_name": key.get("entityName") or key.get("tableName"),
        "alias": key.get("alias"),
        "is_activated": key.get("isActivated", True) is not False,
    }
    return _validate(ViewColumn, "view column", key.get("name"), _blank_to_none(data))


def hydrate_view(view: Mapping[str, Any], db_data: DbData | None = None) -> ViewSpec:
    """Hydrate a standard or materialized view"""
    name = view.get("name") or view.get("code")
    data = {
        "name": name,
        "db_data": db_data or DbData(),
        "table_name": view.get("tableName"),
        "keys": [hydrate_view_column(key) for key in view.get("keys") or []],
        "materialized": bool(view.get("materialized")),
        "or_replace": bool(view.get("orReplace")),
        "if_not_exists": bool(view.get("ifNotExist")),
        "select_statement": view.get("selectStatement"),
        "labels": _labels(view.get("labels")),
        "description": view.get("description"),
        "friendly_name": view.get("businessName"),
        "expiration": view.get("expiration"),
        "partitioning": hydrate_partitioning(view),
        "clustering_key": _key_names(view.get("clusteringKey")),
        "refresh_interval": view.get("refreshInterval"),
        "enable_refresh": bool(view.get("enableRefresh")),
        "is_activated": view.get("isActivated", True) is not False,
    }
    return _validate(ViewSpec, "view", name, _blank_to_none(data))


def hydrate_container(
    container: Mapping[str, Any], model_data: Sequence[Mapping[str, Any]] | None = None
) -> HydratedContainer:
    """Hydrate a dataset together with its entities and views"""
    db_data = hydrate_db_data(container, model_data)
    entities = container.get("entities") or []
    views = container.get("views") or []
    return HydratedContainer(
        database=hydrate_database(container, model_data),
        tables=[hydrate_table(entity, db_data=db_data) for entity in entities],
        views=[hydrate_view(view, db_data) for view in views],
    )


# ====================
# HELPERS
# ====================


def _validate(model: type[ModelT], kind: str, name: str | None, data: Mapping[str, Any]) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise HydrationError(kind, name, str(e)) from e


def _blank_to_none(data: dict[str, Any]) -> dict[str, Any]:
    """Replace blank strings with None so optional fields stay unset"""
    return {
        key: None if isinstance(value, str) and not value.strip() else value
        for key, value in data.items()
    }


def _project_id(model_data: Sequence[Mapping[str, Any]] | Mapping[str, Any] | None) -> str | None:
    if not model_data:
        return None
    if isinstance(model_data, Mapping):
        return model_data.get("projectID") or None
    return model_data[0].get("projectID") or None


def _labels(raw_labels: Any) -> list[Label]:
    if not isinstance(raw_labels, list):
        return []
    labels = []
    for label in raw_labels:
        if not isinstance(label, Mapping):
            continue
        key = label.get("labelKey", label.get("key"))
        if not is_present(key):
            continue
        value = label.get("labelValue", label.get("value"))
        labels.append(Label(key=str(key), value="" if value is None else str(value)))
    return labels


def _unwrap(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return value


def _key_reference(raw_keys: Any) -> tuple[str | None, bool]:
    """Name and activation of the first referenced key column"""
    if not raw_keys:
        return None, True
    first = raw_keys[0] if isinstance(raw_keys, list) else raw_keys
    if isinstance(first, Mapping):
        return first.get("name"), first.get("isActivated", True) is not False
    return str(first), True


def _key_names(raw_keys: Any) -> list[str]:
    if not isinstance(raw_keys, list):
        return []
    names = [_unwrap(key, "name") for key in raw_keys]
    return [name for name in names if is_present(name)]


def _properties(raw_properties: Any) -> list[Mapping[str, Any]]:
    """Nested fields given either as a list or as a name -> schema mapping"""
    if isinstance(raw_properties, Mapping):
        return [{"name": name, **schema} for name, schema in raw_properties.items()]
    if isinstance(raw_properties, list):
        return [child for child in raw_properties if isinstance(child, Mapping)]
    return []


def _items(raw_items: Any, parent_name: str | None) -> ColumnSpec | None:
    if isinstance(raw_items, list):
        raw_items = raw_items[0] if raw_items else None
    if not isinstance(raw_items, Mapping):
        return None
    return hydrate_column({"name": parent_name, **raw_items})
