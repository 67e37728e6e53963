"""BigQuery provider package exports."""

from .models import (
    ColumnMode,
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
from .provider import BigQueryDDLProvider

bigquery_provider = BigQueryDDLProvider()

__all__ = [
    "BigQueryDDLProvider",
    "bigquery_provider",
    "ColumnMode",
    "ColumnSpec",
    "DatabaseSpec",
    "DbData",
    "ExternalTableOptions",
    "Label",
    "PartitioningDescriptor",
    "PartitioningMode",
    "TableSpec",
    "TableType",
    "ViewColumn",
    "ViewSpec",
]
