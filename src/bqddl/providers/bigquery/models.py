"""
BigQuery Models

Normalized spec records consumed by the statement assembler. Hydration
builds these from the raw model JSON; they are immutable for the duration
of a generation call.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColumnMode(StrEnum):
    """Column nullability mode"""

    NULLABLE = "NULLABLE"
    REQUIRED = "REQUIRED"
    REPEATED = "REPEATED"


class PartitioningMode(StrEnum):
    """How a table or materialized view is partitioned"""

    NONE = "none"
    COLUMN = "column"
    TIME_UNIT = "time-unit"
    INGESTION_TIME = "ingestion-time"
    RANGE = "range"


class TableType(StrEnum):
    NATIVE = "native"
    EXTERNAL = "external"


class SpecModel(BaseModel):
    """Common configuration for spec records"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class DbData(SpecModel):
    """Qualifiers of the dataset that owns a table or view"""

    project_id: Optional[str] = Field(None, alias="projectId")
    database_name: Optional[str] = Field(None, alias="databaseName")


class Label(SpecModel):
    key: str
    value: str = ""


class DatabaseSpec(SpecModel):
    """Dataset (schema) definition"""

    name: str
    friendly_name: Optional[str] = Field(None, alias="friendlyName")
    description: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    default_expiration: Optional[float] = Field(None, alias="defaultExpiration")  # days
    customer_encryption_key: Optional[str] = Field(None, alias="customerEncryptionKey")
    labels: tuple[Label, ...] = ()
    if_not_exists: bool = Field(False, alias="ifNotExists")
    is_activated: bool = Field(True, alias="isActivated")


class ColumnSpec(SpecModel):
    """Column definition, possibly nested"""

    name: str
    type: str
    mode: ColumnMode = ColumnMode.NULLABLE
    description: Optional[str] = None
    is_activated: bool = Field(True, alias="isActivated")
    fields: tuple["ColumnSpec", ...] = ()  # STRUCT/RECORD members
    items: Optional["ColumnSpec"] = None  # ARRAY element
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None


class PartitioningDescriptor(SpecModel):
    """Partitioning settings; activity is derived, never stored"""

    mode: PartitioningMode = PartitioningMode.NONE
    column: Optional[str] = None
    unit: Optional[str] = None  # HOUR, DAY, MONTH or YEAR
    start: Optional[int] = None
    end: Optional[int] = None
    interval: Optional[int] = None
    is_activated: bool = Field(True, alias="isActivated")  # partitioning key activation

    @field_validator("start", "end", "interval", "column", "unit", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("unit")
    @classmethod
    def _upper_unit(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value else value


class ExternalTableOptions(SpecModel):
    """External data source options; only fields allowed for `format` are set"""

    format: Optional[str] = None
    uris: tuple[str, ...] = ()
    decimal_target_types: tuple[str, ...] = ()
    require_hive_partition_filter: Optional[bool] = None
    hive_partition_uri_prefix: Optional[str] = None
    reference_file_schema_uri: Optional[str] = None
    enable_logical_types: Optional[bool] = None
    allow_quoted_newlines: Optional[bool] = None
    allow_jagged_rows: Optional[bool] = None
    quote: Optional[str] = None
    skip_leading_rows: Optional[int] = None
    preserve_ascii_control_characters: Optional[bool] = None
    null_marker: Optional[str] = None
    field_delimiter: Optional[str] = None
    encoding: Optional[str] = None
    ignore_unknown_values: Optional[bool] = None
    compression: Optional[str] = None
    max_bad_records: Optional[int] = None
    projection_fields: Optional[str] = None
    sheet_range: Optional[str] = None
    json_extension: Optional[str] = None
    enable_list_inference: Optional[bool] = None
    enum_as_string: Optional[bool] = None
    bigtable_options: Optional[str] = None  # JSON document


class TableSpec(SpecModel):
    """Table definition"""

    name: str
    db_data: DbData = Field(default_factory=DbData, alias="dbData")
    columns: tuple[ColumnSpec, ...] = ()
    partitioning: PartitioningDescriptor = Field(default_factory=PartitioningDescriptor)
    partitioning_filter_required: bool = Field(False, alias="partitioningFilterRequired")
    clustering_key: tuple[str, ...] = Field((), alias="clusteringKey")
    table_type: TableType = Field(TableType.NATIVE, alias="tableType")
    temporary: bool = False
    or_replace: bool = Field(False, alias="orReplace")
    if_not_exists: bool = Field(False, alias="ifNotExists")
    external_options: Optional[ExternalTableOptions] = Field(None, alias="externalOptions")
    autodetect: bool = False
    customer_encryption_key: Optional[str] = Field(None, alias="customerEncryptionKey")
    labels: tuple[Label, ...] = ()
    description: Optional[str] = None
    friendly_name: Optional[str] = Field(None, alias="friendlyName")
    expiration: Optional[datetime] = None
    is_activated: bool = Field(True, alias="isActivated")

    @property
    def is_external(self) -> bool:
        return self.table_type == TableType.EXTERNAL


class ViewColumn(SpecModel):
    """Projected column of a view"""

    name: str
    table_name: Optional[str] = Field(None, alias="tableName")
    alias: Optional[str] = None
    is_activated: bool = Field(True, alias="isActivated")

    @property
    def output_name(self) -> str:
        return self.alias or self.name


class ViewSpec(SpecModel):
    """Standard or materialized view definition"""

    name: str
    db_data: DbData = Field(default_factory=DbData, alias="dbData")
    table_name: Optional[str] = Field(None, alias="tableName")
    keys: tuple[ViewColumn, ...] = ()
    materialized: bool = False
    or_replace: bool = Field(False, alias="orReplace")
    if_not_exists: bool = Field(False, alias="ifNotExists")
    select_statement: Optional[str] = Field(None, alias="selectStatement")
    labels: tuple[Label, ...] = ()
    description: Optional[str] = None
    friendly_name: Optional[str] = Field(None, alias="friendlyName")
    expiration: Optional[datetime] = None
    partitioning: PartitioningDescriptor = Field(default_factory=PartitioningDescriptor)
    clustering_key: tuple[str, ...] = Field((), alias="clusteringKey")
    refresh_interval: Optional[float] = Field(None, alias="refreshInterval")  # minutes
    enable_refresh: bool = Field(False, alias="enableRefresh")
    is_activated: bool = Field(True, alias="isActivated")
