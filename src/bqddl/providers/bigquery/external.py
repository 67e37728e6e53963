"""
External table formats

Each external data format recognizes its own subset of options. The table
below is the single source of truth both for picking options out of the raw
model (hydration) and for their order in the OPTIONS clause.
"""

from enum import StrEnum

from .models import ExternalTableOptions
from .options import OptionKind, OptionSpec


class ExternalFormat(StrEnum):
    AVRO = "AVRO"
    CSV = "CSV"
    DATASTORE_BACKUP = "DATASTORE_BACKUP"
    GOOGLE_SHEETS = "GOOGLE_SHEETS"
    JSON = "JSON"
    ORC = "ORC"
    PARQUET = "PARQUET"
    CLOUD_BIGTABLE = "CLOUD_BIGTABLE"


COMMON_KEYS: tuple[str, ...] = ("format", "uris", "decimal_target_types")

FORMAT_KEYS: dict[ExternalFormat, tuple[str, ...]] = {
    ExternalFormat.AVRO: (
        "require_hive_partition_filter",
        "hive_partition_uri_prefix",
        "reference_file_schema_uri",
        "enable_logical_types",
    ),
    ExternalFormat.CSV: (
        "allow_quoted_newlines",
        "allow_jagged_rows",
        "quote",
        "skip_leading_rows",
        "preserve_ascii_control_characters",
        "null_marker",
        "field_delimiter",
        "encoding",
        "ignore_unknown_values",
        "compression",
        "max_bad_records",
        "require_hive_partition_filter",
        "hive_partition_uri_prefix",
    ),
    ExternalFormat.DATASTORE_BACKUP: ("projection_fields",),
    ExternalFormat.GOOGLE_SHEETS: ("max_bad_records", "sheet_range"),
    ExternalFormat.JSON: (
        "ignore_unknown_values",
        "compression",
        "max_bad_records",
        "require_hive_partition_filter",
        "hive_partition_uri_prefix",
        "json_extension",
    ),
    ExternalFormat.ORC: (
        "require_hive_partition_filter",
        "hive_partition_uri_prefix",
        "reference_file_schema_uri",
    ),
    ExternalFormat.PARQUET: (
        "require_hive_partition_filter",
        "hive_partition_uri_prefix",
        "reference_file_schema_uri",
        "enable_list_inference",
        "enum_as_string",
    ),
    ExternalFormat.CLOUD_BIGTABLE: ("bigtable_options",),
}

OPTION_KINDS: dict[str, OptionKind] = {
    "format": OptionKind.STRING,
    "uris": OptionKind.STRING_LIST,
    "decimal_target_types": OptionKind.STRING_LIST,
    "require_hive_partition_filter": OptionKind.BOOLEAN,
    "hive_partition_uri_prefix": OptionKind.STRING,
    "reference_file_schema_uri": OptionKind.STRING,
    "enable_logical_types": OptionKind.BOOLEAN,
    "allow_quoted_newlines": OptionKind.BOOLEAN,
    "allow_jagged_rows": OptionKind.BOOLEAN,
    "quote": OptionKind.STRING,
    "skip_leading_rows": OptionKind.NUMBER,
    "preserve_ascii_control_characters": OptionKind.BOOLEAN,
    "null_marker": OptionKind.STRING,
    "field_delimiter": OptionKind.STRING,
    "encoding": OptionKind.STRING,
    "ignore_unknown_values": OptionKind.BOOLEAN,
    "compression": OptionKind.STRING,
    "max_bad_records": OptionKind.NUMBER,
    "projection_fields": OptionKind.STRING,
    "sheet_range": OptionKind.STRING,
    "json_extension": OptionKind.STRING,
    "enable_list_inference": OptionKind.BOOLEAN,
    "enum_as_string": OptionKind.BOOLEAN,
    "bigtable_options": OptionKind.JSON,
}


def parse_format(value: str | None) -> ExternalFormat | None:
    """Return the external format for a raw format name, if recognized"""
    if not value:
        return None
    try:
        return ExternalFormat(value.strip().upper())
    except ValueError:
        return None


def allowed_keys(external_format: ExternalFormat | None) -> tuple[str, ...]:
    """Ordered option keys recognized for a format"""
    if external_format is None:
        return ()
    return COMMON_KEYS + FORMAT_KEYS[external_format]


def external_option_specs(options: ExternalTableOptions | None) -> tuple[OptionSpec, ...]:
    """Option table for the format declared by `options`"""
    if options is None:
        return ()
    keys = allowed_keys(parse_format(options.format))
    return tuple(OptionSpec(key, key, OPTION_KINDS[key]) for key in keys)
