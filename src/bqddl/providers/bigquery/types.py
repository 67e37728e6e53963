"""
BigQuery type table

Maps source type names from the model (and dialect names themselves) to
BigQuery standard SQL type names.
"""

STRUCT_TYPES = frozenset({"struct", "record"})
ARRAY_TYPES = frozenset({"array"})

# Types that accept a (length) parameter
LENGTH_TYPES = frozenset({"STRING", "BYTES"})

# Types that accept (precision[, scale]) parameters
DECIMAL_TYPES = frozenset({"NUMERIC", "BIGNUMERIC"})

SCALAR_TYPES: dict[str, str] = {
    # source name: dialect name
    "string": "STRING",
    "bytes": "BYTES",
    "integer": "INT64",
    "int": "INT64",
    "int64": "INT64",
    "numeric": "NUMERIC",
    "decimal": "NUMERIC",
    "bignumeric": "BIGNUMERIC",
    "bigdecimal": "BIGNUMERIC",
    "float": "FLOAT64",
    "float64": "FLOAT64",
    "boolean": "BOOL",
    "bool": "BOOL",
    "timestamp": "TIMESTAMP",
    "date": "DATE",
    "time": "TIME",
    "datetime": "DATETIME",
    "geography": "GEOGRAPHY",
    "interval": "INTERVAL",
    "json": "JSON",
}


def lookup_scalar_type(type_name: str) -> str | None:
    """Return the dialect name of a scalar type, or None if unknown"""
    return SCALAR_TYPES.get(type_name.strip().lower())


def is_struct_type(type_name: str) -> bool:
    return type_name.strip().lower() in STRUCT_TYPES


def is_array_type(type_name: str) -> bool:
    return type_name.strip().lower() in ARRAY_TYPES
