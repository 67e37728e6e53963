"""
bqddl

Python library and CLI that generates BigQuery DDL from schema models.
"""

__version__ = "0.1.0"

from .config import GeneratorConfig
from .exceptions import BqDDLError, HydrationError, ModelFileError, UnsupportedTypeError
from .providers.bigquery import (
    BigQueryDDLProvider,
    ColumnSpec,
    DatabaseSpec,
    DbData,
    PartitioningDescriptor,
    TableSpec,
    ViewColumn,
    ViewSpec,
)
from .script import generate_alter_script, generate_create_script
from .storage import read_delta, read_model

__all__ = [
    "__version__",
    "GeneratorConfig",
    "BqDDLError",
    "HydrationError",
    "ModelFileError",
    "UnsupportedTypeError",
    "BigQueryDDLProvider",
    "ColumnSpec",
    "DatabaseSpec",
    "DbData",
    "PartitioningDescriptor",
    "TableSpec",
    "ViewColumn",
    "ViewSpec",
    "generate_create_script",
    "generate_alter_script",
    "read_model",
    "read_delta",
]
