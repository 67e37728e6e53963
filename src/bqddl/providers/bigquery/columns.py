"""
Column schema rendering

Renders column types (including nested STRUCT and ARRAY types) and full
column definitions.
"""

from bqddl.exceptions import UnsupportedTypeError
from bqddl.providers.base.formatting import indent

from .models import ColumnMode, ColumnSpec
from .options import COLUMN_OPTIONS, format_inline_options
from .types import DECIMAL_TYPES, LENGTH_TYPES, is_array_type, is_struct_type, lookup_scalar_type


def render_column_type(column: ColumnSpec, tab: str = "  ") -> str:
    """
    Render the type of a column.

    REPEATED columns become ARRAY<...> of their element type; STRUCT/RECORD
    columns render their fields recursively.

    Raises:
        UnsupportedTypeError: If a type tag has no dialect equivalent
    """
    if column.mode == ColumnMode.REPEATED:
        element = column.model_copy(update={"mode": ColumnMode.NULLABLE})
        return f"ARRAY<{render_column_type(element, tab)}>"

    if is_array_type(column.type):
        if column.items is None:
            raise UnsupportedTypeError(f"{column.type} without element type")
        element = column.items.model_copy(update={"mode": ColumnMode.NULLABLE})
        return f"ARRAY<{render_column_type(element, tab)}>"

    if is_struct_type(column.type):
        fields = ",\n".join(render_column_definition(field, tab) for field in column.fields)
        if not fields:
            return "STRUCT<>"
        return f"STRUCT<\n{indent(fields, tab)}\n>"

    dialect_type = lookup_scalar_type(column.type)
    if dialect_type is None:
        raise UnsupportedTypeError(column.type)
    return f"{dialect_type}{_type_parameters(dialect_type, column)}"


def render_column_definition(column: ColumnSpec, tab: str = "  ") -> str:
    """Render `name TYPE[ NOT NULL][ OPTIONS(...)]`"""
    not_null = " NOT NULL" if column.mode == ColumnMode.REQUIRED else ""
    options = format_inline_options({"description": column.description}, COLUMN_OPTIONS)
    options_clause = f" {options}" if options else ""
    return f"{column.name} {render_column_type(column, tab)}{not_null}{options_clause}"


def _type_parameters(dialect_type: str, column: ColumnSpec) -> str:
    if dialect_type in LENGTH_TYPES and column.length is not None:
        return f"({column.length})"
    if dialect_type in DECIMAL_TYPES and column.precision is not None:
        if column.scale is not None:
            return f"({column.precision}, {column.scale})"
        return f"({column.precision})"
    return ""
