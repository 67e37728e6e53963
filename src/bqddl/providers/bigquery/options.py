"""
OPTIONS(...) clause formatting

Each entity kind declares an ordered table of recognized options. Rendering
walks that table, so option order never depends on input order, and skips
every value that is absent according to `is_present`.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, NamedTuple

from bqddl.providers.base.formatting import escape_string, indent, is_present


class OptionKind(StrEnum):
    """How an option value is rendered"""

    STRING = "string"
    NUMBER = "number"
    TIMESTAMP = "timestamp"
    LABELS = "labels"
    FLAG = "flag"  # rendered as `=true` only when set
    BOOLEAN = "boolean"
    STRING_LIST = "string_list"
    JSON = "json"


class OptionSpec(NamedTuple):
    field: str  # Key in the input record
    option: str  # Option name in the generated SQL
    kind: OptionKind


CONTAINER_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("friendly_name", "friendly_name", OptionKind.STRING),
    OptionSpec("description", "description", OptionKind.STRING),
    OptionSpec("default_expiration", "default_table_expiration_days", OptionKind.NUMBER),
    OptionSpec("customer_encryption_key", "default_kms_key_name", OptionKind.STRING),
    OptionSpec("labels", "labels", OptionKind.LABELS),
)

TABLE_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("friendly_name", "friendly_name", OptionKind.STRING),
    OptionSpec("description", "description", OptionKind.STRING),
    OptionSpec("expiration", "expiration_timestamp", OptionKind.TIMESTAMP),
    OptionSpec("partitioning_filter_required", "require_partition_filter", OptionKind.FLAG),
    OptionSpec("customer_encryption_key", "kms_key_name", OptionKind.STRING),
    OptionSpec("labels", "labels", OptionKind.LABELS),
)

VIEW_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("friendly_name", "friendly_name", OptionKind.STRING),
    OptionSpec("description", "description", OptionKind.STRING),
    OptionSpec("expiration", "expiration_timestamp", OptionKind.TIMESTAMP),
    OptionSpec("labels", "labels", OptionKind.LABELS),
    OptionSpec("enable_refresh", "enable_refresh", OptionKind.BOOLEAN),
    OptionSpec("refresh_interval", "refresh_interval_minutes", OptionKind.NUMBER),
)

COLUMN_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("description", "description", OptionKind.STRING),
)


def render_options(
    values: Mapping[str, Any], specs: Iterable[OptionSpec], tab: str = "  "
) -> list[str]:
    """Render every present option of `values` in `specs` order"""
    rendered = []
    for spec in specs:
        option = render_option(spec, values.get(spec.field), tab)
        if option:
            rendered.append(option)
    return rendered


def format_options(
    values: Mapping[str, Any], specs: Iterable[OptionSpec], tab: str = "  "
) -> str:
    """
    Build a multi-line OPTIONS clause, prefixed with a newline.

    Returns:
        The clause, or an empty string when no option is present
    """
    options = render_options(values, specs, tab)
    if not options:
        return ""
    return "\nOPTIONS(\n" + indent(",\n".join(options), tab) + "\n)"


def format_inline_options(values: Mapping[str, Any], specs: Iterable[OptionSpec]) -> str:
    """Build a single-line OPTIONS clause, or an empty string"""
    options = render_options(values, specs)
    if not options:
        return ""
    return f"OPTIONS({', '.join(options)})"


def render_option(spec: OptionSpec, value: Any, tab: str = "  ") -> str:
    """Render `name=value` for one option, or an empty string if absent"""
    if not is_present(value):
        return ""

    kind = spec.kind
    if kind == OptionKind.FLAG:
        return f"{spec.option}=true" if value else ""
    if kind == OptionKind.BOOLEAN:
        return f"{spec.option}={'true' if value else 'false'}"
    if kind == OptionKind.NUMBER:
        return f"{spec.option}={_number_literal(value)}"
    if kind == OptionKind.TIMESTAMP:
        return f'{spec.option}=TIMESTAMP "{_timestamp_literal(value)}"'
    if kind == OptionKind.STRING_LIST:
        items = ", ".join(_string_literal(item) for item in value if is_present(item))
        return f"{spec.option}=[{items}]" if items else ""
    if kind == OptionKind.LABELS:
        labels = _label_literals(value)
        if not labels:
            return ""
        return f"{spec.option}=[\n" + indent(",\n".join(labels), tab) + "\n]"
    if kind == OptionKind.JSON:
        if not isinstance(value, str):
            value = json.dumps(value, sort_keys=True)
        return f"{spec.option}={_string_literal(value)}"
    return f"{spec.option}={_string_literal(str(value))}"


def _string_literal(value: str) -> str:
    return f'"{escape_string(value)}"'


def _number_literal(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _timestamp_literal(value: Any) -> str:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        value = datetime.fromtimestamp(value / 1000, tz=UTC)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


def _label_literals(labels: Sequence[Any]) -> list[str]:
    literals = []
    for label in labels:
        if isinstance(label, Mapping):
            key, value = label.get("key"), label.get("value")
        else:
            key, value = label.key, label.value
        if not is_present(key):
            continue
        literals.append(f"({_string_literal(key)}, {_string_literal(value or '')})")
    return literals
