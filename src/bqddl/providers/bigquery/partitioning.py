"""
Partitioning and clustering clauses
"""

from collections.abc import Iterable

from bqddl.providers.base.formatting import is_present

from .models import PartitioningDescriptor, PartitioningMode

# Fields each partitioning mode needs before it counts as active
REQUIRED_FIELDS: dict[PartitioningMode, tuple[str, ...]] = {
    PartitioningMode.COLUMN: ("column",),
    PartitioningMode.TIME_UNIT: ("column", "unit"),
    PartitioningMode.INGESTION_TIME: (),  # unit defaults to DAY
    PartitioningMode.RANGE: ("start", "end", "interval"),
}


def is_partition_active(descriptor: PartitioningDescriptor) -> bool:
    """
    Check whether partitioning should be emitted live.

    Incomplete descriptors (e.g. a range without an end) are inactive
    rather than invalid; their clause is kept as a comment.
    """
    if descriptor.mode == PartitioningMode.NONE or not descriptor.is_activated:
        return False
    return all(
        is_present(getattr(descriptor, field)) for field in REQUIRED_FIELDS[descriptor.mode]
    )


def resolve_partition_clause(descriptor: PartitioningDescriptor) -> str:
    """Render the PARTITION BY clause, or an empty string"""
    mode = descriptor.mode
    column = descriptor.column

    if mode == PartitioningMode.INGESTION_TIME:
        unit = descriptor.unit or "DAY"
        if unit == "DAY":
            return "PARTITION BY _PARTITIONDATE"
        return f"PARTITION BY TIMESTAMP_TRUNC(_PARTITIONTIME, {unit})"

    if mode == PartitioningMode.NONE or not column:
        return ""

    if mode == PartitioningMode.COLUMN:
        return f"PARTITION BY {column}"

    if mode == PartitioningMode.TIME_UNIT:
        return f"PARTITION BY {descriptor.unit or ''}({column})"

    bounds = ", ".join(
        "" if value is None else str(value)
        for value in (descriptor.start, descriptor.end, descriptor.interval)
    )
    return f"PARTITION BY RANGE_BUCKET({column}, GENERATE_ARRAY({bounds}))"


def resolve_cluster_clause(keys: Iterable[str], activated: bool) -> str:
    """
    Render the CLUSTER BY clause.

    Clustering is suppressed entirely when the owning element is deactivated.
    """
    if not activated:
        return ""
    names = [key for key in keys if is_present(key)]
    if not names:
        return ""
    return f"CLUSTER BY {', '.join(names)}"
