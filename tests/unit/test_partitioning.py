"""
Unit tests for partitioning and clustering clauses
"""

import pytest

from bqddl.providers.bigquery.models import PartitioningDescriptor, PartitioningMode
from bqddl.providers.bigquery.partitioning import (
    is_partition_active,
    resolve_cluster_clause,
    resolve_partition_clause,
)


class TestPartitionClause:
    """Test PARTITION BY rendering per mode"""

    def test_range(self):
        descriptor = PartitioningDescriptor(
            mode=PartitioningMode.RANGE, column="id", start=0, end=100, interval=10
        )

        clause = resolve_partition_clause(descriptor)
        assert clause == "PARTITION BY RANGE_BUCKET(id, GENERATE_ARRAY(0, 100, 10))"
        assert is_partition_active(descriptor)

    def test_incomplete_range_keeps_blank_bound(self):
        """A range without an end renders with a blank bound and is inactive"""
        descriptor = PartitioningDescriptor(
            mode=PartitioningMode.RANGE, column="id", start=1, end="", interval=2
        )

        clause = resolve_partition_clause(descriptor)
        assert clause == "PARTITION BY RANGE_BUCKET(id, GENERATE_ARRAY(1, , 2))"
        assert not is_partition_active(descriptor)

    def test_range_activity_ignores_column(self):
        """Range activity depends only on its bounds"""
        descriptor = PartitioningDescriptor(
            mode=PartitioningMode.RANGE, start=1, end=10, interval=2
        )

        assert is_partition_active(descriptor)
        assert resolve_partition_clause(descriptor) == ""

    def test_column(self):
        descriptor = PartitioningDescriptor(mode=PartitioningMode.COLUMN, column="created")
        assert resolve_partition_clause(descriptor) == "PARTITION BY created"

    def test_time_unit(self):
        descriptor = PartitioningDescriptor(
            mode=PartitioningMode.TIME_UNIT, column="created", unit="day"
        )

        assert descriptor.unit == "DAY"
        assert resolve_partition_clause(descriptor) == "PARTITION BY DAY(created)"
        assert is_partition_active(descriptor)

    @pytest.mark.parametrize(
        "unit,expected",
        [
            ("DAY", "PARTITION BY _PARTITIONDATE"),
            ("HOUR", "PARTITION BY TIMESTAMP_TRUNC(_PARTITIONTIME, HOUR)"),
        ],
    )
    def test_ingestion_time(self, unit, expected):
        descriptor = PartitioningDescriptor(mode=PartitioningMode.INGESTION_TIME, unit=unit)
        assert resolve_partition_clause(descriptor) == expected

    def test_ingestion_time_defaults_to_day(self):
        descriptor = PartitioningDescriptor(mode=PartitioningMode.INGESTION_TIME)

        assert resolve_partition_clause(descriptor) == "PARTITION BY _PARTITIONDATE"
        assert is_partition_active(descriptor)

    def test_no_partitioning(self):
        descriptor = PartitioningDescriptor()
        assert resolve_partition_clause(descriptor) == ""
        assert not is_partition_active(descriptor)

    def test_missing_column_renders_nothing(self):
        descriptor = PartitioningDescriptor(mode=PartitioningMode.COLUMN)
        assert resolve_partition_clause(descriptor) == ""

    def test_deactivated_key_is_inactive(self):
        descriptor = PartitioningDescriptor(
            mode=PartitioningMode.COLUMN, column="created", is_activated=False
        )
        assert resolve_partition_clause(descriptor) == "PARTITION BY created"
        assert not is_partition_active(descriptor)


class TestClusterClause:
    def test_keys(self):
        assert resolve_cluster_clause(["a", "b"], True) == "CLUSTER BY a, b"

    def test_deactivated_owner(self):
        assert resolve_cluster_clause(["a", "b"], False) == ""

    def test_no_keys(self):
        assert resolve_cluster_clause([], True) == ""

    def test_blank_keys_skipped(self):
        assert resolve_cluster_clause(["a", " "], True) == "CLUSTER BY a"
