"""Eligibility checks and partition resolution for compaction targets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acidkeeper.errors import (
    AmbiguousPartitionSpec,
    InvalidPartitionSpec,
    PartitionRequired,
    UnsupportedTarget,
)

if TYPE_CHECKING:
    from acidkeeper.engine.base import TableCatalog
    from acidkeeper.models import TargetTable

logger = logging.getLogger(__name__)


class EligibilityValidator:
    """Checks that a table can be compacted and resolves the partition to compact."""

    def __init__(self, catalog: TableCatalog) -> None:
        """Initialize the validator.

        Args:
            catalog: Catalog used to enumerate partitions.
        """
        self._catalog = catalog

    def resolve(self, table: TargetTable, partition_spec: dict[str, str] | None) -> str | None:
        """Validate the target and resolve its partition spec.

        Args:
            table: Table snapshot.
            partition_spec: Optional, possibly partial, partition spec.

        Returns:
            The name of the single matching partition, or None for an
            unpartitioned table.

        Raises:
            UnsupportedTarget: If the table is not transactional.
            PartitionRequired: If the table is partitioned and no spec is given.
            InvalidPartitionSpec: If the spec matches no partition.
            AmbiguousPartitionSpec: If the spec matches more than one partition.
        """
        if not table.is_transactional:
            raise UnsupportedTarget(table.database, table.table_name)

        if partition_spec is None:
            # A partitioned table is never compacted as a whole.
            if table.is_partitioned:
                raise PartitionRequired
            return None

        if not table.is_partitioned:
            raise InvalidPartitionSpec(f"{table.full_name} is not partitioned")

        partitions = self._catalog.get_partitions(table, partition_spec)
        if len(partitions) > 1:
            raise AmbiguousPartitionSpec(len(partitions))
        if not partitions:
            raise InvalidPartitionSpec

        logger.info("Resolved partition spec %s on %s to %s", partition_spec, table.full_name, partitions[0])
        return partitions[0]
