"""Abstract interfaces for the catalog and the compaction coordination service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from acidkeeper.models import CompactionRequest, CompactionResponse, StatusRecord, TargetTable


class TableCatalog(ABC):
    """Read-only access to table metadata and partitions."""

    @abstractmethod
    def get_table(self, database: str, table_name: str) -> TargetTable:
        """Fetch a metadata snapshot of a table.

        Args:
            database: Database name.
            table_name: Table name.

        Returns:
            TargetTable snapshot.

        Raises:
            TableNotFound: If the table does not exist.
        """

    @abstractmethod
    def get_partitions(self, table: TargetTable, partition_spec: dict[str, str]) -> list[str]:
        """List the names of the partitions matching a (possibly partial) spec.

        Args:
            table: Table snapshot.
            partition_spec: Mapping of partition column to value.

        Returns:
            Partition names such as ``ds=2024-01-01/hr=00``.
        """


class CoordinationService(ABC):
    """Remote service that queues, schedules and tracks compactions."""

    @abstractmethod
    def submit(self, request: CompactionRequest) -> CompactionResponse:
        """Enqueue a compaction request.

        Args:
            request: The compaction request.

        Returns:
            CompactionResponse with the job id and acceptance flag.
        """

    @abstractmethod
    def show_compactions(self, job_id: int) -> list[StatusRecord]:
        """Query the status of a compaction job.

        Args:
            job_id: Id returned by ``submit``.

        Returns:
            Status records for the id. Exactly one under normal operation.
        """
