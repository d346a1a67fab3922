"""Exceptions raised by Acidkeeper."""

from __future__ import annotations

NO_DETAILS_AVAILABLE = "No details available"


class AcidkeeperError(Exception):
    """Base class for all errors surfaced to the caller."""


class TableNotFound(AcidkeeperError):
    def __init__(self, full_name: str) -> None:
        super().__init__(f"Table not found: {full_name}")
        self.full_name = full_name


class UnsupportedTarget(AcidkeeperError):
    """Compaction was requested on a table that is not transactional."""

    def __init__(self, database: str, table_name: str) -> None:
        super().__init__(f"Compaction is not allowed on non-ACID table {database}.{table_name}")
        self.database = database
        self.table_name = table_name


class PartitionRequired(AcidkeeperError):
    def __init__(self) -> None:
        super().__init__("You must specify a partition to compact for partitioned tables")


class InvalidPartitionSpec(AcidkeeperError):
    def __init__(self, detail: str | None = None) -> None:
        msg = "Invalid partition spec specified"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class AmbiguousPartitionSpec(AcidkeeperError):
    def __init__(self, matches: int) -> None:
        super().__init__(
            f"Compaction can only be requested on one partition at a time (partition spec matched {matches})"
        )
        self.matches = matches


class InvalidCompactionType(AcidkeeperError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Unexpected compaction type: {value!r}")
        self.value = value


class CompactionRefused(AcidkeeperError):
    """The coordination service did not accept the compaction request."""

    def __init__(
        self,
        database: str,
        table_name: str,
        partition_name: str | None,
        details: str | None,
    ) -> None:
        self.database = database
        self.table_name = table_name
        self.partition_name = partition_name
        self.details = details or NO_DETAILS_AVAILABLE
        partition = f"(partition={partition_name})" if partition_name else ""
        super().__init__(
            f"Compaction request for {database}.{table_name}{partition} is refused, details: {self.details}."
        )


class NoSuitableCompactionFound(AcidkeeperError):
    """Status query did not return exactly one record for the job id."""

    def __init__(self, job_id: int, records: int) -> None:
        super().__init__(f"No suitable compaction found for id {job_id} ({records} status records returned)")
        self.job_id = job_id
        self.records = records


class ServiceConfigurationError(AcidkeeperError):
    pass
