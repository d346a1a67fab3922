"""Builds compaction requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from acidkeeper.models import CompactionRequest, CompactionType

if TYPE_CHECKING:
    from acidkeeper.models import InitiatorIdentity, TargetTable


def build_request(
    table: TargetTable,
    partition_name: str | None,
    compaction_type: CompactionType | str,
    identity: InitiatorIdentity,
    pool_name: str | None = None,
    properties: dict[str, str] | None = None,
) -> CompactionRequest:
    """Assemble the compaction request for an already validated target.

    Args:
        table: Table snapshot.
        partition_name: Resolved partition name, or None.
        compaction_type: Compaction kind or its name.
        identity: Host and version of the initiator.
        pool_name: Optional compaction pool.
        properties: Optional properties passed to the compactor.

    Returns:
        CompactionRequest ready to submit.
    """
    return CompactionRequest(
        database=table.database,
        table_name=table.table_name,
        partition_name=partition_name,
        compaction_type=CompactionType.parse(compaction_type),
        pool_name=pool_name,
        properties=dict(properties or {}),
        initiator_id=identity.initiator_id,
        initiator_version=identity.version,
    )
