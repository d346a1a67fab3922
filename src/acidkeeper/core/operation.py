"""Compact operation - validate, submit, and optionally wait for a compaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acidkeeper.core.poller import CompactionPoller
from acidkeeper.core.reporter import Reporter
from acidkeeper.core.request_builder import build_request
from acidkeeper.core.submitter import SubmissionClient
from acidkeeper.core.validator import EligibilityValidator
from acidkeeper.models import CompactionResult, CompactionType, InitiatorIdentity

if TYPE_CHECKING:
    from acidkeeper.config import AcidkeeperConfig
    from acidkeeper.core.poller import Waiter
    from acidkeeper.engine.base import CoordinationService, TableCatalog

logger = logging.getLogger(__name__)


class CompactOperation:
    """Runs one manual compaction request against a transactional table."""

    def __init__(
        self,
        catalog: TableCatalog,
        service: CoordinationService,
        config: AcidkeeperConfig,
        reporter: Reporter | None = None,
        identity: InitiatorIdentity | None = None,
        waiter: Waiter | None = None,
    ) -> None:
        """Initialize the operation.

        Args:
            catalog: Table catalog used for the metadata snapshot and partitions.
            service: Coordination service receiving the request.
            config: Acidkeeper configuration.
            reporter: Sink for progress messages.
            identity: Initiator identity. Defaults to the local host.
            waiter: Cancellable wait primitive for the poll loop.
        """
        self._catalog = catalog
        self._config = config
        self._reporter = reporter or Reporter()
        self._identity = identity or InitiatorIdentity.local()
        self._validator = EligibilityValidator(catalog)
        self._submitter = SubmissionClient(service, self._reporter)
        self._poller = CompactionPoller(service, self._reporter, config.wait_timeout_ms, waiter)

    def cancel(self) -> None:
        """Stop the current blocking wait, or the next one if none is running."""
        self._poller.cancel()

    def compact(
        self,
        database: str,
        table_name: str,
        partition_spec: dict[str, str] | None = None,
        compaction_type: CompactionType | str = CompactionType.MAJOR,
        pool_name: str | None = None,
        properties: dict[str, str] | None = None,
        blocking: bool = False,
    ) -> CompactionResult:
        """Request a compaction and optionally wait for it to finish.

        Args:
            database: Database name.
            table_name: Table name.
            partition_spec: Partition spec, required for partitioned tables.
            compaction_type: Compaction kind or its name.
            pool_name: Compaction pool. Falls back to the configured pool.
            properties: Properties passed to the compactor.
            blocking: Wait until the job reaches a terminal state.

        Returns:
            CompactionResult describing the submitted job.

        Raises:
            AcidkeeperError: On any validation, submission or polling failure.
        """
        compaction_type = CompactionType.parse(compaction_type)
        table = self._catalog.get_table(database, table_name)
        partition_name = self._validator.resolve(table, partition_spec)

        request = build_request(
            table,
            partition_name,
            compaction_type,
            self._identity,
            pool_name=pool_name or self._config.pool_name,
            properties=properties,
        )
        response = self._submitter.submit(request)

        result = CompactionResult(
            table_name=table.full_name,
            partition_name=partition_name,
            job_id=response.job_id,
            state=response.state,
            already_queued=response.already_queued,
        )

        if blocking:
            poll = self._poller.poll(response.job_id)
            result.waited = True
            result.outcome = poll.outcome
            result.polls = poll.polls
            if poll.state is not None:
                result.state = poll.state

        logger.info("Compact operation on %s finished (job id %d)", table.full_name, response.job_id)
        return result
