"""Submission of compaction requests to the coordination service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acidkeeper.errors import CompactionRefused

if TYPE_CHECKING:
    from acidkeeper.core.reporter import Reporter
    from acidkeeper.engine.base import CoordinationService
    from acidkeeper.models import CompactionRequest, CompactionResponse

logger = logging.getLogger(__name__)


class SubmissionClient:
    """Sends a compaction request once and interprets the answer."""

    def __init__(self, service: CoordinationService, reporter: Reporter) -> None:
        self._service = service
        self._reporter = reporter

    def submit(self, request: CompactionRequest) -> CompactionResponse:
        """Submit a request. There is no retry.

        Args:
            request: The compaction request.

        Returns:
            The accepted CompactionResponse.

        Raises:
            CompactionRefused: If the service did not accept the request.
        """
        logger.info(
            "Submitting %s compaction for %s%s (pool=%s)",
            request.compaction_type.value,
            request.full_name,
            f" partition {request.partition_name}" if request.partition_name else "",
            request.pool_name,
        )
        response = self._service.submit(request)

        if not response.accepted:
            raise CompactionRefused(
                request.database,
                request.table_name,
                request.partition_name,
                response.error_message,
            )

        if response.already_queued:
            self._reporter.info(f"Compaction already enqueued with id {response.job_id}; State is {response.state}")
        else:
            self._reporter.info(f"Compaction enqueued with id {response.job_id}")
        return response
