"""Blocking wait on a compaction job, with capped exponential backoff."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable

from acidkeeper.errors import NoSuitableCompactionFound
from acidkeeper.models import InProgress, PollOutcome, PollResult, classify_state

if TYPE_CHECKING:
    from acidkeeper.core.reporter import Reporter
    from acidkeeper.engine.base import CoordinationService

logger = logging.getLogger(__name__)

INITIAL_WAIT_MS = 1000

# Waits for the given number of seconds, returns True if cancelled meanwhile.
Waiter = Callable[[float], bool]


def next_delay_ms(previous_ms: int, max_wait_ms: int) -> int:
    """Double the previous delay, capped at max_wait_ms."""
    return min(previous_ms * 2, max_wait_ms)


class CompactionPoller:
    """Polls SHOW COMPACTIONS for a job until it leaves the in-progress states.

    The loop has no overall deadline: only each individual delay is capped.
    It ends when the job reaches a terminal state, when the wait is
    cancelled, or when the status query cannot identify the job.
    """

    def __init__(
        self,
        service: CoordinationService,
        reporter: Reporter,
        max_wait_ms: int,
        waiter: Waiter | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            service: Coordination service to query.
            reporter: Sink for progress messages.
            max_wait_ms: Cap on a single backoff delay, in milliseconds.
            waiter: Cancellable wait primitive. Defaults to an internal
                threading.Event, set by ``cancel()``.

        Raises:
            ValueError: If max_wait_ms is not positive.
        """
        if max_wait_ms <= 0:
            msg = f"max_wait_ms must be positive, got {max_wait_ms}"
            raise ValueError(msg)
        self._service = service
        self._reporter = reporter
        self._max_wait_ms = max_wait_ms
        self._cancelled = threading.Event()
        self._waiter = waiter or self._cancelled.wait

    def cancel(self) -> None:
        """Interrupt the current or next wait. The remote job keeps running.

        The request is consumed by the poll it interrupts; later polls start
        uncancelled.
        """
        self._cancelled.set()

    def _wait(self, delay_ms: int) -> bool:
        try:
            return bool(self._waiter(delay_ms / 1000)) or self._cancelled.is_set()
        except KeyboardInterrupt:
            return True

    def poll(self, job_id: int) -> PollResult:
        """Block until the job is terminal or the wait is cancelled.

        Args:
            job_id: Id of the submitted compaction.

        Returns:
            PollResult with the outcome, the final state (if terminal) and
            the number of status queries made.

        Raises:
            NoSuitableCompactionFound: If a status query does not return
                exactly one record for the job id.
        """
        try:
            return self._poll(job_id)
        finally:
            self._cancelled.clear()

    def _poll(self, job_id: int) -> PollResult:
        progress_dots = ""
        delay_ms = INITIAL_WAIT_MS
        polls = 0

        while True:
            delay_ms = next_delay_ms(delay_ms, self._max_wait_ms)
            logger.debug("Waiting %d ms before polling compaction %d", delay_ms, job_id)

            if self._wait(delay_ms):
                self._reporter.info(f"Interrupted while waiting for compaction with id={job_id}")
                return PollResult(outcome=PollOutcome.INTERRUPTED, polls=polls)

            records = self._service.show_compactions(job_id)
            polls += 1
            if len(records) != 1:
                raise NoSuitableCompactionFound(job_id, len(records))

            state = classify_state(records[0].state)
            if isinstance(state, InProgress):
                self._reporter.info(progress_dots)
                progress_dots += "."
                continue

            self._reporter.info(f"Compaction with id {job_id} finished with status: {state.state}")
            return PollResult(outcome=PollOutcome.TERMINAL, state=state.state, polls=polls)
