"""Progress and outcome reporting."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from acidkeeper.models import CompactionResult

logger = logging.getLogger(__name__)


class Reporter:
    """Sink for human-readable progress messages. Default drops them into the log."""

    def info(self, message: str) -> None:
        logger.info("%s", message)


class ConsoleReporter(Reporter):
    """Echoes messages to the console and to the log."""

    def __init__(self, err: bool = False) -> None:
        self._err = err

    def info(self, message: str) -> None:
        logger.debug("%s", message)
        click.echo(message, err=self._err)


def format_result(result: CompactionResult) -> str:
    """Generate a human-readable summary of a compact operation.

    Args:
        result: Result of the compact operation.

    Returns:
        Formatted report string.
    """
    lines = [
        f"{'=' * 60}",
        f"Compaction: {result.table_name}",
        f"{'=' * 60}",
        f"  Partition:       {result.partition_name or '-'}",
        f"  Job id:          {result.job_id}",
        f"  State:           {result.state}",
    ]

    if result.already_queued:
        lines.append("  Already queued:  True")

    if result.waited:
        outcome = result.outcome.value if result.outcome else "-"
        lines.extend(
            [
                f"  Wait outcome:    {outcome}",
                f"  Status polls:    {result.polls}",
            ]
        )

    lines.append("")
    report = "\n".join(lines)
    logger.info("\n%s", report)
    return report
