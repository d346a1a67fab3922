"""Data models for Acidkeeper."""

from __future__ import annotations

import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from acidkeeper import __version__
from acidkeeper.errors import InvalidCompactionType

MANUALLY_INITIATED_COMPACTION = "manual"

INITIATED_RESPONSE = "initiated"
WORKING_RESPONSE = "working"
IN_PROGRESS_STATES = frozenset({INITIATED_RESPONSE, WORKING_RESPONSE})


class CompactionType(Enum):
    """Kind of compaction requested from the metastore."""

    MINOR = "minor"
    MAJOR = "major"
    REBALANCE = "rebalance"

    @classmethod
    def parse(cls, value: str | CompactionType) -> CompactionType:
        """Parse a compaction type name, case-insensitively.

        Raises:
            InvalidCompactionType: If the name is not a known compaction type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidCompactionType(value) from None


class PollOutcome(Enum):
    """How a blocking wait ended."""

    TERMINAL = "terminal"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class TargetTable:
    """Snapshot of the catalog metadata needed to request a compaction."""

    database: str
    table_name: str
    is_transactional: bool = False
    is_partitioned: bool = False
    partition_columns: tuple[str, ...] = ()
    properties: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def full_name(self) -> str:
        return f"{self.database}.{self.table_name}"


@dataclass(frozen=True)
class InitiatorIdentity:
    """Who is asking for the compaction, as reported to the metastore."""

    host_name: str
    version: str = __version__

    @classmethod
    def local(cls) -> InitiatorIdentity:
        """Identity of the current host running this build."""
        return cls(host_name=socket.gethostname())

    @property
    def initiator_id(self) -> str:
        return f"{self.host_name}-{MANUALLY_INITIATED_COMPACTION}"


@dataclass(frozen=True)
class CompactionRequest:
    """A compaction request, sent to the coordination service exactly once."""

    database: str
    table_name: str
    compaction_type: CompactionType
    initiator_id: str
    initiator_version: str
    partition_name: str | None = None
    pool_name: str | None = None
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.database}.{self.table_name}"


@dataclass(frozen=True)
class CompactionResponse:
    """Answer of the coordination service to a submitted request.

    ``already_queued`` is set when the service matched the request to a
    compaction it had already enqueued and returned that job's id.
    """

    job_id: int
    accepted: bool
    state: str
    error_message: str | None = None
    already_queued: bool = False


@dataclass(frozen=True)
class StatusRecord:
    """One row of SHOW COMPACTIONS for a job id."""

    job_id: int
    state: str


@dataclass(frozen=True)
class InProgress:
    state: str


@dataclass(frozen=True)
class Terminal:
    state: str


JobState = Union[InProgress, Terminal]


def classify_state(state: str) -> JobState:
    """Map a service state string to InProgress or Terminal."""
    if state.strip().lower() in IN_PROGRESS_STATES:
        return InProgress(state)
    return Terminal(state)


@dataclass(frozen=True)
class PollResult:
    """Result of waiting on a compaction job."""

    outcome: PollOutcome
    state: str | None = None
    polls: int = 0


@dataclass
class CompactionResult:
    """Outcome of a single compact operation."""

    table_name: str
    job_id: int
    state: str
    partition_name: str | None = None
    already_queued: bool = False
    waited: bool = False
    outcome: PollOutcome | None = None
    polls: int = 0
