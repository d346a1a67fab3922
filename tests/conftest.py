"""Shared fixtures for Acidkeeper tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from acidkeeper.config import AcidkeeperConfig
from acidkeeper.core.reporter import Reporter
from acidkeeper.engine.base import CoordinationService, TableCatalog
from acidkeeper.models import CompactionResponse, InitiatorIdentity, TargetTable


@pytest.fixture
def config():
    """Default Acidkeeper configuration for tests."""
    return AcidkeeperConfig(
        wait_timeout="5000ms",
        log_level="WARNING",
    )


@pytest.fixture
def identity():
    return InitiatorIdentity(host_name="gateway01", version="0.1.0")


@pytest.fixture
def mock_spark():
    """Mock SparkSession with Hive support."""
    spark = MagicMock()
    spark.sparkContext = MagicMock()
    spark.sparkContext.applicationId = "local-test-app"
    spark.catalog.tableExists.return_value = True
    spark.sql.return_value = MagicMock()
    spark.sql.return_value.collect.return_value = []
    return spark


@pytest.fixture
def mock_catalog():
    """Mock TableCatalog."""
    return MagicMock(spec=TableCatalog)


@pytest.fixture
def mock_service():
    """Mock CoordinationService accepting every request with id 42."""
    service = MagicMock(spec=CoordinationService)
    service.submit.return_value = CompactionResponse(job_id=42, accepted=True, state="initiated")
    service.show_compactions.return_value = []
    return service


@pytest.fixture
def reporter():
    """Reporter that records every message."""
    rep = MagicMock(spec=Reporter)
    rep.messages = []
    rep.info.side_effect = rep.messages.append
    return rep


@pytest.fixture
def make_waiter():
    """Factory for a waiter that records delays (ms) and cancels on the n-th wait."""

    def _make(cancel_on=None):
        delays = []

        def waiter(seconds):
            delays.append(round(seconds * 1000))
            return cancel_on is not None and len(delays) == cancel_on

        waiter.delays = delays
        return waiter

    return _make


@pytest.fixture
def acid_table():
    """Transactional, unpartitioned table."""
    return TargetTable(
        database="mydb",
        table_name="events",
        is_transactional=True,
        is_partitioned=False,
        properties={"transactional": "true"},
    )


@pytest.fixture
def acid_partitioned_table():
    """Transactional table partitioned by ds and hr."""
    return TargetTable(
        database="mydb",
        table_name="logs",
        is_transactional=True,
        is_partitioned=True,
        partition_columns=("ds", "hr"),
        properties={"transactional": "true"},
    )


@pytest.fixture
def external_table():
    """Non-transactional external table."""
    return TargetTable(
        database="mydb",
        table_name="raw_events",
        is_transactional=False,
        is_partitioned=True,
        partition_columns=("ds",),
    )
