"""Table catalog backed by Spark SQL against the Hive metastore."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acidkeeper.engine.base import TableCatalog
from acidkeeper.errors import InvalidPartitionSpec, TableNotFound
from acidkeeper.models import TargetTable

if TYPE_CHECKING:
    from pyspark.sql import SparkSession

logger = logging.getLogger(__name__)

TRANSACTIONAL_PROPERTY = "transactional"


def _parse_properties(raw: str) -> dict[str, str]:
    """Parse Spark's ``[k1=v1, k2=v2]`` table properties rendering."""
    raw = raw.strip()
    if raw.startswith("[") and raw.endswith("]"):
        raw = raw[1:-1]
    props = {}
    for item in raw.split(","):
        if "=" in item:
            key, value = item.split("=", 1)
            props[key.strip()] = value.strip()
    return props


def partition_sql_spec(partition_spec: dict[str, str]) -> str:
    """Render a partition spec as ``k1='v1', k2='v2'``."""
    return ", ".join(f"{k}='{_quote(v)}'" for k, v in partition_spec.items())


def _quote(value: object) -> str:
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


class SparkTableCatalog(TableCatalog):
    """Reads table metadata with DESCRIBE FORMATTED and partitions with SHOW PARTITIONS."""

    def __init__(self, spark: SparkSession) -> None:
        """Initialize the catalog.

        Args:
            spark: Active SparkSession with Hive support.
        """
        self._spark = spark

    def get_table(self, database: str, table_name: str) -> TargetTable:
        full_name = f"{database}.{table_name}"
        if not self._spark.catalog.tableExists(table_name, database):
            raise TableNotFound(full_name)

        rows = self._spark.sql(f"DESCRIBE FORMATTED {full_name}").collect()
        properties: dict[str, str] = {}
        partition_columns: list[str] = []
        section = None

        for row in rows:
            col0 = (row[0] or "").strip()
            col1 = (row[1] or "").strip()

            if col0 == "# Partition Information":
                section = "partitions"
                continue
            if col0 in ("Table Properties", "Table Parameters") and col1.startswith("["):
                properties.update(_parse_properties(col1))
                continue
            if col0.startswith("Table Parameters"):
                section = "parameters"
                continue
            if col0.startswith("#"):
                if col0 != "# col_name":
                    section = None
                continue

            if section == "partitions":
                if not col0:
                    section = None
                else:
                    partition_columns.append(col0)
            elif section == "parameters" and not col0 and col1:
                # Hive style: ("", key, value) rows under "Table Parameters:"
                properties[col1] = (row[2] or "").strip()

        is_transactional = properties.get(TRANSACTIONAL_PROPERTY, "").lower() == "true"
        logger.debug(
            "Table %s: transactional=%s, partition columns=%s",
            full_name,
            is_transactional,
            partition_columns,
        )
        return TargetTable(
            database=database,
            table_name=table_name,
            is_transactional=is_transactional,
            is_partitioned=bool(partition_columns),
            partition_columns=tuple(partition_columns),
            properties=properties,
        )

    def get_partitions(self, table: TargetTable, partition_spec: dict[str, str]) -> list[str]:
        unknown = [k for k in partition_spec if k not in table.partition_columns]
        if unknown:
            raise InvalidPartitionSpec(f"{', '.join(unknown)} not a partition column of {table.full_name}")

        sql = f"SHOW PARTITIONS {table.full_name}"
        if partition_spec:
            sql += f" PARTITION({partition_sql_spec(partition_spec)})"
        rows = self._spark.sql(sql).collect()
        names = [row[0] for row in rows]
        logger.debug("Partition spec %s on %s matched %d partition(s)", partition_spec, table.full_name, len(names))
        return names
