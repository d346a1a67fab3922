"""SparkSession used for metastore lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyspark.sql import SparkSession

    from acidkeeper.config import AcidkeeperConfig

logger = logging.getLogger(__name__)

METASTORE_URIS_KEY = "hive.metastore.uris"


def build_spark_session(config: AcidkeeperConfig) -> SparkSession:
    """Create, or reuse, a Hive-enabled SparkSession for catalog access.

    Table descriptions and partition listings come from the Hive metastore,
    so Hive support is always on. ``metastore_uris`` points the session at a
    specific metastore; ``spark_conf`` entries are applied after it and win
    on conflicts.

    Args:
        config: Acidkeeper configuration.

    Returns:
        SparkSession.
    """
    from pyspark.sql import SparkSession

    builder = SparkSession.builder.appName(config.spark_app_name).enableHiveSupport()

    if config.metastore_uris:
        builder = builder.config(METASTORE_URIS_KEY, config.metastore_uris)

    for key, value in sorted(config.spark_conf.items()):
        builder = builder.config(key, str(value))

    spark = builder.getOrCreate()
    logger.info(
        "SparkSession %s ready (metastore: %s)",
        spark.sparkContext.applicationId,
        config.metastore_uris or "from hive-site.xml",
    )
    return spark


def stop_spark_session(spark: SparkSession) -> None:
    """Stop the session once the compaction request is done.

    A failing stop is logged: the compaction outcome is already known.
    """
    try:
        spark.stop()
    except Exception:
        logger.exception("Error stopping SparkSession")
    else:
        logger.debug("SparkSession stopped")
