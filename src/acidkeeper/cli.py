"""Click CLI for Acidkeeper."""

from __future__ import annotations

import click

from acidkeeper import __version__
from acidkeeper.config import AcidkeeperConfig, parse_duration_ms
from acidkeeper.core.operation import CompactOperation
from acidkeeper.core.reporter import ConsoleReporter, format_result
from acidkeeper.engine.spark_catalog import SparkTableCatalog
from acidkeeper.errors import AcidkeeperError
from acidkeeper.models import CompactionType
from acidkeeper.utils.spark import stop_spark_session


def _build_config(ctx: click.Context) -> AcidkeeperConfig:
    """Build config from YAML file and CLI overrides."""
    params = ctx.params
    config_file = params.get("config_file")

    if config_file:
        config = AcidkeeperConfig.from_yaml(config_file)
    else:
        config = AcidkeeperConfig()

    return config.merge_cli_overrides(**params)


def _get_spark(config: AcidkeeperConfig):  # noqa: ANN202
    """Create a SparkSession with Hive support."""
    from acidkeeper.utils.spark import build_spark_session

    return build_spark_session(config)


def _get_service(config: AcidkeeperConfig):  # noqa: ANN202
    from acidkeeper.engine.factory import load_service

    return load_service(config)


def _split_pairs(values: list[str] | tuple[str, ...], param: str) -> dict[str, str]:
    """Parse 'k=v' items into a dict.

    Raises:
        click.BadParameter: If an item has no '=' or an empty key.
    """
    pairs = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Expected key=value, got '{item}'"
            raise click.BadParameter(msg, param_hint=param)
        pairs[key] = value.strip()
    return pairs


def _parse_table(table: str) -> tuple[str, str]:
    parts = table.split(".")
    if len(parts) != 2 or not all(parts):  # noqa: PLR2004
        msg = f"table must be in format 'database.table', got '{table}'"
        raise click.BadParameter(msg, param_hint="--table")
    return parts[0], parts[1]


@click.group()
@click.version_option(version=__version__, prog_name="acidkeeper")
def main() -> None:
    """Acidkeeper - Manual compaction requests for Hive ACID tables."""


@main.command()
@click.option("--table", "-t", required=True, help="Table to compact (format: db.table).")
@click.option(
    "--partition",
    "-p",
    "partition",
    multiple=True,
    help="Partition column value (format: k=v). Repeat once per partition column.",
)
@click.option(
    "--type",
    "compaction_type",
    type=click.Choice([t.value for t in CompactionType], case_sensitive=False),
    default=CompactionType.MAJOR.value,
    show_default=True,
    help="Compaction type.",
)
@click.option("--pool", "pool_name", help="Compaction pool.")
@click.option("--property", "properties", multiple=True, help="Compactor property (format: k=v). Repeatable.")
@click.option("--wait/--no-wait", "blocking", default=None, help="Block until the compaction finishes.")
@click.option("--wait-timeout", "wait_timeout", help="Maximum delay between status polls (e.g. 300s, 5m).")
@click.option("--service-factory", "service_factory", help="Coordination service factory (module:callable).")
@click.option("--metastore-uris", "metastore_uris", help="Hive metastore URIs (overrides hive-site.xml).")
@click.option("--spark-app-name", "spark_app_name", help="Spark application name.")
@click.option("--config-file", "-c", help="YAML configuration file.")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def compact(ctx: click.Context, **kwargs: str | None) -> None:
    """Request a compaction of a transactional table."""
    config = _build_config(ctx)
    config.setup_logging()

    database, table_name = _parse_table(kwargs["table"])
    partition_spec = _split_pairs(kwargs["partition"], "--partition") or None
    properties = _split_pairs(kwargs.get("properties") or (), "--property")

    try:
        wait_timeout_ms = parse_duration_ms(config.wait_timeout)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--wait-timeout") from e
    if wait_timeout_ms <= 0:
        raise click.BadParameter("wait timeout must be positive", param_hint="--wait-timeout")

    try:
        service = _get_service(config)
    except AcidkeeperError as e:
        raise click.ClickException(str(e)) from e

    spark = _get_spark(config)
    try:
        operation = CompactOperation(SparkTableCatalog(spark), service, config, reporter=ConsoleReporter())
        result = operation.compact(
            database,
            table_name,
            partition_spec=partition_spec,
            compaction_type=kwargs["compaction_type"],
            pool_name=config.pool_name,
            properties=properties,
            blocking=config.blocking,
        )
    except AcidkeeperError as e:
        raise click.ClickException(str(e)) from e
    finally:
        stop_spark_session(spark)

    click.echo(format_result(result))
