"""Tests for acidkeeper.config module."""

from __future__ import annotations

import pytest

from acidkeeper.config import AcidkeeperConfig, parse_duration_ms


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("500ms", 500),
            ("300s", 300000),
            ("5m", 300000),
            ("1h", 3600000),
            ("1d", 86400000),
            ("2500", 2500),
            (7000, 7000),
            (" 10S ", 10000),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration_ms(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "5x", "-5s", "1.5s"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid duration format"):
            parse_duration_ms(value)


class TestAcidkeeperConfig:
    def test_defaults(self):
        config = AcidkeeperConfig()
        assert config.wait_timeout == "300s"
        assert config.wait_timeout_ms == 300000
        assert config.blocking is False
        assert config.pool_name is None
        assert config.service_factory is None
        assert config.log_level == "INFO"
        assert config.config_file is None
        assert config.spark_app_name == "acidkeeper"
        assert config.metastore_uris is None
        assert config.spark_conf == {}

    def test_from_yaml(self, tmp_path):
        yaml_content = "wait_timeout: 2m\nblocking: true\npool_name: etl\nservice_factory: my.mod:make\n"
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml_content)

        config = AcidkeeperConfig.from_yaml(yaml_file)
        assert config.wait_timeout_ms == 120000
        assert config.blocking is True
        assert config.pool_name == "etl"
        assert config.service_factory == "my.mod:make"

    def test_from_yaml_integer_timeout(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("wait_timeout: 60000\n")
        assert AcidkeeperConfig.from_yaml(yaml_file).wait_timeout_ms == 60000

    def test_from_yaml_missing_file(self):
        with pytest.raises(FileNotFoundError):
            AcidkeeperConfig.from_yaml("/nonexistent/config.yaml")

    def test_from_yaml_empty_file(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        config = AcidkeeperConfig.from_yaml(yaml_file)
        assert config.wait_timeout == "300s"

    def test_from_yaml_ignores_unknown_keys(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("pool_name: etl\nunknown_key: value\n")

        config = AcidkeeperConfig.from_yaml(yaml_file)
        assert config.pool_name == "etl"
        assert not hasattr(config, "unknown_key")

    def test_merge_cli_overrides(self):
        config = AcidkeeperConfig(wait_timeout="300s")
        new_config = config.merge_cli_overrides(wait_timeout="10s", blocking=True, table="db.t")
        assert new_config.wait_timeout_ms == 10000
        assert new_config.blocking is True
        # Original unchanged
        assert config.wait_timeout == "300s"

    def test_from_yaml_spark_settings(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            "spark_app_name: nightly_compactions\n"
            "metastore_uris: thrift://metastore01:9083\n"
            "spark_conf:\n"
            "  spark.sql.shuffle.partitions: 8\n"
        )

        config = AcidkeeperConfig.from_yaml(yaml_file)
        assert config.spark_app_name == "nightly_compactions"
        assert config.metastore_uris == "thrift://metastore01:9083"
        assert config.spark_conf == {"spark.sql.shuffle.partitions": 8}

    def test_merge_cli_overrides_copies_spark_conf(self):
        config = AcidkeeperConfig(spark_conf={"spark.executor.memory": "2g"})
        new_config = config.merge_cli_overrides(metastore_uris="thrift://ms:9083")
        new_config.spark_conf["spark.executor.memory"] = "4g"
        assert config.spark_conf == {"spark.executor.memory": "2g"}
        assert new_config.metastore_uris == "thrift://ms:9083"

    def test_merge_cli_overrides_ignores_none(self):
        config = AcidkeeperConfig(blocking=True)
        new_config = config.merge_cli_overrides(blocking=None, pool_name=None)
        assert new_config.blocking is True
        assert new_config.pool_name is None

    def test_setup_logging(self):
        config = AcidkeeperConfig(log_level="DEBUG")
        config.setup_logging()  # Should not raise
