"""Tests for run and server configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dem_pipeline import PipelineConfig, ServerConfig


class TestPipelineConfig:
    def test_defaults(self):
        config = PipelineConfig(order_file=Path("order.zip"))
        assert config.output_dir == Path("output")
        assert config.work_dir is None
        assert config.keep_work_dir is False


class TestServerConfig:
    def test_defaults_without_environment(self):
        config = ServerConfig.from_env({})
        assert (config.host, config.port, config.reload) == ("127.0.0.1", 8000, False)

    def test_reads_prefixed_variables(self):
        config = ServerConfig.from_env(
            {"DEM_PIPELINE_HOST": "0.0.0.0", "DEM_PIPELINE_PORT": "9001", "DEM_PIPELINE_RELOAD": "true"}
        )
        assert (config.host, config.port, config.reload) == ("0.0.0.0", 9001, True)

    def test_ignores_unprefixed_variables(self):
        assert ServerConfig.from_env({"PORT": "9001"}).port == 8000

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("DEM_PIPELINE_PORT", "8123")
        assert ServerConfig.from_env().port == 8123

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            ServerConfig.from_env({"DEM_PIPELINE_PORT": "eighty"})
