"""Run configuration for the DEM pipeline."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel

DEFAULT_OUTPUT_DIR = Path("output")
WORK_DIR_PREFIX = "dem-pipeline-"
ENV_PREFIX = "DEM_PIPELINE_"


class PipelineConfig(BaseModel):
    """Paths and switches for one conversion run.

    ``work_dir`` is where the order archive is unpacked. When it is ``None`` a
    fresh temporary directory is used. A caller-supplied ``work_dir`` must be
    absent or empty; it is private to the run.
    """

    order_file: Path
    output_dir: Path = DEFAULT_OUTPUT_DIR
    work_dir: Path | None = None
    keep_work_dir: bool = False


class ServerConfig(BaseModel):
    """Bind address for the HTTP server, read from ``DEM_PIPELINE_*`` variables."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        environ = os.environ if environ is None else environ
        values = {
            field: environ[f"{ENV_PREFIX}{field.upper()}"]
            for field in cls.model_fields
            if f"{ENV_PREFIX}{field.upper()}" in environ
        }
        return cls(**values)
