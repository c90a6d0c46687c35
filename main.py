"""Launch the DEM pipeline FastAPI server.

Bind address comes from DEM_PIPELINE_HOST, DEM_PIPELINE_PORT and
DEM_PIPELINE_RELOAD.
"""

import uvicorn

from dem_pipeline.config import ServerConfig


def main():
    config = ServerConfig.from_env()
    uvicorn.run("dem_pipeline.server:app", host=config.host, port=config.port, reload=config.reload)


if __name__ == "__main__":
    main()
