"""FastAPI server for DEM order conversion."""

from __future__ import annotations

import io
import tempfile
import zipfile
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from .config import PipelineConfig
from .errors import ConversionError, MalformedRecordError, WriteError
from .models import Category, ConversionResult
from .pipeline import convert_order

app = FastAPI(title="DEM Pipeline", version="0.1.0")

ORDER_EXT = ".zip"


@app.post("/convert")
async def convert_upload(
    file: UploadFile,
    format: str = Query("zip", pattern="^(zip|csv|json)$"),
    category: Category = Query(Category.MASSPOINT),
):
    """Convert an uploaded order archive.

    Returns:
    - ``zip``: an archive holding all three CSV files
    - ``csv``: the CSV for ``category``
    - ``json``: the conversion summary
    """
    filename = file.filename or ""
    if not filename.lower().endswith(ORDER_EXT):
        raise HTTPException(status_code=400, detail="Upload must be a .zip order archive")

    content = await file.read()
    with tempfile.TemporaryDirectory() as tmp:
        tmp_dir = Path(tmp)
        order_file = tmp_dir / "order.zip"
        order_file.write_bytes(content)
        config = PipelineConfig(order_file=order_file, output_dir=tmp_dir / "output")

        result = await run_in_threadpool(_convert, config)

        if format == "json":
            return _public_summary(result, filename)
        if format == "csv":
            return _csv_response(result.summary_for(category).path)
        return _zip_response(result, Path(filename).stem)


def _convert(config: PipelineConfig) -> ConversionResult:
    try:
        return convert_order(config)
    except MalformedRecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except WriteError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except ConversionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _public_summary(result: ConversionResult, filename: str) -> ConversionResult:
    """Strip server-side temporary paths from the summary."""
    summaries = [s.model_copy(update={"path": Path(s.path.name)}) for s in result.summaries]
    return ConversionResult(order_file=Path(filename), output_dir=Path("."), summaries=summaries)


def _csv_response(path: Path) -> StreamingResponse:
    data = path.read_bytes()
    return StreamingResponse(
        iter([data]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={path.name}"},
    )


def _zip_response(result: ConversionResult, stem: str) -> StreamingResponse:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for summary in result.summaries:
            zf.write(summary.path, arcname=summary.path.name)
    return StreamingResponse(
        iter([buf.getvalue()]),
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={stem}_csv.zip"},
    )
