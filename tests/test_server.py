"""Tests for the FastAPI server endpoint."""

import io
import threading
import zipfile

import pytest
from httpx import ASGITransport, AsyncClient

from dem_pipeline.server import app


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


def _upload(path, name=None):
    return {"file": (name or path.name, path.read_bytes(), "application/zip")}


@pytest.mark.asyncio
class TestConvertUpload:
    async def test_zip_response(self, client, simple_order):
        resp = await client.post("/convert", files=_upload(simple_order))
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/zip"
        with zipfile.ZipFile(io.BytesIO(resp.content)) as zf:
            assert sorted(zf.namelist()) == ["hard_breakline.csv", "masspoint.csv", "soft_breakline.csv"]
            masspoints = zf.read("masspoint.csv").decode()
        assert masspoints.splitlines()[1] == "72e01ne_1,72e01ne,1,100.0,200.0,1050.5"

    async def test_csv_response(self, client, simple_order):
        resp = await client.post("/convert?format=csv&category=hard_breakline", files=_upload(simple_order))
        assert resp.status_code == 200
        assert "text/csv" in resp.headers["content-type"]
        lines = resp.text.strip().split("\n")
        assert lines[0].startswith("point_id,area_id,line_id,")
        assert len(lines) == 3

    async def test_json_summary(self, client, multi_order):
        resp = await client.post("/convert?format=json", files=_upload(multi_order))
        assert resp.status_code == 200
        data = resp.json()
        assert data["order_file"] == "multi.zip"
        summaries = {s["category"]: s for s in data["summaries"]}
        assert summaries["masspoint"]["records"] == 3
        assert summaries["soft_breakline"]["distinct_keys"] == 2
        assert summaries["hard_breakline"]["path"] == "hard_breakline.csv"

    async def test_rejects_non_zip_upload(self, client):
        files = {"file": ("tile.gnp", b"1,1,1,1\r\n", "text/plain")}
        resp = await client.post("/convert", files=files)
        assert resp.status_code == 400

    async def test_corrupt_archive_returns_400(self, client):
        files = {"file": ("order.zip", b"garbage", "application/zip")}
        resp = await client.post("/convert", files=files)
        assert resp.status_code == 400

    async def test_malformed_tile_returns_422(self, client, make_order):
        order = make_order({"x": {"x.ghl": "5\r\n1 2 3\r\n"}})
        resp = await client.post("/convert", files=_upload(order))
        assert resp.status_code == 422
        assert "x.ghl" in resp.json()["detail"]

    async def test_unknown_format_rejected(self, client, simple_order):
        resp = await client.post("/convert?format=xml", files=_upload(simple_order))
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestConversionThread:
    async def test_conversion_runs_off_the_event_loop(self, client, simple_order, monkeypatch):
        from dem_pipeline import server

        threads = []
        real_convert = server.convert_order

        def recording_convert(config):
            threads.append(threading.get_ident())
            return real_convert(config)

        monkeypatch.setattr(server, "convert_order", recording_convert)
        resp = await client.post("/convert?format=json", files=_upload(simple_order))
        assert resp.status_code == 200
        assert threads and threads[0] != threading.get_ident()
