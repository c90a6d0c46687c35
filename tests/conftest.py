import io
import zipfile
from pathlib import Path

import pytest

MASSPOINT_72E01NE = "1,100.0,200.0,1050.5\r\n2,101.0,201.0,1051.0\r\n"

HARD_72E01NE = (
    "         5\r\n"
    "10.0 20.0 30.0\r\n"
    "11.0 21.0 31.0\r\n"
    "END\r\n"
    "END\r\n"
)

SOFT_72E01NW = (
    "         7\r\n"
    "500.25   600.5    -1.25\r\n"
    "501.0    601.0    -1.5\r\n"
    "END\r\n"
    "         8\r\n"
    "502.0    602.0    2.0\r\n"
    "503.0    603.0    2.5\r\n"
    "END\r\n"
    "END\r\n"
)


def zip_bytes(files: dict[str, bytes | str]) -> bytes:
    """Build an in-memory zip from a name -> content mapping."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def write_order(path: Path, tiles: dict[str, dict[str, bytes | str]]) -> Path:
    """Write an order archive holding one nested zip per entry of ``tiles``."""
    nested = {f"dem/{name}.zip": zip_bytes(files) for name, files in tiles.items()}
    path.write_bytes(zip_bytes(nested))
    return path


@pytest.fixture
def simple_order(tmp_path):
    """One nested archive with a masspoint and a hard breakline tile."""
    return write_order(
        tmp_path / "order.zip",
        {
            "72e01ne": {
                "72e01ne.gnp": MASSPOINT_72E01NE,
                "72e01ne.ghl": HARD_72E01NE,
                "72e01ne.txt": "metadata, ignored",
            },
        },
    )


@pytest.fixture
def multi_order(tmp_path):
    """Two nested archives covering all three tile categories."""
    return write_order(
        tmp_path / "multi.zip",
        {
            "72e01ne": {
                "72e01ne.gnp": MASSPOINT_72E01NE,
                "72e01ne.ghl": HARD_72E01NE,
            },
            "72e01nw": {
                "72e01nw.gnp": "10,300.5,400.5,-2.75\r\nENV\r\n",
                "72e01nw.gsl": SOFT_72E01NW,
            },
        },
    )


@pytest.fixture
def make_order(tmp_path):
    """Factory writing an order archive into ``tmp_path``."""
    def _make(tiles: dict[str, dict[str, bytes | str]], name: str = "order.zip") -> Path:
        return write_order(tmp_path / name, tiles)

    return _make
