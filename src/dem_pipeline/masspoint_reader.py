"""Masspoint (.gnp) reader.

A masspoint file is already comma-delimited, one point per line::

    <original_point_id>,<x>,<y>,<z>

Lines starting with ``ENV`` and the bare ``END`` terminator are sentinels, not data.
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import DiscoveryError, MalformedRecordError
from .ids import masspoint_point_id
from .models import MasspointRecord

ID_RE = re.compile(r"\d+", re.ASCII)
NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)
SENTINEL_PREFIX = "ENV"
TERMINATOR = "END"


def read_masspoint_file(path: str | Path) -> list[MasspointRecord]:
    """Read a .gnp file; the area name is the file stem."""
    path = Path(path)
    text = read_tile_text(path)
    return parse_masspoints(text, path.stem, source=path)


def parse_masspoints(text: str, area_name: str, source: str | Path | None = None) -> list[MasspointRecord]:
    """Parse the text of one masspoint file into records, in line order."""
    records: list[MasspointRecord] = []

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(SENTINEL_PREFIX) or line == TERMINATOR:
            continue

        fields = [f.strip() for f in line.split(",")]
        if len(fields) != 4:
            raise MalformedRecordError(
                f"expected 4 comma-separated fields, found {len(fields)}",
                source=source, line_number=line_number, line=raw,
            )

        original_id, x, y, z = fields
        if not ID_RE.fullmatch(original_id):
            raise MalformedRecordError(
                "point id is not a non-negative integer",
                source=source, line_number=line_number, line=raw,
            )
        for value in (x, y, z):
            if not NUMBER_RE.fullmatch(value):
                raise MalformedRecordError(
                    f"coordinate {value!r} is not a decimal number",
                    source=source, line_number=line_number, line=raw,
                )

        records.append(
            MasspointRecord(
                point_id=masspoint_point_id(area_name, original_id),
                area_id=area_name,
                original_point_id=original_id,
                x=x,
                y=y,
                z=z,
            )
        )

    return records


def read_tile_text(path: Path) -> str:
    """Read a tile file as UTF-8 text without translating line endings."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DiscoveryError(f"Cannot read tile file {path}: {exc}") from exc

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedRecordError(f"not valid UTF-8 text ({exc.reason})", source=path) from exc
