"""Breakline (.ghl / .gsl) reader.

Breakline files hold one segment per four-line block::

            <original_line_id>
    <start_x>    <start_y>    <start_z>
    <end_x>      <end_y>      <end_z>
    END

A final bare ``END`` closes the file. Each block becomes two records, start
then end, sharing a line id.
"""

from __future__ import annotations

from pathlib import Path

from .errors import MalformedRecordError
from .ids import breakline_line_id, breakline_point_id
from .masspoint_reader import ID_RE, NUMBER_RE, TERMINATOR, read_tile_text
from .models import BreaklineRecord, Category, LineType, PointType


def read_breakline_file(path: str | Path) -> list[BreaklineRecord]:
    """Read a breakline file; the line type comes from the extension."""
    path = Path(path)
    category = Category.from_extension(path.suffix)
    if category is None or category.line_type is None:
        raise ValueError(f"Not a breakline file: {path}")
    text = read_tile_text(path)
    return parse_breaklines(text, path.stem, category.line_type, source=path)


def parse_breaklines(
    text: str,
    area_name: str,
    line_type: LineType | str,
    source: str | Path | None = None,
) -> list[BreaklineRecord]:
    """Parse the text of one breakline file into start/end record pairs."""
    line_type = LineType(line_type)
    records: list[BreaklineRecord] = []
    lines = list(enumerate(text.splitlines(), start=1))
    pos = 0
    block = 0

    while pos < len(lines):
        line = lines[pos][1].strip()
        if not line:
            pos += 1
            continue

        if line == TERMINATOR:
            _expect_trailing_blank(lines[pos + 1:], source)
            break

        block += 1
        if not ID_RE.fullmatch(line):
            raise _block_error("line id is not a non-negative integer", lines, pos, block, source)
        if pos + 3 >= len(lines):
            raise _block_error("truncated block", lines, len(lines) - 1, block, source)

        start = _parse_coordinates(lines[pos + 1][1])
        if start is None:
            raise _block_error("expected three start coordinates", lines, pos + 1, block, source)
        end = _parse_coordinates(lines[pos + 2][1])
        if end is None:
            raise _block_error("expected three end coordinates", lines, pos + 2, block, source)
        if lines[pos + 3][1].strip() != TERMINATOR:
            raise _block_error(f"expected {TERMINATOR!r} block terminator", lines, pos + 3, block, source)

        original_id = line
        line_id = breakline_line_id(area_name, line_type, original_id)
        for point_type, (x, y, z) in ((PointType.START, start), (PointType.END, end)):
            records.append(
                BreaklineRecord(
                    point_id=breakline_point_id(line_id, point_type),
                    area_id=area_name,
                    line_id=line_id,
                    original_line_id=original_id,
                    line_type=line_type,
                    point_type=point_type,
                    x=x,
                    y=y,
                    z=z,
                )
            )
        pos += 4

    return records


def _block_error(
    reason: str,
    lines: list[tuple[int, str]],
    at: int,
    block: int,
    source: str | Path | None,
) -> MalformedRecordError:
    line_number, raw = lines[at]
    return MalformedRecordError(reason, source=source, block=block, line_number=line_number, line=raw)


def _parse_coordinates(line: str) -> tuple[str, str, str] | None:
    """Split a whitespace-separated ``x y z`` line, or None if it isn't one."""
    values = line.split()
    if len(values) != 3 or not all(NUMBER_RE.fullmatch(v) for v in values):
        return None
    x, y, z = values
    return x, y, z


def _expect_trailing_blank(rest: list[tuple[int, str]], source: str | Path | None) -> None:
    for line_number, raw in rest:
        if raw.strip():
            raise MalformedRecordError(
                "data after file terminator", source=source, line_number=line_number, line=raw,
            )
