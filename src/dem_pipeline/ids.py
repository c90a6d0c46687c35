"""Composite identifiers for masspoints and breaklines.

Identifiers are namespaced by the tile's area name, e.g. ``72e01ne_1`` for a
masspoint and ``72e01ne_hard_5_start`` for a breakline endpoint. Area names are
used verbatim.
"""

from __future__ import annotations

from .models import LineType, PointType

SEPARATOR = "_"


def masspoint_point_id(area_name: str, original_point_id: int | str) -> str:
    return f"{area_name}{SEPARATOR}{original_point_id}"


def breakline_line_id(area_name: str, line_type: LineType | str, original_line_id: int | str) -> str:
    return SEPARATOR.join((area_name, LineType(line_type).value, str(original_line_id)))


def breakline_point_id(line_id: str, point_type: PointType | str) -> str:
    return f"{line_id}{SEPARATOR}{PointType(point_type).value}"
