"""Pydantic data models for the DEM pipeline."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

MASSPOINT_FIELDS = ["point_id", "area_id", "original_point_id", "x", "y", "z"]
BREAKLINE_FIELDS = [
    "point_id", "area_id", "line_id", "original_line_id",
    "line_type", "point_type", "x", "y", "z",
]


class Category(str, Enum):
    """Kind of tile file, and of the merged CSV it ends up in."""

    MASSPOINT = "masspoint"
    HARD_BREAKLINE = "hard_breakline"
    SOFT_BREAKLINE = "soft_breakline"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def output_name(self) -> str:
        return f"{self.value}.csv"

    @property
    def header(self) -> list[str]:
        return list(MASSPOINT_FIELDS if self is Category.MASSPOINT else BREAKLINE_FIELDS)

    @property
    def line_type(self) -> LineType | None:
        return _LINE_TYPES.get(self)

    @classmethod
    def from_extension(cls, suffix: str) -> Category | None:
        suffix = suffix.lower()
        for category, extension in _EXTENSIONS.items():
            if extension == suffix:
                return category
        return None


class LineType(str, Enum):
    HARD = "hard"
    SOFT = "soft"


class PointType(str, Enum):
    START = "start"
    END = "end"


_EXTENSIONS = {
    Category.MASSPOINT: ".gnp",
    Category.HARD_BREAKLINE: ".ghl",
    Category.SOFT_BREAKLINE: ".gsl",
}

_LINE_TYPES = {
    Category.HARD_BREAKLINE: LineType.HARD,
    Category.SOFT_BREAKLINE: LineType.SOFT,
}


ID_PATTERN = r"^\d+$"
NUMBER_PATTERN = r"^-?(?:\d+(?:\.\d*)?|\.\d+)$"


class TileFile(BaseModel):
    """A single extracted tile file."""

    path: Path
    area_name: str
    category: Category

    @classmethod
    def from_path(cls, path: Path) -> TileFile:
        category = Category.from_extension(path.suffix)
        if category is None:
            raise ValueError(f"Not a tile file: {path}")
        return cls(path=path, area_name=path.stem, category=category)


class TileSet(BaseModel):
    """Tile files found in a working tree, grouped by category."""

    masspoint: list[TileFile] = Field(default_factory=list)
    hard_breakline: list[TileFile] = Field(default_factory=list)
    soft_breakline: list[TileFile] = Field(default_factory=list)

    def for_category(self, category: Category) -> list[TileFile]:
        return getattr(self, category.value)

    @property
    def total(self) -> int:
        return len(self.masspoint) + len(self.hard_breakline) + len(self.soft_breakline)


class MasspointRecord(BaseModel):
    """A single surveyed elevation point.

    Ids and coordinates keep the exact text they were read with, so rows are
    written back verbatim; ``coordinates`` gives the numeric values.
    """

    point_id: str
    area_id: str
    original_point_id: str = Field(pattern=ID_PATTERN)
    x: str = Field(pattern=NUMBER_PATTERN)
    y: str = Field(pattern=NUMBER_PATTERN)
    z: str = Field(pattern=NUMBER_PATTERN)

    @property
    def coordinates(self) -> tuple[Decimal, Decimal, Decimal]:
        return Decimal(self.x), Decimal(self.y), Decimal(self.z)

    def merge_key(self) -> tuple[str, str]:
        return self.area_id, self.original_point_id

    def to_row(self) -> list[str]:
        return [self.point_id, self.area_id, self.original_point_id, self.x, self.y, self.z]


class BreaklineRecord(BaseModel):
    """One endpoint (start or end) of a breakline segment."""

    point_id: str
    area_id: str
    line_id: str
    original_line_id: str = Field(pattern=ID_PATTERN)
    line_type: LineType
    point_type: PointType
    x: str = Field(pattern=NUMBER_PATTERN)
    y: str = Field(pattern=NUMBER_PATTERN)
    z: str = Field(pattern=NUMBER_PATTERN)

    @property
    def coordinates(self) -> tuple[Decimal, Decimal, Decimal]:
        return Decimal(self.x), Decimal(self.y), Decimal(self.z)

    def merge_key(self) -> tuple[str, str]:
        return self.area_id, self.line_id

    def to_row(self) -> list[str]:
        return [
            self.point_id,
            self.area_id,
            self.line_id,
            self.original_line_id,
            self.line_type.value,
            self.point_type.value,
            self.x,
            self.y,
            self.z,
        ]


class CategorySummary(BaseModel):
    """Statistics for one merged output file."""

    category: Category
    path: Path
    tiles: int
    records: int
    distinct_keys: int
    duplicate_ids: int = 0


class ConversionResult(BaseModel):
    """Complete result of converting an order archive."""

    order_file: Path
    output_dir: Path
    summaries: list[CategorySummary]

    def summary_for(self, category: Category) -> CategorySummary:
        for summary in self.summaries:
            if summary.category is category:
                return summary
        raise KeyError(category.value)
