"""DEM order archive to CSV pipeline."""

from .archive import unpack_order
from .breakline_reader import parse_breaklines, read_breakline_file
from .classifier import classify_tiles
from .config import PipelineConfig, ServerConfig
from .errors import (
    ArchiveError,
    ArgumentError,
    ConversionError,
    DiscoveryError,
    DuplicateKeyWarning,
    MalformedRecordError,
    WriteError,
)
from .ids import breakline_line_id, breakline_point_id, masspoint_point_id
from .masspoint_reader import parse_masspoints, read_masspoint_file
from .merge import count_distinct_keys, merge_category
from .models import (
    BreaklineRecord,
    Category,
    CategorySummary,
    ConversionResult,
    LineType,
    MasspointRecord,
    PointType,
    TileFile,
    TileSet,
)
from .pipeline import convert_order

__all__ = [
    "ArchiveError",
    "ArgumentError",
    "BreaklineRecord",
    "Category",
    "CategorySummary",
    "ConversionError",
    "ConversionResult",
    "DiscoveryError",
    "DuplicateKeyWarning",
    "LineType",
    "MalformedRecordError",
    "MasspointRecord",
    "PipelineConfig",
    "ServerConfig",
    "PointType",
    "TileFile",
    "TileSet",
    "WriteError",
    "breakline_line_id",
    "breakline_point_id",
    "classify_tiles",
    "convert_order",
    "count_distinct_keys",
    "masspoint_point_id",
    "merge_category",
    "parse_breaklines",
    "parse_masspoints",
    "read_breakline_file",
    "read_masspoint_file",
    "unpack_order",
]
