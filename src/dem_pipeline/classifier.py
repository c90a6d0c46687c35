"""Tile file discovery: sort extracted files into masspoint and breakline lists."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DiscoveryError
from .models import Category, TileFile, TileSet

logger = logging.getLogger(__name__)


def classify_tiles(root: str | Path) -> TileSet:
    """Find tile files under ``root`` by extension.

    Files with other extensions are ignored. Each list is in lexical path order
    so repeated runs see tiles in the same order.
    """
    root = Path(root)
    if not root.is_dir():
        raise DiscoveryError(f"Tile directory not found: {root}")

    tiles = TileSet()
    for path in sorted(root.resolve().rglob("*")):
        if not path.is_file():
            continue
        category = Category.from_extension(path.suffix)
        if category is None:
            continue
        tiles.for_category(category).append(TileFile.from_path(path))

    for category in Category:
        logger.info("Found %d %s files.", len(tiles.for_category(category)), category.value.replace("_", " "))
    return tiles
