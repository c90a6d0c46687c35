"""Order archive unpacker.

An order is a zip of zips: the outer archive holds one zip per DEM tile group,
and each of those holds the tile files themselves.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from .errors import ArchiveError, ArgumentError

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".zip"
MAX_NESTING = 8


def unpack_order(order_file: str | Path, destination: str | Path) -> list[Path]:
    """Extract an order archive and every archive nested inside it.

    Nested archives are extracted next to themselves, into a directory named
    after the archive stem, and then deleted.

    Args:
        order_file: Path to the order .zip.
        destination: Directory to extract into (created if missing).

    Returns:
        The nested archives that were expanded, in extraction order.
    """
    order_file = Path(order_file)
    destination = Path(destination)
    if not order_file.is_file():
        raise ArgumentError(f"Order file not found: {order_file}")

    logger.info("Unpacking order file %s...", order_file)
    _extract(order_file, destination)

    expanded: list[Path] = []
    for depth in range(MAX_NESTING + 1):
        nested = find_archives(destination)
        if not nested:
            break
        if depth == MAX_NESTING:
            raise ArchiveError(f"Archives nested more than {MAX_NESTING} levels deep in {order_file}")

        logger.info("Found %d nested zips, unpacking...", len(nested))
        for archive in nested:
            target = archive.parent / archive.stem
            if target.exists() and not target.is_dir():
                raise ArchiveError(f"Cannot unpack {archive}: {target} exists and is not a directory")
            logger.info("> Unpacking %s...", archive.name)
            _extract(archive, target)
            archive.unlink()
            expanded.append(archive)

    logger.info("Order file %s unpacked, %d zips expanded.", order_file.name, len(expanded))
    return expanded


def find_archives(root: Path) -> list[Path]:
    """List zip files under ``root`` in path order."""
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ARCHIVE_SUFFIX)


def _extract(archive: Path, target: Path) -> None:
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(target)
    except (zipfile.BadZipFile, NotImplementedError, OSError) as exc:
        raise ArchiveError(f"Cannot unpack {archive}: {exc}") from exc
