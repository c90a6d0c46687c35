"""Order-to-CSV conversion: unpack, classify, parse and merge."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path

from .archive import unpack_order
from .breakline_reader import read_breakline_file
from .classifier import classify_tiles
from .config import WORK_DIR_PREFIX, PipelineConfig
from .errors import ArgumentError, WriteError
from .masspoint_reader import read_masspoint_file
from .merge import Record, count_distinct_keys, current_umask, merge_category
from .models import Category, CategorySummary, ConversionResult, TileFile, TileSet

logger = logging.getLogger(__name__)


def convert_order(config: PipelineConfig) -> ConversionResult:
    """Convert an order archive into masspoint, hard and soft breakline CSVs.

    Outputs are staged next to ``config.output_dir`` and only published once
    all three files have been written.
    """
    if not config.order_file.is_file():
        raise ArgumentError(f"Order file not found: {config.order_file}")

    work_dir = _make_work_dir(config.work_dir)
    try:
        unpack_order(config.order_file, work_dir / "order")
        tiles = classify_tiles(work_dir / "order")
        summaries = _write_outputs(tiles, config.output_dir)
    finally:
        if config.keep_work_dir:
            logger.info("Keeping working directory %s.", work_dir)
        else:
            logger.debug("Cleaning up working directory %s...", work_dir)
            shutil.rmtree(work_dir, ignore_errors=True)

    logger.info("Files output to %s.", config.output_dir)
    return ConversionResult(order_file=config.order_file, output_dir=config.output_dir, summaries=summaries)


def read_tile(tile: TileFile) -> list[Record]:
    """Parse one tile file according to its category."""
    if tile.category is Category.MASSPOINT:
        return read_masspoint_file(tile.path)
    return read_breakline_file(tile.path)


def iter_tile_records(tiles: list[TileFile]) -> Iterator[list[Record]]:
    """Parse tiles one at a time, logging per-tile counts."""
    for tile in tiles:
        logger.info("> Converting %s file %s...", tile.category.value.replace("_", " "), tile.path.name)
        records = read_tile(tile)
        logger.info("  Found %d records, %d distinct keys.", len(records), count_distinct_keys(records))
        yield records


def _write_outputs(tiles: TileSet, output_dir: Path) -> list[CategorySummary]:
    output_dir = output_dir.absolute()
    try:
        output_dir.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}-", dir=output_dir.parent))
        # mkdtemp directories are 0700
        staging.chmod(0o777 & ~current_umask())
    except OSError as exc:
        raise WriteError(output_dir, str(exc)) from exc

    try:
        summaries = []
        for category in Category:
            logger.info("Creating %s CSV...", category.value.replace("_", " "))
            category_tiles = tiles.for_category(category)
            stats = merge_category(
                iter_tile_records(category_tiles),
                category.header,
                staging / category.output_name,
            )
            summaries.append(
                CategorySummary(
                    category=category,
                    path=output_dir / category.output_name,
                    tiles=stats.tiles,
                    records=stats.records,
                    distinct_keys=stats.distinct_keys,
                    duplicate_ids=stats.duplicate_ids,
                )
            )
        _publish(staging, output_dir)
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    return summaries


def _publish(staging: Path, output_dir: Path) -> None:
    """Move the staged CSVs into ``output_dir`` as a set.

    A new output directory is the staging directory renamed into place. An
    existing one keeps its other files; its previous CSVs are moved aside first
    and put back if any replacement fails.
    """
    try:
        if not output_dir.exists():
            staging.rename(output_dir)
            return
        previous = staging / ".previous"
        previous.mkdir()
    except OSError as exc:
        raise WriteError(output_dir, str(exc)) from exc

    backed_up: list[str] = []
    replaced: list[str] = []
    try:
        for category in Category:
            name = category.output_name
            if (output_dir / name).exists():
                os.replace(output_dir / name, previous / name)
                backed_up.append(name)
            os.replace(staging / name, output_dir / name)
            replaced.append(name)
    except OSError as exc:
        _restore(backed_up, replaced, previous, output_dir)
        raise WriteError(output_dir, str(exc)) from exc


def _restore(backed_up: list[str], replaced: list[str], previous: Path, output_dir: Path) -> None:
    for name in dict.fromkeys(backed_up + replaced):
        try:
            if name in backed_up:
                os.replace(previous / name, output_dir / name)
            else:
                (output_dir / name).unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Could not restore %s: %s", output_dir / name, exc)


def _make_work_dir(work_dir: Path | None) -> Path:
    if work_dir is not None and work_dir.exists() and (not work_dir.is_dir() or any(work_dir.iterdir())):
        raise ArgumentError(f"Working directory must be absent or empty: {work_dir}")
    try:
        if work_dir is None:
            return Path(tempfile.mkdtemp(prefix=WORK_DIR_PREFIX))
        work_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArgumentError(f"Cannot create working directory: {exc}") from exc
    return work_dir
