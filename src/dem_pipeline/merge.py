"""Merge per-tile records of one category into a single CSV file."""

from __future__ import annotations

import csv
import logging
import os
import tempfile
import warnings
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import DuplicateKeyWarning, WriteError
from .models import BreaklineRecord, MasspointRecord

logger = logging.getLogger(__name__)

Record = MasspointRecord | BreaklineRecord


@dataclass
class MergeStats:
    tiles: int = 0
    records: int = 0
    distinct_keys: int = 0
    duplicate_ids: int = 0


def current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def count_distinct_keys(records: Iterable[Record]) -> int:
    """Count distinct ``(area_id, point/line id)`` pairs, ignoring empty keys.

    This is a reporting figure only; nothing is removed.
    """
    return len({key for key in (r.merge_key() for r in records) if all(key)})


def merge_category(
    tiles: Iterable[Sequence[Record]],
    header: Sequence[str],
    destination: str | Path,
) -> MergeStats:
    """Write ``header`` then every tile's records, in the order given, to ``destination``.

    The file is written beside the destination under a temporary name and
    renamed into place once complete, so a failed merge leaves nothing behind.
    Exceptions raised while iterating ``tiles`` abort the merge.
    """
    destination = Path(destination)
    stats = MergeStats()
    keys: set[tuple[str, str]] = set()
    point_ids: set[str] = set()

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent)
    except OSError as exc:
        raise WriteError(destination, str(exc)) from exc
    tmp_path = Path(tmp_name)

    try:
        with open(fd, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(header)
            for records in tiles:
                stats.tiles += 1
                for record in records:
                    writer.writerow(record.to_row())
                    key = record.merge_key()
                    if all(key):
                        keys.add(key)
                    if record.point_id in point_ids:
                        stats.duplicate_ids += 1
                    else:
                        point_ids.add(record.point_id)
                    stats.records += 1
        # mkstemp files are 0600
        os.chmod(tmp_path, 0o666 & ~current_umask())
        os.replace(tmp_path, destination)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise WriteError(destination, str(exc)) from exc
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    stats.distinct_keys = len(keys)
    if stats.duplicate_ids:
        message = f"{destination.name} contains {stats.duplicate_ids} duplicate point_id values"
        logger.warning(message)
        warnings.warn(message, DuplicateKeyWarning, stacklevel=2)

    logger.info(
        "Created %s with %d records from %d tiles (%d distinct keys).",
        destination, stats.records, stats.tiles, stats.distinct_keys,
    )
    return stats
