"""Exceptions raised by the DEM pipeline.

Every error is fatal to a conversion run; callers catch ``ConversionError``.
"""

from __future__ import annotations

from pathlib import Path


class ConversionError(Exception):
    """Base class for all pipeline errors."""


class ArgumentError(ConversionError):
    """The order archive path (or another argument) is missing or invalid."""


class ArchiveError(ConversionError):
    """An archive is corrupt or cannot be read."""


class DiscoveryError(ConversionError):
    """An expected input directory or tile file is missing or unreadable."""


class MalformedRecordError(ConversionError):
    """A tile file does not conform to its format."""

    def __init__(
        self,
        reason: str,
        *,
        source: str | Path | None = None,
        line_number: int | None = None,
        line: str | None = None,
        block: int | None = None,
    ) -> None:
        self.reason = reason
        self.source = str(source) if source is not None else None
        self.line_number = line_number
        self.line = line
        self.block = block
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = [self.source or "<text>"]
        if self.block is not None:
            location.append(f"block {self.block}")
        if self.line_number is not None:
            location.append(f"line {self.line_number}")
        message = f"{', '.join(location)}: {self.reason}"
        if self.line is not None:
            message += f": {self.line!r}"
        return message


class WriteError(ConversionError):
    """An output file cannot be created or written in full."""

    def __init__(self, destination: str | Path, reason: str) -> None:
        self.destination = Path(destination)
        super().__init__(f"Cannot write {self.destination}: {reason}")


class DuplicateKeyWarning(UserWarning):
    """A merged output contains the same point_id more than once."""
