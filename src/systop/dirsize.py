"""Directory footprint scanning."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from systop.models import DirectoryEntry, DirectorySizeReport

logger = logging.getLogger(__name__)

HOME_SUBDIRECTORIES = ("Downloads", "Documents", "Pictures", "Videos", "Desktop", "Music")
SCAN_FAILED = "Could not calculate size"


class ScanError(Exception):
    """Raised when a directory cannot be read."""

    def __init__(self, path: str | os.PathLike[str], reason: str = "") -> None:
        self.path = Path(path)
        message = f"cannot scan {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def size_of(path: str | os.PathLike[str]) -> int:
    """
    Sum the sizes of the regular files directly inside `path`.

    Subdirectories are not descended into and symlinks are not followed, so
    nested content does not count towards the total. A missing path or a
    path that is not a directory yields 0.

    Raises:
        ScanError: If the directory itself cannot be read. An error while
            iterating the directory also raises ScanError.
    """
    path = Path(path)
    if not os.path.isdir(path):
        return 0

    total = 0
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
                except OSError as exc:
                    logger.debug("Skipping %s: %s", entry.path, exc)
    except OSError as exc:
        raise ScanError(path, exc.strerror or str(exc)) from exc
    return total


def rank_subdirectories(
    base: str | os.PathLike[str],
    candidates: Iterable[str] = HOME_SUBDIRECTORIES,
    limit: int = 2,
) -> tuple[DirectoryEntry, ...]:
    """
    Rank the candidate subdirectories of `base` by size, largest first.

    Candidates that are missing, unreadable or empty are left out.
    """
    base = Path(base)
    entries: list[DirectoryEntry] = []
    for name in candidates:
        candidate = base / name
        if not os.path.isdir(candidate):
            continue
        try:
            size = size_of(candidate)
        except ScanError as exc:
            logger.debug("Skipping candidate %s", exc.path)
            continue
        if size > 0:
            entries.append(DirectoryEntry(name=name, size_bytes=size))

    entries.sort(key=lambda e: e.size_bytes, reverse=True)
    return tuple(entries[: max(limit, 0)])


def scan_directory(
    path: str | os.PathLike[str],
    candidates: Iterable[str] = HOME_SUBDIRECTORIES,
    limit: int = 2,
) -> DirectorySizeReport:
    """Build a DirectorySizeReport, turning a ScanError into a placeholder."""
    path = Path(path)
    try:
        total = size_of(path)
    except ScanError as exc:
        logger.info("%s", exc)
        return DirectorySizeReport(path=path, total_bytes=None, error=SCAN_FAILED)

    return DirectorySizeReport(
        path=path,
        total_bytes=total,
        subdirectories=rank_subdirectories(path, candidates, limit),
    )
