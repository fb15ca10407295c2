import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, List, Optional, Set

from .errors import (
    FileFormatError,
    InvalidRootError,
    ParseError,
    ReadError,
    TraversalError,
    TreeFormatError,
    WriteError,
)
from .models import EntryKind, FileFailure, FileStats, TreeStats, WalkerConfig
from .reformatter import ReformatError, reformat

logger = logging.getLogger(__name__)

Reformat = Callable[[str, str], str]


class TreeWalker:
    """Formats every eligible file below a root path, in place.

    File-level failures (read, parse, write) are collected and reported
    together once the walk is over; a directory that cannot be listed
    aborts the whole walk.
    """

    def __init__(
        self,
        root: Path,
        config: Optional[WalkerConfig] = None,
        reformatter: Reformat = reformat,
    ):
        self.root = root
        self.config = config or WalkerConfig()
        self.reformatter = reformatter
        self._level = logging.INFO if self.config.verbose else logging.DEBUG
        self._seen_dirs: Set[Path] = set()
        self._seen_files: Set[Path] = set()

    def run(self) -> TreeStats:
        """Format the root, whether it is a single file or a directory."""
        self._seen_dirs.clear()
        self._seen_files.clear()

        kind = self.classify(self.root)
        if kind.is_eligible:
            totals = TreeStats()
            totals.add(self.format_file(self.root))
            return totals
        if kind.is_container:
            return self.format_tree(self.root)
        raise InvalidRootError(self.root)

    def classify(self, path: Path) -> EntryKind:
        if self.is_candidate_name(path.name):
            if path.is_symlink():
                return EntryKind.SYMLINK
            if path.is_file():
                return EntryKind.FILE
        if path.is_dir():
            return EntryKind.FOLLOWED_SYMLINK if path.is_symlink() else EntryKind.DIRECTORY
        return EntryKind.IGNORED

    def is_candidate_name(self, name: str) -> bool:
        return Path(name).suffix == self.config.extension

    def format_file(self, path: Path) -> FileStats:
        """Reformat one file and write the canonical text back to it."""
        started = time.perf_counter()
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                original = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, e) from e

        # A leading BOM is not part of the source; the output is written without it
        source = original[1:] if original.startswith("\ufeff") else original
        try:
            formatted = self.reformatter(source, str(path))
        except ReformatError as e:
            raise ParseError(path, e) from e

        stats = FileStats(
            original_size=len(original.encode("utf-8")),
            formatted_size=len(formatted.encode("utf-8")),
        )
        # Already canonical: leave the file (and its mtime) alone
        if formatted != original:
            self._write(path, formatted)

        logger.log(
            self._level,
            "formatting file %s, original size %d bytes, formatted size %d bytes (%.3fs)",
            path,
            stats.original_size,
            stats.formatted_size,
            time.perf_counter() - started,
        )
        return stats

    def format_tree(self, path: Path) -> TreeStats:
        """Post-order walk of ``path``.

        Returns the totals when every eligible file below ``path`` was
        formatted, raises TreeFormatError with all collected failures
        otherwise.
        """
        try:
            real = path.resolve()
        except (OSError, RuntimeError) as e:
            raise TraversalError(path, e) from e
        if real in self._seen_dirs:
            logger.debug("skipping %s, already visited as %s", path, real)
            return TreeStats()
        self._seen_dirs.add(real)

        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as e:
            raise TraversalError(path, e) from e

        logger.debug("entering %s (%d entries)", path, len(entries))
        totals = TreeStats()
        failures: List[FileFailure] = []

        for entry in entries:
            entry_path = Path(entry.path)
            kind = self._classify_entry(entry)

            if kind.is_eligible:
                if not self._claim_file(entry_path):
                    continue
                try:
                    totals.add(self.format_file(entry_path))
                except FileFormatError as e:
                    failures.append(FileFailure(path=entry_path, error=e))
            elif kind.is_container:
                if entry.name in self.config.exclude:
                    logger.debug("excluded %s", entry_path)
                    continue
                try:
                    totals.add(self.format_tree(entry_path))
                except TreeFormatError as e:
                    failures.extend(e.failures)

        if failures:
            raise TreeFormatError(failures)
        return totals

    def _classify_entry(self, entry: os.DirEntry) -> EntryKind:
        try:
            is_link = entry.is_symlink()
            if self.is_candidate_name(entry.name) and (
                is_link or entry.is_file(follow_symlinks=False)
            ):
                return EntryKind.SYMLINK if is_link else EntryKind.FILE
            if entry.is_dir(follow_symlinks=False):
                return EntryKind.DIRECTORY
        except OSError as e:
            raise TraversalError(Path(entry.path), e) from e
        # Any other link is descended into; one that is not a directory
        # cannot be listed and aborts the walk
        if is_link:
            return EntryKind.FOLLOWED_SYMLINK
        return EntryKind.IGNORED

    def _claim_file(self, path: Path) -> bool:
        """False when the same file was already reached through another link."""
        real = Path(os.path.realpath(path))
        if real in self._seen_files:
            logger.debug("skipping %s, already formatted as %s", path, real)
            return False
        self._seen_files.add(real)
        return True

    def _write(self, path: Path, content: str) -> None:
        """Replace the file through a sibling temporary file.

        Falls back to writing in place when the file has other hard links
        or no temporary file can be created next to it (read-only
        directory). The replace path resets ownership to the current user.
        """
        # Symlinks are followed so the link itself survives the replace
        target = Path(os.path.realpath(path))
        try:
            if target.stat().st_nlink > 1:
                _write_in_place(target, content)
                return
            try:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
                )
            except OSError as e:
                logger.debug("no temporary file next to %s (%s), writing in place", target, e)
                _write_in_place(target, content)
                return
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(content)
                shutil.copymode(target, tmp_name)
                os.replace(tmp_name, target)
            except OSError:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise WriteError(path, e) from e


def _write_in_place(target: Path, content: str) -> None:
    with open(target, "w", encoding="utf-8", newline="") as f:
        f.write(content)
