from pathlib import Path
from typing import List

from .models import FileFailure


class TidyError(Exception):
    """Base class for every error raised by tidy-tree"""


class InvalidRootError(TidyError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"path {path} is not a file, symlink or directory")


class ConfigError(TidyError):
    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to load config {path}: {cause}")


class FileFormatError(TidyError):
    """A single file could not be formatted; never aborts a tree walk."""

    action = "format"

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to {self.action} file {path}: {cause}")


class ReadError(FileFormatError):
    action = "read"


class ParseError(FileFormatError):
    action = "parse"


class WriteError(FileFormatError):
    """Writing the canonical output failed.

    When the write went through a temporary file, that file is discarded
    and the original content is left in place. An in-place write (hard
    links, read-only directory) may leave the file truncated. There is no
    rollback.
    """

    action = "write"


class TraversalError(TidyError):
    """Listing a directory or reading an entry's type failed; fatal."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to traverse {path}: {cause}")


class TreeFormatError(TidyError):
    """One or more files in a tree walk failed.

    Carries every collected failure. Totals of the files that did succeed
    are intentionally not exposed.
    """

    def __init__(self, failures: List[FileFailure]):
        self.failures = list(failures)
        super().__init__("\n".join(failure.render() for failure in self.failures))
