"""
tidy-tree formatter core - canonical rewriting of Python source trees

This package provides:
- Canonical reformatting of a single source text
- Recursive, in-place formatting of a directory tree
- Per-file failure isolation with aggregated reporting
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    FileFormatError,
    InvalidRootError,
    ParseError,
    ReadError,
    TidyError,
    TraversalError,
    TreeFormatError,
    WriteError,
)
from .models import EntryKind, FileFailure, FileStats, TreeStats, WalkerConfig
from .reformatter import ReformatError, reformat
from .walker import TreeWalker

__all__ = [
    "TreeWalker",
    "WalkerConfig",
    "EntryKind",
    "FileStats",
    "FileFailure",
    "TreeStats",
    "reformat",
    "ReformatError",
    "TidyError",
    "InvalidRootError",
    "FileFormatError",
    "ReadError",
    "ParseError",
    "WriteError",
    "TraversalError",
    "TreeFormatError",
    "ConfigError",
]
