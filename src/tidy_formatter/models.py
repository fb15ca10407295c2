from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class EntryKind(str, Enum):
    FILE = "file"
    SYMLINK = "symlink"
    DIRECTORY = "directory"
    FOLLOWED_SYMLINK = "followed_symlink"
    IGNORED = "ignored"

    @property
    def is_eligible(self) -> bool:
        return self in (EntryKind.FILE, EntryKind.SYMLINK)

    @property
    def is_container(self) -> bool:
        return self in (EntryKind.DIRECTORY, EntryKind.FOLLOWED_SYMLINK)


@dataclass
class WalkerConfig:
    extension: str = ".py"
    verbose: bool = False
    exclude: List[str] = field(default_factory=list)


@dataclass
class FileStats:
    """Byte sizes of one successfully formatted file"""

    original_size: int
    formatted_size: int


@dataclass
class FileFailure:
    path: Path
    error: Exception

    def render(self) -> str:
        return f"error: {self.path}: {self.error}"


@dataclass
class TreeStats:
    """Totals for a subtree in which every eligible file was formatted"""

    original_size: int = 0
    formatted_size: int = 0
    files: int = 0

    def add(self, stats: "FileStats | TreeStats") -> None:
        self.original_size += stats.original_size
        self.formatted_size += stats.formatted_size
        self.files += stats.files if isinstance(stats, TreeStats) else 1
