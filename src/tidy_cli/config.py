import tomllib
from pathlib import Path
from typing import Any

from tidy_formatter.errors import ConfigError
from tidy_formatter.models import WalkerConfig


def normalize_extension(extension: str) -> str:
    extension = extension.strip()
    if not extension.startswith("."):
        extension = "." + extension
    return extension


class FormatConfig:
    """Handles loading and validation of the [tool.tidy-tree] configuration"""

    def __init__(self, config_path: Path | None = None):
        self.extension: str = ".py"
        self.verbose: bool = False
        self.exclude: list[str] = []

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(path, e) from e

        table = data.get("tool", {}).get("tidy-tree", {})
        self.extension = normalize_extension(self._expect(path, table, "extension", str, self.extension))
        self.verbose = self._expect(path, table, "verbose", bool, self.verbose)
        self.exclude = list(self._expect(path, table, "exclude", list, self.exclude))

    @staticmethod
    def _expect(path: Path, table: dict[str, Any], key: str, kind: type, default: Any) -> Any:
        value = table.get(key, default)
        if not isinstance(value, kind):
            raise ConfigError(path, TypeError(f"'{key}' must be of type {kind.__name__}"))
        return value

    def apply_overrides(self, verbose: bool = False, extension: str | None = None):
        """Command-line flags win over the file"""
        if verbose:
            self.verbose = True
        if extension:
            self.extension = normalize_extension(extension)

    def to_walker_config(self) -> WalkerConfig:
        return WalkerConfig(extension=self.extension, verbose=self.verbose, exclude=list(self.exclude))
