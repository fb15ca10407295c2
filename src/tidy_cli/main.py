import logging
import time
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from tidy_formatter.errors import ConfigError, TidyError
from tidy_formatter.walker import TreeWalker

from .config import FormatConfig
from .converters import error_to_report, tree_stats_to_report

app = typer.Typer(help="tidy-tree - recursively rewrite Python sources in canonical form")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def setup_logging(verbose: bool = False) -> None:
    """Show INFO records (per-file sizes) when verbose, only warnings otherwise"""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
    )


@app.command()
def run(
    path: Optional[Path] = typer.Option(
        None, help="Path to recursively format (defaults to the current directory)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print per-file sizes and a summary"),
    extension: Optional[str] = typer.Option(None, help="Extension of the files to format"),
    config_file: Path = typer.Option(Path("pyproject.toml"), "--config", help="Path to config file"),
    output: OutputFormat = typer.Option(OutputFormat.TEXT, help="Summary format"),
):
    """Rewrite every Python file below PATH in canonical form"""
    try:
        config = FormatConfig(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    config.apply_overrides(verbose=verbose, extension=extension)
    setup_logging(config.verbose)

    root = path if path is not None else Path.cwd().resolve()
    walker = TreeWalker(root, config.to_walker_config())

    started = time.perf_counter()
    try:
        stats = walker.run()
    except TidyError as e:
        elapsed = time.perf_counter() - started
        if output is OutputFormat.JSON:
            typer.echo(error_to_report(root, e, elapsed).model_dump_json(indent=2))
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    elapsed = time.perf_counter() - started

    if output is OutputFormat.JSON:
        typer.echo(tree_stats_to_report(root, stats, elapsed).model_dump_json(indent=2))
    elif config.verbose:
        typer.echo(
            f"format completed, original size: {stats.original_size} bytes, "
            f"formatted size: {stats.formatted_size} bytes"
        )
        typer.echo(f"elapsed time: {elapsed:.3f}s")


if __name__ == "__main__":
    app()
