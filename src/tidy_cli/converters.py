from pathlib import Path

from tidy_formatter.errors import TidyError, TreeFormatError
from tidy_formatter.models import FileFailure, TreeStats

from .models import FailureReport, FormatReport


def file_failure_to_report(failure: FileFailure) -> FailureReport:
    """Convert an internal dataclass failure to an external Pydantic one"""
    return FailureReport(
        path=str(failure.path),
        error_type=type(failure.error).__name__,
        message=str(failure.error),
    )


def tree_stats_to_report(root: Path, stats: TreeStats, elapsed: float) -> FormatReport:
    return FormatReport(
        root=str(root),
        success=True,
        files_formatted=stats.files,
        original_size=stats.original_size,
        formatted_size=stats.formatted_size,
        size_delta=stats.formatted_size - stats.original_size,
        elapsed_seconds=round(elapsed, 6),
    )


def error_to_report(root: Path, error: TidyError, elapsed: float) -> FormatReport:
    """Partial totals are not reported; a failed run only lists what went wrong"""
    if isinstance(error, TreeFormatError):
        failures = [file_failure_to_report(f) for f in error.failures]
    else:
        failures = [
            FailureReport(
                path=str(getattr(error, "path", root)),
                error_type=type(error).__name__,
                message=str(error),
            )
        ]
    return FormatReport(
        root=str(root),
        success=False,
        elapsed_seconds=round(elapsed, 6),
        failures=failures,
        error=str(error),
    )
