from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format (one line, space separated key=value pairs):
SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
passing={passing} failing={failing} compliance_rate={rate} elapsed_sec={elapsed}
"""

__all__ = [
    "format_number",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Render integers without a decimal point and tiny floats without exponents."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a directory run.

    Args:
        total_files: Number of workbooks found in the source directory
        result: Aggregated run metrics

    Returns:
        The SUMMARY line, including the "SUMMARY " prefix

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=4, passing_rows=3,
        ...     failing_rows=1, start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=4 passing=3 failing=1 compliance_rate=75 elapsed_sec=2'
    """
    rate = format_number(round(result.compliance_rate, 2))
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"passing={result.passing_rows} "
        f"failing={result.failing_rows} "
        f"compliance_rate={rate} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )
