from __future__ import annotations

from ..models.run_result import RunResult

"""Summary line rendering for the microchip update run.

Format:
SUMMARY old_dogs={n} new_dogs={n} updates={n} anomalies={n} elapsed_sec={s}
"""

__all__ = [
    "format_elapsed",
    "render_summary_line",
]


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds without trailing zeros or scientific notation."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(round(seconds, 3))


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a completed run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from microchip_update.models.run_result import SnapshotStat
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     old=SnapshotStat("old.csv", 120, 100, 80),
        ...     new=SnapshotStat("new.csv", 125, 105, 86),
        ...     updates=6, anomalies=3, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY old_dogs=100 new_dogs=105 updates=6 anomalies=3 elapsed_sec=2'
    """
    return (
        f"SUMMARY old_dogs={result.old.dogs} "
        f"new_dogs={result.new.dogs} "
        f"updates={result.updates} "
        f"anomalies={result.anomalies} "
        f"elapsed_sec={format_elapsed(result.elapsed_seconds)}"
    )
