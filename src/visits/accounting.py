"""Window accounting: how many days of a visit history fall inside a window.

All counts are inclusive of both endpoints, so a visit entering and leaving
on the same day counts as one day. A window is anchored to a reference
visit's exit date rather than to "today", which lets the same functions
summarize stored history and evaluate a hypothetical future visit.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from src.core.schemas import Visit


def days(visit: Visit) -> int:
    """Number of calendar days the visit spans (always >= 1)."""
    return (visit.exit_at - visit.enter_at).days + 1


def days_since(visit: Visit, cutoff: date) -> int:
    """Days of the visit falling on or after ``cutoff``.

    Returns 0 when the visit ended before the cutoff and the full length
    when it started on or after it.
    """
    if cutoff > visit.exit_at:
        return 0
    if cutoff > visit.enter_at:
        return (visit.exit_at - cutoff).days + 1
    return days(visit)


def sum_all_days(visits: Iterable[Visit]) -> int:
    """Total days across all visits, ignoring any window."""
    return sum(days(v) for v in visits)


def sum_all_days_since(reference: Visit, cutoff: date, visits: Iterable[Visit]) -> int:
    """Days used in the window ``[cutoff, reference.exit_at]``.

    Visits entering on or after the reference's exit date have not happened
    yet relative to the reference and are skipped.
    """
    return sum(
        days_since(v, cutoff)
        for v in visits
        if v.enter_at < reference.exit_at
    )


def window_start(reference: Visit, period: int) -> date:
    """First day of the rolling window measured back from the reference's exit.

    Clamped to ``date.min`` when the period reaches back past year 1.
    """
    try:
        return reference.exit_at - timedelta(days=period)
    except OverflowError:
        return date.min


def days_left(reference: Visit, visits: Iterable[Visit], period: int, max_days: int) -> int:
    """Allowance remaining in the window ending at the reference's exit.

    Negative when the history already exceeds ``max_days``.
    """
    cutoff = window_start(reference, period)
    return max_days - sum_all_days_since(reference, cutoff, visits)
