"""Next-available-date search.

Walks a candidate visit forward one day at a time, starting today, until the
days already used in the candidate's rolling window leave room for the whole
stay. Once the window has moved past the last stored exit date nothing is
used, so any ``length <= max_days`` is eventually satisfied.
"""

import logging
from collections.abc import Iterable
from datetime import date, timedelta

from src.core.config import MAX_RULE_DAYS
from src.core.schemas import Visit
from src.visits.accounting import sum_all_days_since, window_start

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class InvalidParameterError(ValueError):
    """Raised when search parameters can never produce a result."""


def validate_parameters(period: int, max_days: int, length: int) -> None:
    """Reject parameters for which the search would not terminate."""
    for name, value in (("period", period), ("max_days", max_days), ("length", length)):
        if value < 1:
            msg = f"{name} must be at least 1, got {value}"
            raise InvalidParameterError(msg)
        if value > MAX_RULE_DAYS:
            msg = f"{name} must be at most {MAX_RULE_DAYS}, got {value}"
            raise InvalidParameterError(msg)
    if length > max_days:
        msg = f"length ({length}) must not exceed max_days ({max_days})"
        raise InvalidParameterError(msg)


def find_next_visit(
    history: Iterable[Visit],
    period: int,
    max_days: int,
    length: int,
    user_id: int = 0,
    today: date | None = None,
) -> Visit:
    """Find the earliest visit of ``length`` days that fits the allowance.

    Args:
        history: Stored visits of the user. Not modified.
        period: Rolling window length in days.
        max_days: Days allowed inside any window.
        length: Desired stay length in days.
        user_id: Owner recorded on the returned candidate.
        today: First entry date to consider (defaults to today).

    Returns:
        An unsaved Visit (``id`` is None) entering on or after ``today``.

    Raises:
        InvalidParameterError: If any parameter is below 1 or above
            ``MAX_RULE_DAYS``, or if ``length`` exceeds ``max_days``.
    """
    validate_parameters(period, max_days, length)
    visits = list(history)
    enter_at = today or date.today()
    exit_at = enter_at + timedelta(days=length - 1)
    candidate = Visit(user_id=user_id, enter_at=enter_at, exit_at=exit_at)
    cutoff = window_start(candidate, period)

    attempts = 0
    while max_days - sum_all_days_since(candidate, cutoff, visits) < length:
        attempts += 1
        cutoff += _ONE_DAY
        candidate = candidate.model_copy(update={
            "enter_at": candidate.enter_at + _ONE_DAY,
            "exit_at": candidate.exit_at + _ONE_DAY,
        })

    logger.debug(
        "Next visit found after %d shifts: %s to %s",
        attempts, candidate.enter_at, candidate.exit_at,
    )
    return candidate
