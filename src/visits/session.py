"""Session: one user's view of the visit log.

Usage::

    session = VisitSession(SqliteVisitRepository(conn), "alice")
    session.add_visit(date(2024, 1, 1), date(2024, 1, 10))
    candidate = session.next_visit(settings.rules)
"""

import logging
from datetime import date

from src.core.config import RulesConfig
from src.core.schemas import Visit, VisitSummary
from src.visits.accounting import sum_all_days
from src.visits.report import build_summary
from src.visits.repository import VisitRepository
from src.visits.search import find_next_visit

logger = logging.getLogger(__name__)


class VisitSession:
    """Runs visit operations for a single user against a repository."""

    def __init__(self, repository: VisitRepository, username: str) -> None:
        self._repository = repository
        self.user = repository.find_or_create_user(username)

    def all_visits(self) -> list[Visit]:
        return self._repository.load_visits(self.user)

    def add_visit(self, enter_at: date, exit_at: date) -> Visit:
        """Add a visit to the user's log."""
        if exit_at < enter_at:
            msg = f"exit date {exit_at} is before enter date {enter_at}"
            raise ValueError(msg)
        visit = self._repository.insert_visit(self.user.id, enter_at, exit_at)
        logger.info(
            "Added visit %s for '%s': %s to %s",
            visit.id, self.user.username, enter_at, exit_at,
        )
        return visit

    def remove_visit(self, visit_id: int) -> int:
        """Remove one of the user's visits. Returns rows removed (0 or 1)."""
        removed = self._repository.delete_visit(self.user.id, visit_id)
        if removed:
            logger.info("Removed visit %d for '%s'", visit_id, self.user.username)
        else:
            logger.debug("No visit %d for '%s'", visit_id, self.user.username)
        return removed

    def next_visit(self, rules: RulesConfig, today: date | None = None) -> Visit:
        """Earliest visit of ``rules.length`` days that keeps within the allowance."""
        return find_next_visit(
            self.all_visits(),
            period=rules.period,
            max_days=rules.max_days,
            length=rules.length,
            user_id=self.user.id,
            today=today,
        )

    def summary(self, rules: RulesConfig) -> VisitSummary:
        """Per-visit allowance rows and the total days across the history."""
        visits = self.all_visits()
        return VisitSummary(
            rows=build_summary(visits, rules.period, rules.max_days),
            total_days=sum_all_days(visits),
        )
