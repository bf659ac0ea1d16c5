"""Reporting rows for the visit history and the next available visit.

Rows hold plain dates and integers; the Rich tables here are one rendering,
JSON export is another.
"""

import json
from collections.abc import Sequence
from datetime import date

from rich.table import Table

from src.core.schemas import NextVisitRow, SummaryRow, Visit
from src.visits.accounting import days, days_left

_SUMMARY_HEADERS = ("ID", "Enter", "Exit", "Days", "Days left")
_NEXT_HEADERS = ("Enter", "Exit", "Days", "Days until")


def build_summary(visits: Sequence[Visit], period: int, max_days: int) -> list[SummaryRow]:
    """One row per visit with the allowance left as of that visit's exit."""
    return [
        SummaryRow(
            id=v.id,
            enter_at=v.enter_at,
            exit_at=v.exit_at,
            days=days(v),
            days_left=days_left(v, visits, period, max_days),
        )
        for v in visits
    ]


def describe_next(visit: Visit, today: date | None = None) -> NextVisitRow:
    """Report row for a candidate visit found by the search."""
    today = today or date.today()
    return NextVisitRow(
        enter_at=visit.enter_at,
        exit_at=visit.exit_at,
        days=days(visit),
        days_until_now=(visit.enter_at - today).days,
    )


def summary_table(rows: Sequence[SummaryRow], total_days: int) -> Table:
    """Build the history report table, with the total in the caption."""
    table = Table(header_style="bold cyan", caption=f"Total days: {total_days}")
    for header in _SUMMARY_HEADERS:
        table.add_column(header)
    for r in rows:
        days_left_cell = (
            f"[red]{r.days_left} (over)[/red]" if r.overstayed else str(r.days_left)
        )
        table.add_row(
            str(r.id) if r.id is not None else "-",
            r.enter_at.isoformat(),
            r.exit_at.isoformat(),
            str(r.days),
            days_left_cell,
        )
    return table


def next_table(row: NextVisitRow) -> Table:
    """Build the next-visit report table."""
    table = Table(header_style="bold cyan")
    for header in _NEXT_HEADERS:
        table.add_column(header)
    table.add_row(
        row.enter_at.isoformat(),
        row.exit_at.isoformat(),
        str(row.days),
        str(row.days_until_now),
    )
    return table


def export_json(rows: Sequence[SummaryRow | NextVisitRow]) -> str:
    """Export report rows as a JSON string."""
    data = [r.model_dump(mode="json") for r in rows]
    return json.dumps(data, indent=2)
