"""Tests for core schemas: User, Visit, SummaryRow, NextVisitRow."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.core.schemas import NextVisitRow, SummaryRow, User, Visit, VisitSummary


def _make_visit(**overrides: object) -> Visit:
    defaults: dict[str, object] = {
        "id": 1,
        "user_id": 1,
        "enter_at": date(2018, 1, 1),
        "exit_at": date(2018, 1, 10),
    }
    defaults.update(overrides)
    return Visit(**defaults)  # type: ignore[arg-type]


class TestUser:
    def test_create(self) -> None:
        u = User(id=1, username="alice")
        assert u.username == "alice"
        assert u.created_at is None

    def test_username_stripped(self) -> None:
        assert User(id=1, username="  bob ").username == "bob"

    def test_blank_username_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User(id=1, username="   ")


class TestVisit:
    def test_create_with_required_fields(self) -> None:
        v = Visit(user_id=3, enter_at=date(2018, 1, 1), exit_at=date(2018, 1, 1))
        assert v.id is None
        assert v.created_at is None

    def test_exit_before_enter_rejected(self) -> None:
        with pytest.raises(ValidationError, match="before enter date"):
            _make_visit(enter_at=date(2018, 1, 10), exit_at=date(2018, 1, 9))

    def test_parses_iso_strings(self) -> None:
        v = Visit.model_validate({
            "id": 5,
            "user_id": 1,
            "enter_at": "2018-01-05",
            "exit_at": "2018-01-10",
            "created_at": "2018-01-11T09:30:00",
            "updated_at": "2018-01-11T09:30:00",
        })
        assert v.enter_at == date(2018, 1, 5)
        assert v.created_at == datetime(2018, 1, 11, 9, 30)

    def test_frozen_model(self) -> None:
        v = _make_visit()
        with pytest.raises(ValidationError):
            v.exit_at = date(2018, 2, 1)  # type: ignore[misc]

    def test_equality(self) -> None:
        assert _make_visit() == _make_visit()

    def test_different_visits_not_equal(self) -> None:
        assert _make_visit(id=1) != _make_visit(id=2)


class TestSummaryRow:
    def test_overstayed(self) -> None:
        row = SummaryRow(
            id=1, enter_at=date(2018, 1, 1), exit_at=date(2018, 4, 30), days=120, days_left=-30,
        )
        assert row.overstayed is True

    def test_not_overstayed_at_zero(self) -> None:
        row = SummaryRow(
            id=1, enter_at=date(2018, 1, 1), exit_at=date(2018, 3, 31), days=90, days_left=0,
        )
        assert row.overstayed is False


class TestNextVisitRow:
    def test_create(self) -> None:
        row = NextVisitRow(
            enter_at=date(2018, 1, 1), exit_at=date(2018, 1, 3), days=3, days_until_now=4,
        )
        assert row.days == 3
        assert row.days_until_now == 4


class TestVisitSummary:
    def test_frozen(self) -> None:
        summary = VisitSummary(rows=[], total_days=0)
        with pytest.raises(ValidationError):
            summary.total_days = 5  # type: ignore[misc]
