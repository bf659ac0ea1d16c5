"""Core data models for the visit day counter."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class User(BaseModel):
    """A traveler. Pure identity used to scope a visit history."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("username")
    @classmethod
    def username_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "username must not be empty"
            raise ValueError(msg)
        return v.strip()


class Visit(BaseModel):
    """A stay in the country, inclusive of both the entry and the exit day.

    Frozen: a visit is replaced or deleted, never edited in place.
    ``id`` is None for a hypothetical visit that has not been stored.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    user_id: int
    enter_at: date
    exit_at: date
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def exit_not_before_enter(self) -> "Visit":
        if self.exit_at < self.enter_at:
            msg = f"exit date {self.exit_at} is before enter date {self.enter_at}"
            raise ValueError(msg)
        return self


class SummaryRow(BaseModel):
    """One line of the visit history report."""

    model_config = ConfigDict(frozen=True)

    id: int | None
    enter_at: date
    exit_at: date
    days: int
    days_left: int

    @property
    def overstayed(self) -> bool:
        return self.days_left < 0


class NextVisitRow(BaseModel):
    """Report for the next available visit."""

    model_config = ConfigDict(frozen=True)

    enter_at: date
    exit_at: date
    days: int
    days_until_now: int


class VisitSummary(BaseModel):
    """History report for one user: a row per visit plus the overall total."""

    model_config = ConfigDict(frozen=True)

    rows: list[SummaryRow]
    total_days: int
