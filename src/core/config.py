"""Configuration models and YAML loader for the visit day counter."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

# Upper bound for any rule value in days (about 100 years), keeping date
# arithmetic inside the range of datetime.date.
MAX_RULE_DAYS = 36_600


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/visits.db"


class RulesConfig(BaseModel):
    """Rolling-window allowance rule.

    ``max_days`` days may be spent in any window of ``period`` days.
    ``length`` is the default stay length used when searching for the next
    available entry date. Whether ``length`` fits inside ``max_days`` is
    checked by the search, the only operation that uses it.
    """

    period: int = Field(default=180, ge=1, le=MAX_RULE_DAYS)
    max_days: int = Field(default=90, ge=1, le=MAX_RULE_DAYS)
    length: int = Field(default=1, ge=1, le=MAX_RULE_DAYS)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    username: str | None = None

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.strip():
            msg = "username must not be empty"
            raise ValueError(msg)
        return v.strip()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
