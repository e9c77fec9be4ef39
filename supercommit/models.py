"""Shared pydantic models: the contract between the parser and its consumers."""

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ParsedDirectives(BaseModel):
    """Directives read from one commit line. Serialises with camelCase keys (logHours, firstLine)."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    issue: str  # ABC-123
    status: str | None = None
    log_hours: float | None = None
    log_date: str | None = None  # yyyy-mm-dd, None means "caller's default"
    comment: str | None = None
    phase: str | None = None  # PHASE, or CAT when PHASE is absent
    ready: bool | None = None
    first_line: str

    @property
    def issue_key(self) -> str:
        return self.issue

    @property
    def has_status(self) -> bool:
        return bool(self.status)

    @property
    def has_log(self) -> bool:
        return self.log_hours is not None

    @property
    def has_comment(self) -> bool:
        return bool(self.comment)

    @property
    def log_seconds(self) -> int | None:
        if self.log_hours is None:
            return None
        return round(self.log_hours * 3600)

    @property
    def log_day(self) -> date | None:
        return date.fromisoformat(self.log_date) if self.log_date else None
