"""Caller-owned configuration of a scroll operation."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimeEntriesFilter(BaseModel):
    """
    Restricts time entry listings to one user and a range of dates.
    Only used for the time entry endpoint, ignored for every other entity kind.
    """
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    user_id: str

    @model_validator(mode="after")
    def _check_range(self) -> "TimeEntriesFilter":
        if self.end_date < self.start_date:
            raise ValueError(f"end_date {self.end_date} is before start_date {self.start_date}")
        return self


class ScrollConfig(BaseModel):
    """
    Connection, logging, filtering and retry settings shared by every page request of a scroll.

    Attributes:
        base_url: Root URL of the tracker server, e.g. "https://redmine.example.org".
        api_token: API key sent with every request.
        log_enabled: Log each outgoing request line and incoming status line.
        time_entries_filter: Optional user/date filter for time entries.
        timeout: Per-request timeout in seconds.
        retry_attempts: Attempts per page before the scroll gives up. None retries forever.
        retry_backoff: Base delay in seconds of the exponential backoff between attempts.
        retry_backoff_max: Upper bound of a single backoff delay in seconds.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_token: str = ""
    log_enabled: bool = False
    time_entries_filter: TimeEntriesFilter | None = None
    timeout: float = Field(default=30.0, gt=0)
    retry_attempts: int | None = Field(default=5, ge=1)
    retry_backoff: float = Field(default=0.5, ge=0)
    retry_backoff_max: float = Field(default=10.0, ge=0)
