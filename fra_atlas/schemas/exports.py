"""Claim export schemas."""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fra_atlas.schemas.claims import ClaimStatus


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


def _plain_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


class ExportFilters(BaseModel):
    """Export filters.

    Bounds are inclusive UTC instants. A plain ``YYYY-MM-DD`` start covers
    the whole day from midnight, a plain end date runs to the last
    microsecond of that day. Full ISO timestamps are used as given.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: Optional[ClaimStatus] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")

    @field_validator("start_date", mode="before")
    @classmethod
    def _start_of_day(cls, value: Any) -> Any:
        day = _plain_date(value)
        if day is not None:
            return datetime.combine(day, time.min, tzinfo=timezone.utc)
        return value

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_of_day(cls, value: Any) -> Any:
        day = _plain_date(value)
        if day is not None:
            return datetime.combine(day, time.max, tzinfo=timezone.utc)
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class ExportRequest(BaseModel):
    format: ExportFormat = ExportFormat.CSV
    filters: ExportFilters = Field(default_factory=ExportFilters)


class ExportFile(BaseModel):
    """Rendered export ready to be sent as an attachment."""

    content: str
    media_type: str
    filename: str
    count: int = 0


__all__ = ["ExportFormat", "ExportFilters", "ExportRequest", "ExportFile"]
