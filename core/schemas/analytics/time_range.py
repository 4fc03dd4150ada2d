"""Time range schemas for analytics endpoints."""

from datetime import datetime, timedelta

from django.utils import timezone

from pydantic import Field, model_validator

from core.constants import DEFAULT_ANALYTICS_RANGE_DAYS, MAX_ANALYTICS_RANGE_DAYS
from core.schemas.base_schema_model import BaseSchemaModel


class TimeRange(BaseSchemaModel):
    """Interval ``[start, end]`` bucketed by calendar day, both days included."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRange":
        if self.start > self.end:
            msg = "start must not be after end"
            raise ValueError(msg)
        return self

    @classmethod
    def last_days(cls, days: int, now: datetime | None = None) -> "TimeRange":
        """Range from ``days`` days ago until ``now``."""
        end = now or timezone.now()
        return cls(start=end - timedelta(days=days), end=end)


class AnalyticsRangeQuery(BaseSchemaModel):
    """``?startDate=&endDate=`` or ``?days=``; the last 30 days when omitted.

    Dates without a time zone are read in the current Django time zone.
    """

    start_date: datetime | None = None
    end_date: datetime | None = None
    days: int | None = Field(None, ge=1, le=MAX_ANALYTICS_RANGE_DAYS)

    @model_validator(mode="after")
    def _check_dates(self) -> "AnalyticsRangeQuery":
        if (self.start_date is None) != (self.end_date is None):
            msg = "startDate and endDate must be given together"
            raise ValueError(msg)
        if self.start_date is not None and self.end_date is not None:
            if _aware(self.start_date) > _aware(self.end_date):
                msg = "startDate must not be after endDate"
                raise ValueError(msg)
        return self

    def to_time_range(self, now: datetime | None = None) -> TimeRange:
        """Resolve the query into a concrete range."""
        if self.start_date is not None and self.end_date is not None:
            return TimeRange(start=_aware(self.start_date), end=_aware(self.end_date))
        return TimeRange.last_days(self.days or DEFAULT_ANALYTICS_RANGE_DAYS, now)


class TimelineQuery(BaseSchemaModel):
    """``?days=`` of the timeline endpoint."""

    days: int = Field(DEFAULT_ANALYTICS_RANGE_DAYS, ge=1, le=MAX_ANALYTICS_RANGE_DAYS)


def _aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
