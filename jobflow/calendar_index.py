"""Per-day indexes of applications and interviews for calendar views."""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import get_config
from .dates import application_day, day_key, interview_day, month_shape
from .models import ApplicationRecord, InterviewRecord

logger = logging.getLogger(__name__)


class DayBucket(BaseModel):
    """Records whose relevant date falls on one local calendar day."""

    model_config = ConfigDict(frozen=True)

    day: date
    key: str
    applications: list[ApplicationRecord] = Field(default_factory=list)
    interviews: list[InterviewRecord] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.applications and not self.interviews


class DayIndex(BaseModel):
    """Applications and interviews grouped by ``YYYY-MM-DD`` key."""

    model_config = ConfigDict(frozen=True)

    applications_by_date: dict[str, list[ApplicationRecord]] = Field(default_factory=dict)
    interviews_by_date: dict[str, list[InterviewRecord]] = Field(default_factory=dict)
    # Interviews left out because their date could not be parsed
    skipped: list[InterviewRecord] = Field(default_factory=list)

    def records_for(self, day: date) -> DayBucket:
        """Look up the records bucketed on a calendar day."""
        key = day_key(day)
        return DayBucket(
            day=day,
            key=key,
            applications=list(self.applications_by_date.get(key, [])),
            interviews=list(self.interviews_by_date.get(key, [])),
        )


class CalendarMonth(DayIndex):
    """Day index plus the shape of the month a calendar grid displays."""

    year: int
    month: int
    days_in_month: int
    first_weekday_offset: int
    week_start: str = "sunday"

    def bucket(self, day_of_month: int) -> DayBucket:
        """Records for a day of the displayed month."""
        if not 1 <= day_of_month <= self.days_in_month:
            raise ValueError(
                f"Day {day_of_month} is outside {self.year}-{self.month:02d} "
                f"(1-{self.days_in_month})"
            )
        return self.records_for(date(self.year, self.month, day_of_month))

    def month_buckets(self) -> list[DayBucket]:
        """Buckets for every day of the displayed month, in order."""
        return [self.bucket(day) for day in range(1, self.days_in_month + 1)]

    def weeks(self) -> list[list[Optional[int]]]:
        """Rows of a 7-column grid; padding cells are None."""
        cells: list[Optional[int]] = [None] * self.first_weekday_offset
        cells.extend(range(1, self.days_in_month + 1))
        cells.extend([None] * (-len(cells) % 7))
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def index_by_day(
    applications: Iterable[ApplicationRecord],
    interviews: Iterable[InterviewRecord],
) -> DayIndex:
    """Group applications and interviews into per-day buckets.

    Interviews whose date cannot be parsed are skipped with a warning; the rest
    of the records are still indexed.
    """
    applications_by_date: dict[str, list[ApplicationRecord]] = {}
    interviews_by_date: dict[str, list[InterviewRecord]] = {}
    skipped: list[InterviewRecord] = []

    for app in applications:
        key = day_key(application_day(app.application_date))
        applications_by_date.setdefault(key, []).append(app)

    for interview in interviews:
        try:
            day = interview_day(interview.interview_date)
        except ValueError as e:
            logger.warning(
                f"Skipping interview {interview.id} with unparseable date "
                f"{interview.interview_date!r}: {e}"
            )
            skipped.append(interview)
            continue
        interviews_by_date.setdefault(day_key(day), []).append(interview)

    logger.debug(
        f"Indexed {sum(len(v) for v in applications_by_date.values())} applications and "
        f"{sum(len(v) for v in interviews_by_date.values())} interviews "
        f"({len(skipped)} skipped)"
    )

    return DayIndex(
        applications_by_date=applications_by_date,
        interviews_by_date=interviews_by_date,
        skipped=skipped,
    )


def build_month(
    anchor: date,
    applications: Iterable[ApplicationRecord],
    interviews: Iterable[InterviewRecord],
    week_start: Optional[str] = None,
) -> CalendarMonth:
    """Compute the calendar view for the month containing ``anchor``."""
    if week_start is None:
        week_start = get_config().week_start

    days_in_month, offset = month_shape(anchor.year, anchor.month, week_start)
    index = index_by_day(applications, interviews)

    return CalendarMonth(
        applications_by_date=index.applications_by_date,
        interviews_by_date=index.interviews_by_date,
        skipped=index.skipped,
        year=anchor.year,
        month=anchor.month,
        days_in_month=days_in_month,
        first_weekday_offset=offset,
        week_start=week_start,
    )


def shift_month(anchor: date, delta: int) -> date:
    """First day of the month ``delta`` months away from ``anchor``."""
    months = anchor.year * 12 + (anchor.month - 1) + delta
    return date(months // 12, months % 12 + 1, 1)
