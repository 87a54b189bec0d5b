"""Counts and interview summaries derived from raw records."""

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime
from typing import Optional

from .dates import application_day, interview_wall_time
from .models import ApplicationRecord, InterviewAggregate, InterviewRecord, Status, StatusCounts

logger = logging.getLogger(__name__)

# Fixed English labels so month keys do not depend on the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DEFAULT_INTERVIEW_STATUS = "SCHEDULED"


def month_label(day: date) -> str:
    """Month bucket label such as ``Mar 2024``."""
    return f"{MONTH_ABBR[day.month - 1]} {day.year}"


def round_half_up(value: float, digits: int = 2) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def count_statuses(applications: Iterable[ApplicationRecord]) -> StatusCounts:
    """Count applications by current status."""
    counts = {status: 0 for status in Status}
    for app in applications:
        counts[app.status] += 1
    return StatusCounts(
        applied=counts[Status.APPLIED],
        interviewing=counts[Status.INTERVIEWING],
        offered=counts[Status.OFFERED],
        rejected=counts[Status.REJECTED],
    )


def applications_by_month(applications: Iterable[ApplicationRecord]) -> dict[str, int]:
    """Number of applications per month, oldest month first."""
    by_month: dict[tuple[int, int], int] = {}
    for app in applications:
        day = application_day(app.application_date)
        key = (day.year, day.month)
        by_month[key] = by_month.get(key, 0) + 1

    return {
        month_label(date(year, month, 1)): count
        for (year, month), count in sorted(by_month.items())
    }


def average_response_days(
    applications: Iterable[ApplicationRecord],
    today: Optional[date] = None,
) -> int:
    """Average age in days of applications that moved past ``Applied``.

    No response dates are recorded, so the age of each responded application
    stands in for its response time.
    """
    today = today or date.today()
    total_days = 0
    responded = 0

    for app in applications:
        if app.status is Status.APPLIED:
            continue
        total_days += (today - application_day(app.application_date)).days
        responded += 1

    if responded == 0:
        return 0
    return int(total_days / responded)


def summarize_interviews(
    interviews: Iterable[InterviewRecord],
    applications: Iterable[ApplicationRecord],
    now: Optional[datetime] = None,
) -> InterviewAggregate:
    """Aggregate interview records for dashboard views.

    Args:
        interviews: Interview records to summarize.
        applications: Applications the interviews may refer to, used for the
            conversion rate and the per-application average.
        now: Reference time for upcoming/past/today; defaults to local now.
            Compared against interview wall-clock times as written.
    """
    now = (now or datetime.now()).replace(tzinfo=None)
    interviews = list(interviews)
    applications = list(applications)
    application_ids = {app.id for app in applications}

    by_type: dict[str, int] = {}
    by_status: dict[str, int] = {}
    by_month: dict[str, int] = {}
    upcoming = past = today = 0

    for interview in interviews:
        by_type[interview.type] = by_type.get(interview.type, 0) + 1
        status = interview.status or DEFAULT_INTERVIEW_STATUS
        by_status[status] = by_status.get(status, 0) + 1

        try:
            when = interview_wall_time(interview.interview_date)
        except ValueError as e:
            logger.warning(
                f"Interview {interview.id} has unparseable date {interview.interview_date!r}, "
                f"leaving it out of timing and month counts: {e}"
            )
            continue

        if when.date() == now.date():
            today += 1
        elif when > now:
            upcoming += 1
        else:
            past += 1

        label = month_label(when.date())
        by_month[label] = by_month.get(label, 0) + 1

    with_interviews = {
        interview.application_id
        for interview in interviews
        if interview.application_id in application_ids
    }

    conversion_rate = 0.0
    if applications:
        conversion_rate = round_half_up(len(with_interviews) / len(applications) * 100)

    average_per_application = 0.0
    if with_interviews:
        average_per_application = round_half_up(len(interviews) / len(with_interviews))

    logger.debug(
        f"Interviews: {len(interviews)} total, {upcoming} upcoming, {past} past, {today} today; "
        f"{len(with_interviews)} of {len(applications)} applications interviewed"
    )

    return InterviewAggregate(
        total_interviews=len(interviews),
        upcoming=upcoming,
        past=past,
        today=today,
        conversion_rate=conversion_rate,
        average_per_application=average_per_application,
        by_type=by_type,
        by_status=by_status,
        by_month=by_month,
    )
