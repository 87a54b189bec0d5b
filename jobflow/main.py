"""Dashboard pipeline composing calendar and flow analytics."""

import logging
import sys
from collections.abc import Iterable
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .aggregate import (
    applications_by_month,
    average_response_days,
    count_statuses,
    summarize_interviews,
)
from .calendar_index import CalendarMonth, build_month
from .config import Config, get_config
from .flow import FlowStats, StatusCard, build_status_cards, compute_flow_stats
from .models import ApplicationRecord, InterviewAggregate, InterviewRecord, StatusCounts


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the application."""
    if level is None:
        level = get_config().log_level

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class Dashboard(BaseModel):
    """Everything the dashboard views render for one snapshot of records."""

    model_config = ConfigDict(frozen=True)

    calendar: CalendarMonth
    status_counts: StatusCounts
    interview_stats: InterviewAggregate
    flow: FlowStats
    cards: list[StatusCard]
    by_month: dict[str, int]
    average_response_days: int


def build_dashboard(
    applications: Iterable[ApplicationRecord],
    interviews: Iterable[InterviewRecord],
    anchor: Optional[date] = None,
    now: Optional[datetime] = None,
    config: Optional[Config] = None,
) -> Dashboard:
    """Compute every dashboard view from the given records.

    Each call starts from the arguments alone; nothing is cached between calls.
    """
    logger = logging.getLogger(__name__)
    config = config or get_config()
    now = now or datetime.now()
    anchor = anchor or now.date()

    applications = list(applications)
    interviews = list(interviews)

    logger.info(
        f"Building dashboard for {anchor:%Y-%m} from {len(applications)} applications "
        f"and {len(interviews)} interviews"
    )

    counts = count_statuses(applications)
    interview_stats = summarize_interviews(interviews, applications, now=now)
    calendar = build_month(anchor, applications, interviews, week_start=config.week_start)

    if calendar.skipped:
        logger.warning(f"{len(calendar.skipped)} interviews left off the calendar")

    dashboard = Dashboard(
        calendar=calendar,
        status_counts=counts,
        interview_stats=interview_stats,
        flow=compute_flow_stats(
            counts,
            total=len(applications),
            interview_aggregate=interview_stats,
            rejection_source=config.rejection_source,
        ),
        cards=build_status_cards(counts, total=len(applications)),
        by_month=applications_by_month(applications),
        average_response_days=average_response_days(applications, today=now.date()),
    )

    logger.info(
        f"Dashboard complete: success rate {dashboard.flow.summary.success_rate}%, "
        f"{dashboard.flow.summary.active_applications} active, "
        f"{interview_stats.total_interviews} interviews"
    )
    return dashboard
