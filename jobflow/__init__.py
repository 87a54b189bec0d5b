"""Calendar bucketing and status-flow analytics for job application tracking."""

from .aggregate import (
    applications_by_month,
    average_response_days,
    count_statuses,
    summarize_interviews,
)
from .calendar_index import CalendarMonth, DayBucket, DayIndex, build_month, index_by_day, shift_month
from .flow import (
    FlowEdge,
    FlowNode,
    FlowStats,
    FlowSummary,
    RejectionSource,
    StatusCard,
    build_status_cards,
    compute_flow_stats,
)
from .main import Dashboard, build_dashboard, setup_logging
from .models import (
    ApplicationRecord,
    InterviewAggregate,
    InterviewRecord,
    Status,
    StatusCounts,
)

__all__ = [
    "ApplicationRecord",
    "CalendarMonth",
    "DayBucket",
    "Dashboard",
    "DayIndex",
    "FlowEdge",
    "FlowNode",
    "FlowStats",
    "FlowSummary",
    "InterviewAggregate",
    "InterviewRecord",
    "RejectionSource",
    "Status",
    "StatusCard",
    "StatusCounts",
    "applications_by_month",
    "average_response_days",
    "build_dashboard",
    "build_month",
    "build_status_cards",
    "compute_flow_stats",
    "count_statuses",
    "index_by_day",
    "setup_logging",
    "shift_month",
    "summarize_interviews",
]
