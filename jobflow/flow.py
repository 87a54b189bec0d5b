"""Status distribution and application flow graph for dashboard views.

The flow graph is derived from current-status counts only. Every stage is
assumed to be fed entirely by the stage before it, so an edge carries the
value of the node it points to.
"""

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .config import get_config
from .models import InterviewAggregate, StatusCounts

logger = logging.getLogger(__name__)

ROOT = "applications"
PENDING = "pending"
INTERVIEWING = "interviewing"
INTERVIEWS = "interviews"
OFFERS = "offers"
REJECTED = "rejected"

NODE_ORDER = (ROOT, PENDING, INTERVIEWING, INTERVIEWS, OFFERS, REJECTED)


class RejectionSource(str, Enum):
    """Stage the rejected edge starts from."""

    APPLICATIONS = "applications"
    INTERVIEWING = "interviewing"


class FlowNode(BaseModel):
    """A pipeline stage with its count and share of all applications."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: int
    percentage: int


class FlowEdge(BaseModel):
    """Weighted transition between two stages."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    value: int
    percentage: int


class FlowSummary(BaseModel):
    """Scalar metrics shown on summary cards."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int
    success_rate: int = Field(alias="successRate")
    interview_rate: int = Field(alias="interviewRate")
    active_applications: int = Field(alias="activeApplications")
    completed_applications: int = Field(alias="completedApplications")
    # Reported as supplied, never derived from interview_rate
    conversion_rate: Optional[float] = Field(default=None, alias="conversionRate")


class FlowStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: list[FlowNode]
    edges: list[FlowEdge]
    summary: FlowSummary

    def node(self, node_id: str) -> Optional[FlowNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


class StatusCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    value: int
    percentage: int


def percent(value: int, total: int) -> int:
    """Share of ``total`` as a whole percentage, halves rounded up.

    A zero total is treated as 1 so empty datasets read as 0%.
    """
    denominator = max(total, 1)
    return math.floor(value / denominator * 100 + 0.5)


def _coerce_counts(status_counts: Union[StatusCounts, Mapping]) -> StatusCounts:
    if isinstance(status_counts, StatusCounts):
        return status_counts
    return StatusCounts.model_validate(dict(status_counts))


def _coerce_aggregate(
    aggregate: Union[InterviewAggregate, Mapping, None],
) -> Optional[InterviewAggregate]:
    if aggregate is None or isinstance(aggregate, InterviewAggregate):
        return aggregate
    return InterviewAggregate.model_validate(dict(aggregate))


def _resolve_total(counts: StatusCounts, total: Optional[int]) -> int:
    counted = counts.total()
    if total is None:
        return counted
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    if total != counted:
        # Caller's total is authoritative for every percentage
        logger.debug(f"Provided total {total} differs from status count sum {counted}")
    return total


def compute_flow_stats(
    status_counts: Union[StatusCounts, Mapping],
    total: Optional[int] = None,
    interview_aggregate: Union[InterviewAggregate, Mapping, None] = None,
    rejection_source: Union[RejectionSource, str, None] = None,
) -> FlowStats:
    """Build flow nodes, edges and summary metrics from status counts.

    Args:
        status_counts: Applications per current status.
        total: Denominator for percentages; defaults to the sum of the counts.
            When given it is used as-is, even if it disagrees with the counts.
        interview_aggregate: Interview summary feeding the ``interviews`` node
            and the reported conversion rate.
        rejection_source: Where the rejected edge starts. Defaults to config.
    """
    counts = _coerce_counts(status_counts)
    aggregate = _coerce_aggregate(interview_aggregate)
    total = _resolve_total(counts, total)

    if rejection_source is None:
        rejection_source = get_config().rejection_source
    rejection_source = RejectionSource(rejection_source)

    values = {
        ROOT: total,
        PENDING: counts.applied,
        INTERVIEWING: counts.interviewing,
        INTERVIEWS: aggregate.total_interviews if aggregate else 0,
        OFFERS: counts.offered,
        REJECTED: counts.rejected,
    }

    nodes = [
        FlowNode(id=node_id, value=values[node_id], percentage=percent(values[node_id], total))
        for node_id in NODE_ORDER
        if node_id == ROOT or values[node_id] > 0
    ]
    visible = {node.id for node in nodes}

    rejected_from = ROOT if rejection_source is RejectionSource.APPLICATIONS else INTERVIEWING
    transitions = [
        (ROOT, PENDING),
        (rejected_from, REJECTED),
        (ROOT, INTERVIEWING),
        (INTERVIEWING, INTERVIEWS),
        (ROOT, OFFERS),
    ]

    edges = [
        FlowEdge(
            source=source,
            target=target,
            value=values[target],
            percentage=percent(values[target], total),
        )
        for source, target in transitions
        if values[target] > 0 and source in visible and target in visible
    ]

    summary = FlowSummary(
        total=total,
        success_rate=min(percent(counts.offered, total), 100),
        interview_rate=min(percent(counts.interviewing, total), 100),
        active_applications=counts.applied + counts.interviewing,
        completed_applications=counts.offered + counts.rejected,
        conversion_rate=aggregate.conversion_rate if aggregate else None,
    )

    logger.debug(
        f"Flow stats: {len(nodes)} nodes, {len(edges)} edges, "
        f"success {summary.success_rate}%, interviewing {summary.interview_rate}%"
    )
    return FlowStats(nodes=nodes, edges=edges, summary=summary)


def build_status_cards(
    status_counts: Union[StatusCounts, Mapping],
    total: Optional[int] = None,
) -> list[StatusCard]:
    """Summary cards per status; empty cards are hidden except the total."""
    counts = _coerce_counts(status_counts)
    total = _resolve_total(counts, total)

    cards = [
        StatusCard(id="total", title="Total Applications", value=total, percentage=percent(total, total)),
        StatusCard(id="applied", title="Applied", value=counts.applied, percentage=percent(counts.applied, total)),
        StatusCard(
            id="interviewing",
            title="Interviewing",
            value=counts.interviewing,
            percentage=percent(counts.interviewing, total),
        ),
        StatusCard(id="offered", title="Offered", value=counts.offered, percentage=percent(counts.offered, total)),
        StatusCard(id="rejected", title="Rejected", value=counts.rejected, percentage=percent(counts.rejected, total)),
    ]
    return [card for card in cards if card.value > 0 or card.id == "total"]
