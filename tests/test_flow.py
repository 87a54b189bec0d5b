"""Tests for flow graph and summary metrics."""

import logging

import pytest
from pydantic import ValidationError

from jobflow.flow import RejectionSource, build_status_cards, compute_flow_stats, percent
from jobflow.models import InterviewAggregate, StatusCounts


def as_tuples(items):
    return [tuple(item.model_dump().values()) for item in items]


def test_mixed_pipeline_scenario():
    stats = compute_flow_stats({"Applied": 2, "Interviewing": 1, "Offered": 1, "Rejected": 0}, total=4)

    assert as_tuples(stats.nodes) == [
        ("applications", 4, 100),
        ("pending", 2, 50),
        ("interviewing", 1, 25),
        ("offers", 1, 25),
    ]
    assert stats.node("rejected") is None
    assert as_tuples(stats.edges) == [
        ("applications", "pending", 2, 50),
        ("applications", "interviewing", 1, 25),
        ("applications", "offers", 1, 25),
    ]


def test_edge_order_is_fixed():
    counts = StatusCounts(applied=1, interviewing=2, offered=3, rejected=4)
    aggregate = InterviewAggregate(total_interviews=5)

    stats = compute_flow_stats(counts, interview_aggregate=aggregate, rejection_source="applications")

    assert [(e.source, e.target, e.value, e.percentage) for e in stats.edges] == [
        ("applications", "pending", 1, 10),
        ("applications", "rejected", 4, 40),
        ("applications", "interviewing", 2, 20),
        ("interviewing", "interviews", 5, 50),
        ("applications", "offers", 3, 30),
    ]
    assert [n.id for n in stats.nodes] == [
        "applications", "pending", "interviewing", "interviews", "offers", "rejected"
    ]


def test_repeated_calls_are_identical():
    counts = {"Applied": 3, "Interviewing": 2, "Offered": 1, "Rejected": 4}
    assert compute_flow_stats(counts) == compute_flow_stats(counts)


def test_edges_serialize_with_from_and_to():
    stats = compute_flow_stats(StatusCounts(applied=1))
    assert stats.edges[0].model_dump(by_alias=True) == {
        "from": "applications", "to": "pending", "value": 1, "percentage": 100
    }


def test_zero_total_reads_as_zero_percent():
    stats = compute_flow_stats(StatusCounts(), total=0)

    assert as_tuples(stats.nodes) == [("applications", 0, 0)]
    assert stats.edges == []
    summary = stats.summary
    assert (summary.success_rate, summary.interview_rate) == (0, 0)
    assert (summary.active_applications, summary.completed_applications) == (0, 0)


def test_summary_metrics():
    aggregate = InterviewAggregate(total_interviews=3, conversion_rate=42.86)
    stats = compute_flow_stats(
        StatusCounts(applied=3, interviewing=2, offered=1, rejected=1),
        interview_aggregate=aggregate,
    )
    summary = stats.summary

    assert summary.total == 7
    assert summary.success_rate == 14
    assert summary.interview_rate == 29
    assert summary.active_applications == 5
    assert summary.completed_applications == 2
    assert summary.conversion_rate == 42.86


def test_conversion_rate_absent_without_aggregate():
    assert compute_flow_stats(StatusCounts(interviewing=1)).summary.conversion_rate is None


def test_explicit_total_wins(caplog):
    with caplog.at_level(logging.DEBUG, logger="jobflow.flow"):
        stats = compute_flow_stats(StatusCounts(applied=1, offered=1), total=10)

    assert stats.node("applications").value == 10
    assert stats.node("pending").percentage == 10
    assert stats.summary.success_rate == 10
    assert "differs" in caplog.text


def test_rates_stay_within_bounds_for_short_total():
    stats = compute_flow_stats(StatusCounts(offered=3, interviewing=2), total=0)
    assert stats.summary.success_rate == 100
    assert stats.summary.interview_rate == 100


@pytest.mark.parametrize(
    "applied, interviewing, offered, rejected",
    [(0, 0, 0, 0), (1, 0, 0, 0), (0, 0, 7, 0), (5, 3, 2, 9), (100, 0, 1, 0)],
)
def test_rates_in_range_and_node_sum_bounded(applied, interviewing, offered, rejected):
    counts = StatusCounts(applied=applied, interviewing=interviewing, offered=offered, rejected=rejected)
    stats = compute_flow_stats(counts)

    assert 0 <= stats.summary.success_rate <= 100
    assert 0 <= stats.summary.interview_rate <= 100
    assert sum(n.value for n in stats.nodes if n.id != "applications") <= counts.total()


def test_interviews_node_without_interviewing_stage():
    stats = compute_flow_stats(
        StatusCounts(applied=2, offered=1),
        interview_aggregate={"totalInterviews": 3, "conversionRate": 33.33},
    )

    assert stats.node("interviews").value == 3
    assert stats.node("interviewing") is None
    assert all(edge.target != "interviews" for edge in stats.edges)


def test_rejected_from_interviewing():
    stats = compute_flow_stats(
        StatusCounts(applied=1, interviewing=1, rejected=2),
        rejection_source=RejectionSource.INTERVIEWING,
    )

    assert [(e.source, e.target) for e in stats.edges] == [
        ("applications", "pending"),
        ("interviewing", "rejected"),
        ("applications", "interviewing"),
    ]
    assert stats.node("rejected").value == 2


def test_rejected_from_interviewing_dropped_when_stage_empty():
    stats = compute_flow_stats(StatusCounts(applied=1, rejected=1), rejection_source="interviewing")

    assert stats.node("rejected").value == 1
    assert all(edge.target != "rejected" for edge in stats.edges)


def test_rejection_source_defaults_to_config():
    stats = compute_flow_stats(StatusCounts(rejected=1))
    assert stats.edges[0].source == "applications"


def test_inputs_are_not_mutated():
    counts = {"Applied": 1, "Interviewing": 1, "Offered": 0, "Rejected": 0}
    snapshot = dict(counts)
    compute_flow_stats(counts)
    assert counts == snapshot


def test_negative_count_fails_fast():
    with pytest.raises(ValidationError):
        compute_flow_stats({"Applied": -1})


def test_negative_total_fails_fast():
    with pytest.raises(ValueError, match="non-negative"):
        compute_flow_stats(StatusCounts(applied=1), total=-1)


@pytest.mark.parametrize(
    "value, total, expected",
    [(1, 8, 13), (3, 8, 38), (1, 3, 33), (2, 3, 67), (0, 0, 0), (5, 0, 500), (4, 4, 100)],
)
def test_percent_rounds_halves_up(value, total, expected):
    assert percent(value, total) == expected


def test_status_cards_hide_empty_except_total():
    cards = build_status_cards(StatusCounts(applied=3, offered=1))

    assert [(c.id, c.value, c.percentage) for c in cards] == [
        ("total", 4, 100),
        ("applied", 3, 75),
        ("offered", 1, 25),
    ]


def test_status_cards_empty_dataset():
    cards = build_status_cards(StatusCounts())
    assert [(c.id, c.value, c.percentage) for c in cards] == [("total", 0, 0)]


def test_conversion_rate_not_invented_when_aggregate_omits_it():
    stats = compute_flow_stats({"Applied": 1}, interview_aggregate={"totalInterviews": 2})

    assert stats.node("interviews").value == 2
    assert stats.summary.conversion_rate is None


def test_summary_serializes_with_wire_names():
    stats = compute_flow_stats(
        StatusCounts(applied=1, interviewing=1, offered=1, rejected=1),
        interview_aggregate=InterviewAggregate(total_interviews=1, conversion_rate=25.0),
    )

    assert stats.summary.model_dump(by_alias=True) == {
        "total": 4,
        "successRate": 25,
        "interviewRate": 25,
        "activeApplications": 2,
        "completedApplications": 2,
        "conversionRate": 25.0,
    }
