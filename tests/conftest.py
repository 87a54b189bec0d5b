"""
Shared fixtures for the jobflow test suite.

Fixtures:
- make_application / make_interview: record factories with sensible defaults
- sample_applications: one application per status spread over March 2024
- pacific_tz: runs a test with the process timezone set west of UTC
"""

import time
from datetime import date

import pytest

from jobflow.config import reset_config
from jobflow.models import ApplicationRecord, InterviewRecord, Status


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts without a cached configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_application():
    counter = {"n": 0}

    def _make(status=Status.APPLIED, application_date=date(2024, 3, 15), **fields):
        counter["n"] += 1
        data = {
            "id": f"app-{counter['n']}",
            "company": "Acme",
            "job_title": "Software Engineer",
            "status": status,
            "application_date": application_date,
        }
        data.update(fields)
        return ApplicationRecord(**data)

    return _make


@pytest.fixture
def make_interview():
    counter = {"n": 0}

    def _make(interview_date="2024-03-15T10:00:00", type="Technical", **fields):
        counter["n"] += 1
        data = {"id": counter["n"], "type": type, "interview_date": interview_date}
        data.update(fields)
        return InterviewRecord(**data)

    return _make


@pytest.fixture
def sample_applications(make_application):
    return [
        make_application(Status.APPLIED, date(2024, 3, 1), id="a1"),
        make_application(Status.APPLIED, date(2024, 3, 1), id="a2"),
        make_application(Status.INTERVIEWING, date(2024, 3, 11), id="a3"),
        make_application(Status.OFFERED, date(2024, 3, 21), id="a4"),
    ]


@pytest.fixture
def pacific_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
