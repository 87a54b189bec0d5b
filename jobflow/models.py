"""Data models for job applications and interviews."""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    """Current stage of an application."""

    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFERED = "Offered"
    REJECTED = "Rejected"


class ApplicationRecord(BaseModel):
    """A submitted job application."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    company: str
    job_title: str = Field(alias="jobTitle")
    status: Status
    application_date: date = Field(alias="applicationDate")
    location: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    compensation: Union[float, str, None] = None


class InterviewRecord(BaseModel):
    """An interview scheduled against an application."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    type: str
    # Raw timestamp, parsed during aggregation so a bad value only drops this record
    interview_date: Union[datetime, str] = Field(alias="interviewDate")
    status: Optional[str] = None
    application_id: Optional[str] = Field(default=None, alias="applicationId")
    notes: Optional[str] = None


class StatusCounts(BaseModel):
    """Number of applications currently in each status."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    applied: int = Field(default=0, ge=0, alias="Applied")
    interviewing: int = Field(default=0, ge=0, alias="Interviewing")
    offered: int = Field(default=0, ge=0, alias="Offered")
    rejected: int = Field(default=0, ge=0, alias="Rejected")

    def total(self) -> int:
        """Sum of all status counts."""
        return self.applied + self.interviewing + self.offered + self.rejected

    def get(self, status: Status) -> int:
        return getattr(self, status.name.lower())


class InterviewAggregate(BaseModel):
    """Summary of interview records for dashboard views."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_interviews: int = Field(default=0, ge=0, alias="totalInterviews")
    upcoming: int = Field(default=0, ge=0)
    past: int = Field(default=0, ge=0)
    today: int = Field(default=0, ge=0)
    # None when the source did not report a rate
    conversion_rate: Optional[float] = Field(default=None, ge=0.0, alias="conversionRate")
    average_per_application: float = Field(default=0.0, ge=0.0, alias="averagePerApplication")
    by_type: dict[str, int] = Field(default_factory=dict, alias="byType")
    by_status: dict[str, int] = Field(default_factory=dict, alias="byStatus")
    by_month: dict[str, int] = Field(default_factory=dict, alias="byMonth")
