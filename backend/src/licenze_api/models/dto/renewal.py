"""Renewal run DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class RenewalFailure(BaseModel):
    """A license that could not be renewed or backfilled."""

    license_id: UUID
    reason: str


class RenewalRunSummary(BaseModel):
    """Outcome of one automatic renewal pass."""

    run_date: date
    started_at: datetime
    finished_at: datetime | None = None
    candidates: int = 0
    succeeded: int = 0
    failed: int = 0
    not_processed: int = 0
    renewed_license_ids: list[UUID] = Field(default_factory=list)
    failures: list[RenewalFailure] = Field(default_factory=list)
    skipped: bool = False
    aborted: bool = False

    @property
    def failed_license_ids(self) -> list[UUID]:
        """IDs of the licenses that failed in this run."""
        return [failure.license_id for failure in self.failures]


class BackfillSummary(BaseModel):
    """Outcome of a missing-expiry backfill pass."""

    checked: int = 0
    updated: int = 0
    failed: int = 0
    failures: list[RenewalFailure] = Field(default_factory=list)
    aborted: bool = False


class RenewalCandidateResponse(BaseModel):
    """License that the next renewal pass would renew."""

    id: UUID
    activation_key: str
    client_id: UUID
    license_type: str
    expiry_date: datetime | None = None
    next_expiry_date: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True


class RenewalCandidateListResponse(BaseModel):
    """Dry-run list of renewal candidates."""

    run_date: date
    items: list[RenewalCandidateResponse]
    total: int


class ScheduleResponse(BaseModel):
    """Renewal schedule state."""

    running: bool
    timezone: str
    next_run_time: datetime | None = None
