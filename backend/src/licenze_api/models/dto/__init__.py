"""Data Transfer Objects package."""

from licenze_api.models.dto.activation import (
    ActivationLogCreate,
    ActivationRequest,
    ActivationResponse,
)
from licenze_api.models.dto.renewal import (
    BackfillSummary,
    RenewalCandidateListResponse,
    RenewalCandidateResponse,
    RenewalFailure,
    RenewalRunSummary,
    ScheduleResponse,
)
from licenze_api.models.dto.transaction import TransactionCreate

__all__ = [
    "ActivationLogCreate",
    "ActivationRequest",
    "ActivationResponse",
    "BackfillSummary",
    "RenewalCandidateListResponse",
    "RenewalCandidateResponse",
    "RenewalFailure",
    "RenewalRunSummary",
    "ScheduleResponse",
    "TransactionCreate",
]
