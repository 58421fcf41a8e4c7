"""Operational endpoints for automatic renewal and activation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from licenze_api.config import get_settings
from licenze_api.dependencies import get_activation_service, get_renewal_service
from licenze_api.models.dto.activation import ActivationRequest, ActivationResponse
from licenze_api.models.dto.renewal import (
    BackfillSummary,
    RenewalCandidateListResponse,
    RenewalCandidateResponse,
    RenewalRunSummary,
    ScheduleResponse,
)
from licenze_api.security.ops_token import require_ops_token
from licenze_api.security.rate_limit import (
    OPS_READ_LIMIT,
    OPS_WRITE_LIMIT,
    get_real_client_ip,
    limiter,
)
from licenze_api.services.activation_service import ActivationService
from licenze_api.services.renewal_service import RenewalService
from licenze_api.tasks.scheduler import get_next_renewal_time

router = APIRouter(dependencies=[Depends(require_ops_token)])


@router.get("/candidates", response_model=RenewalCandidateListResponse)
@limiter.limit(OPS_READ_LIMIT)
async def list_renewal_candidates(
    request: Request,
    service: Annotated[RenewalService, Depends(get_renewal_service)],
) -> RenewalCandidateListResponse:
    """List the licenses a renewal pass started now would renew."""
    now, candidates = await service.get_candidates()
    items = [
        RenewalCandidateResponse(
            id=lic.id,
            activation_key=lic.activation_key,
            client_id=lic.client_id,
            license_type=lic.license_type,
            expiry_date=lic.expiry_date,
            next_expiry_date=service.next_expiry(lic, now),
        )
        for lic in candidates
    ]
    return RenewalCandidateListResponse(run_date=now.date(), items=items, total=len(items))


@router.post("/run", response_model=RenewalRunSummary)
@limiter.limit(OPS_WRITE_LIMIT)
async def run_renewals(
    request: Request,
    service: Annotated[RenewalService, Depends(get_renewal_service)],
) -> RenewalRunSummary:
    """Run an automatic renewal pass now.

    Returns the summary; per-license failures are reported there, not as
    HTTP errors.
    """
    return await service.run_once()


@router.post("/backfill", response_model=BackfillSummary)
@limiter.limit(OPS_WRITE_LIMIT)
async def backfill_expiry_dates(
    request: Request,
    service: Annotated[RenewalService, Depends(get_renewal_service)],
) -> BackfillSummary:
    """Fill in missing activation and expiry dates."""
    return await service.backfill_missing_expiry_dates()


@router.post("/activate", response_model=ActivationResponse)
@limiter.limit(OPS_WRITE_LIMIT)
async def activate_license(
    request: Request,
    body: ActivationRequest,
    service: Annotated[ActivationService, Depends(get_activation_service)],
) -> ActivationResponse:
    """Activate a license by activation key."""
    return await service.activate_license(
        body.activation_key,
        body.computer_key,
        device_info=body.device_info,
        ip_address=get_real_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule() -> ScheduleResponse:
    """Get the next scheduled renewal run."""
    next_run = get_next_renewal_time()
    return ScheduleResponse(
        running=next_run is not None,
        timezone=get_settings().renewal_timezone,
        next_run_time=next_run,
    )
