"""License activation DTOs."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from licenze_api.models.domain.activation_log import ActivationKeyType, ActivationResult


class ActivationRequest(BaseModel):
    """Request to activate a license on a device."""

    activation_key: str = Field(min_length=1, max_length=255)
    computer_key: str = Field(min_length=1, max_length=255)
    device_info: dict[str, Any] | None = None


class ActivationResponse(BaseModel):
    """Response after a license activation."""

    license_id: UUID
    status: str
    activation_date: datetime
    expiry_date: datetime | None = None
    transaction_id: UUID


class ActivationLogCreate(BaseModel):
    """Fields of a new activation log entry."""

    license_id: UUID
    key_type: ActivationKeyType = ActivationKeyType.ACTIVATION
    device_info: dict[str, Any] | None = None
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = None
    result: ActivationResult = ActivationResult.SUCCESS
    error_message: str | None = None
