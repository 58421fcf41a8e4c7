"""Activation log domain model."""

from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ActivationKeyType(StrEnum):
    """Which key an activation attempt used."""

    ACTIVATION = "activation"
    COMPUTER = "computer"


class ActivationResult(StrEnum):
    """Activation attempt outcome."""

    SUCCESS = "success"
    FAILED = "failed"


class ActivationLog(BaseModel):
    """Activation log entry."""

    id: UUID
    license_id: UUID
    key_type: ActivationKeyType
    device_info: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    result: ActivationResult
    error_message: str | None = None
    created_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
