"""License domain model."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel


class LicenseType(StrEnum):
    """License type enum.

    ``MENSILE`` and ``ANNUALE`` are legacy aliases of the subscription types
    still found in older rows.
    """

    PERMANENTE = "permanente"
    TRIAL = "trial"
    ABBONAMENTO_MENSILE = "abbonamento_mensile"
    ABBONAMENTO_ANNUALE = "abbonamento_annuale"
    MENSILE = "mensile"
    ANNUALE = "annuale"


class LicenseStatus(StrEnum):
    """License status enum."""

    ATTIVA = "attiva"
    DEMO = "demo"
    SCADUTA = "scaduta"
    IN_ATTESA_CONVALIDA = "in_attesa_convalida"
    SOSPESA = "sospesa"


# Types the renewal job never touches
NON_RENEWABLE_TYPES = (LicenseType.PERMANENTE, LicenseType.TRIAL)


class License(BaseModel):
    """License domain model."""

    id: UUID
    client_id: UUID
    product_id: UUID | None = None
    activation_key: str
    computer_key: str | None = None
    license_type: str
    status: str = LicenseStatus.IN_ATTESA_CONVALIDA
    activation_date: datetime | None = None
    expiry_date: datetime | None = None
    renewal_enabled: bool = False
    trial_days: int | None = 30
    price: Decimal | None = None
    discount: Decimal | None = Decimal("0")
    notes: str | None = None
    created_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
