"""Transaction domain model."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel


class TransactionType(StrEnum):
    """Transaction type enum."""

    RINNOVO = "rinnovo"
    ATTIVAZIONE = "attivazione"


class TransactionStatus(StrEnum):
    """Transaction status enum."""

    IN_ATTESA = "in_attesa"
    COMPLETATA = "completata"
    FALLITA = "fallita"


class Transaction(BaseModel):
    """Billing transaction domain model."""

    id: UUID
    license_id: UUID
    client_id: UUID
    company_id: UUID | None = None
    type: TransactionType
    amount: Decimal
    discount: Decimal = Decimal("0")
    final_amount: Decimal
    status: TransactionStatus = TransactionStatus.IN_ATTESA
    notes: str | None = None
    created_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
