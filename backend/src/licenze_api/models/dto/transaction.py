"""Transaction DTOs."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from licenze_api.models.domain.transaction import TransactionStatus, TransactionType


class TransactionCreate(BaseModel):
    """Fields for a new billing transaction."""

    license_id: UUID
    client_id: UUID
    company_id: UUID | None = None
    type: TransactionType
    amount: Decimal = Field(ge=0)
    discount: Decimal = Decimal("0")
    final_amount: Decimal = Field(ge=0)
    status: TransactionStatus = TransactionStatus.IN_ATTESA
    notes: str | None = Field(default=None, max_length=2000)
