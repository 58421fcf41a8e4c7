"""Client domain model."""

from uuid import UUID

from pydantic import BaseModel


class Client(BaseModel):
    """Client (billing target) domain model."""

    id: UUID
    company_id: UUID | None = None
    name: str
    email: str
    status: str | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
