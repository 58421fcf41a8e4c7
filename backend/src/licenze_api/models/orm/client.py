"""Client ORM model."""

from uuid import UUID

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from licenze_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class ClientORM(Base, UUIDMixin, TimestampMixin):
    """Client database model."""

    __tablename__ = "clients"

    # Companies are owned by the company-hierarchy module; no FK here
    company_id: Mapped[UUID | None] = mapped_column(PGUUID(as_uuid=True), nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str | None] = mapped_column(String(50), default="in_attesa", nullable=True)

    licenses: Mapped[list["LicenseORM"]] = relationship("LicenseORM", back_populates="client")

    __table_args__ = (Index("idx_clients_company", "company_id"),)


from licenze_api.models.orm.license import LicenseORM  # noqa: E402, F401
