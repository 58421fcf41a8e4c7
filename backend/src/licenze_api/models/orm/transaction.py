"""Transaction ORM model."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from licenze_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class TransactionORM(Base, UUIDMixin, TimestampMixin):
    """Billing transaction database model."""

    __tablename__ = "transactions"

    license_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("licenses.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    company_id: Mapped[UUID | None] = mapped_column(PGUUID(as_uuid=True), nullable=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="in_attesa", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    license: Mapped["LicenseORM"] = relationship("LicenseORM", back_populates="transactions")

    __table_args__ = (
        Index("idx_transactions_license", "license_id"),
        Index("idx_transactions_client", "client_id"),
        Index("idx_transactions_status", "status"),
    )


from licenze_api.models.orm.license import LicenseORM  # noqa: E402, F401
