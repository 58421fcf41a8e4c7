"""License ORM model."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from licenze_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class LicenseORM(Base, UUIDMixin, TimestampMixin):
    """License database model."""

    __tablename__ = "licenses"

    client_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    product_id: Mapped[UUID | None] = mapped_column(PGUUID(as_uuid=True), nullable=True)
    activation_key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    computer_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    license_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="in_attesa_convalida", nullable=False)
    activation_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Automatic renewal
    renewal_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    trial_days: Mapped[int | None] = mapped_column(Integer, default=30, nullable=True)

    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    discount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    client: Mapped["ClientORM"] = relationship("ClientORM", back_populates="licenses")
    transactions: Mapped[list["TransactionORM"]] = relationship(
        "TransactionORM", back_populates="license"
    )

    __table_args__ = (
        Index("idx_licenses_client", "client_id"),
        Index("idx_licenses_status", "status"),
        Index("idx_licenses_expiry_date", "expiry_date"),
        Index("idx_licenses_renewal", "renewal_enabled", "status"),
    )


# Import here to avoid circular import
from licenze_api.models.orm.client import ClientORM  # noqa: E402, F401
from licenze_api.models.orm.transaction import TransactionORM  # noqa: E402, F401
