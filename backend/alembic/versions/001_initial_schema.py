"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-08-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create clients table
    op.create_table(
        "clients",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(50), nullable=True, server_default="in_attesa"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_clients_company", "clients", ["company_id"])

    # Create licenses table
    op.create_table(
        "licenses",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("activation_key", sa.String(255), nullable=False),
        sa.Column("computer_key", sa.String(255), nullable=True),
        sa.Column("license_type", sa.String(50), nullable=False),
        sa.Column(
            "status", sa.String(50), nullable=False, server_default="in_attesa_convalida"
        ),
        sa.Column("activation_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("renewal_enabled", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("trial_days", sa.Integer(), nullable=True, server_default="30"),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("discount", sa.Numeric(10, 2), nullable=True, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("activation_key"),
    )
    op.create_index("idx_licenses_client", "licenses", ["client_id"])
    op.create_index("idx_licenses_status", "licenses", ["status"])
    op.create_index("idx_licenses_expiry_date", "licenses", ["expiry_date"])
    op.create_index("idx_licenses_renewal", "licenses", ["renewal_enabled", "status"])

    # Create transactions table
    op.create_table(
        "transactions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("license_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("final_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="in_attesa"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["license_id"], ["licenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_transactions_license", "transactions", ["license_id"])
    op.create_index("idx_transactions_client", "transactions", ["client_id"])
    op.create_index("idx_transactions_status", "transactions", ["status"])


def downgrade() -> None:
    op.drop_index("idx_transactions_status", table_name="transactions")
    op.drop_index("idx_transactions_client", table_name="transactions")
    op.drop_index("idx_transactions_license", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("idx_licenses_renewal", table_name="licenses")
    op.drop_index("idx_licenses_expiry_date", table_name="licenses")
    op.drop_index("idx_licenses_status", table_name="licenses")
    op.drop_index("idx_licenses_client", table_name="licenses")
    op.drop_table("licenses")
    op.drop_index("idx_clients_company", table_name="clients")
    op.drop_table("clients")
