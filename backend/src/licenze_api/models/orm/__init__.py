"""SQLAlchemy ORM models package."""

from licenze_api.models.orm.activation_log import ActivationLogORM
from licenze_api.models.orm.base import Base
from licenze_api.models.orm.client import ClientORM
from licenze_api.models.orm.license import LicenseORM
from licenze_api.models.orm.transaction import TransactionORM

__all__ = [
    "ActivationLogORM",
    "Base",
    "ClientORM",
    "LicenseORM",
    "TransactionORM",
]
