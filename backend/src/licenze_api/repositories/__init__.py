"""Repository package."""

from licenze_api.repositories.activation_log_repository import ActivationLogRepository
from licenze_api.repositories.client_repository import ClientRepository
from licenze_api.repositories.license_repository import LicenseRepository
from licenze_api.repositories.store import (
    ActivationStore,
    LicenseStore,
    SqlLicenseStore,
)
from licenze_api.repositories.transaction_repository import TransactionRepository

__all__ = [
    "ActivationLogRepository",
    "ActivationStore",
    "ClientRepository",
    "LicenseRepository",
    "LicenseStore",
    "SqlLicenseStore",
    "TransactionRepository",
]
