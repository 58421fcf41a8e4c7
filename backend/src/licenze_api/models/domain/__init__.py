"""Domain models package."""

from licenze_api.models.domain.activation_log import (
    ActivationKeyType,
    ActivationLog,
    ActivationResult,
)
from licenze_api.models.domain.client import Client
from licenze_api.models.domain.license import (
    NON_RENEWABLE_TYPES,
    License,
    LicenseStatus,
    LicenseType,
)
from licenze_api.models.domain.transaction import (
    Transaction,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "ActivationKeyType",
    "ActivationLog",
    "ActivationResult",
    "Client",
    "License",
    "LicenseStatus",
    "LicenseType",
    "NON_RENEWABLE_TYPES",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
]
