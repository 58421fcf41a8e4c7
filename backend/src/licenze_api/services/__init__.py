"""Service layer package."""

from licenze_api.services.activation_service import ActivationService
from licenze_api.services.renewal_service import (
    RenewalService,
    generate_transaction,
    run_renewals_once,
)

__all__ = [
    "ActivationService",
    "RenewalService",
    "generate_transaction",
    "run_renewals_once",
]
