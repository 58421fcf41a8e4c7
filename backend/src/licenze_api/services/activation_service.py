"""License activation on a customer device."""

import logging
from typing import Any

from licenze_api.config import get_settings
from licenze_api.exceptions import LicenseAlreadyActiveError, LicenseNotFoundError
from licenze_api.models.domain.license import LicenseStatus
from licenze_api.models.domain.transaction import TransactionType
from licenze_api.models.dto.activation import ActivationLogCreate, ActivationResponse
from licenze_api.repositories.store import ActivationStore
from licenze_api.services.renewal_service import generate_transaction
from licenze_api.utils.clock import Clock, default_clock
from licenze_api.utils.expiry import compute_expiry

logger = logging.getLogger(__name__)


class ActivationService:
    """Service for activating licenses.

    Expects a store that does not commit per write: the activation
    transaction, the license update and the log entry are committed together
    by the caller.
    """

    def __init__(
        self,
        store: ActivationStore,
        clock: Clock | None = None,
        default_trial_days: int | None = None,
    ) -> None:
        """Initialize service with a license store."""
        self.store = store
        self.clock = clock or default_clock()
        if default_trial_days is None:
            default_trial_days = get_settings().default_trial_days
        self.default_trial_days = default_trial_days

    async def activate_license(
        self,
        activation_key: str,
        computer_key: str,
        device_info: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ActivationResponse:
        """Activate a license and bill the activation.

        The expiry date is kept when already set, otherwise it is computed
        from the activation time with the same rules as renewals.

        Args:
            activation_key: License activation key
            computer_key: Key of the device the license is bound to
            device_info: Optional device description for the activation log
            ip_address: Client IP address for the activation log
            user_agent: Client user agent for the activation log

        Returns:
            ActivationResponse

        Raises:
            LicenseNotFoundError: If no license has this activation key
            LicenseAlreadyActiveError: If the license is already active
            ClientNotFoundError: If the license's client does not exist
        """
        license = await self.store.get_license_by_activation_key(activation_key)
        if license is None:
            raise LicenseNotFoundError(activation_key=activation_key)

        if license.status == LicenseStatus.ATTIVA:
            raise LicenseAlreadyActiveError(license_id=str(license.id))

        now = self.clock()
        expiry_date = license.expiry_date
        if expiry_date is None:
            expiry_date = compute_expiry(
                license.license_type, license.trial_days, now, self.default_trial_days
            )

        transaction = await generate_transaction(self.store, license, TransactionType.ATTIVAZIONE)

        await self.store.update_license(
            license.id,
            computer_key=computer_key,
            activation_date=now,
            expiry_date=expiry_date,
            status=LicenseStatus.ATTIVA.value,
        )
        await self.store.log_activation(
            ActivationLogCreate(
                license_id=license.id,
                device_info=device_info,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )
        logger.info(f"License {license.id} activated")

        return ActivationResponse(
            license_id=license.id,
            status=LicenseStatus.ATTIVA.value,
            activation_date=now,
            expiry_date=expiry_date,
            transaction_id=transaction.id,
        )
