"""Automatic renewal of subscription licenses.

A renewal pass scans every license, keeps the active subscriptions whose
expiry day is today or earlier, bills each one with a ``rinnovo``
transaction and moves its expiry forward from *today* (never from the old
expiry, so missed runs do not pile up arrears). A failure on one license is
recorded in the summary and the pass moves on to the next one.
"""

import logging
import time
from datetime import date, datetime, tzinfo
from decimal import Decimal

from licenze_api.config import get_settings
from licenze_api.exceptions import ClientNotFoundError, ExpiryNotComputableError
from licenze_api.models.domain.license import NON_RENEWABLE_TYPES, License, LicenseStatus, LicenseType
from licenze_api.models.domain.transaction import Transaction, TransactionType
from licenze_api.models.dto.renewal import BackfillSummary, RenewalFailure, RenewalRunSummary
from licenze_api.models.dto.transaction import TransactionCreate
from licenze_api.repositories.store import LicenseStore
from licenze_api.utils.clock import Clock, default_clock
from licenze_api.utils.expiry import compute_expiry, format_date_it
from licenze_api.utils.secure_logging import describe_error, log_error, log_warning

logger = logging.getLogger(__name__)

RENEWAL_NOTE = "Rinnovo automatico effettuato il {date}"
TRANSACTION_NOTE = "Transazione generata automaticamente per {type} licenza {activation_key}"

# In-process guard against overlapping passes (single-process deployment)
_run_in_progress = False


def calendar_day(value: datetime, tz: tzinfo | None) -> date:
    """Calendar day of ``value`` as seen in ``tz``.

    Naive datetimes are taken as already expressed in ``tz``.
    """
    if tz is not None and value.tzinfo is not None:
        return value.astimezone(tz).date()
    return value.date()


def is_renewal_candidate(license: License, today: date, tz: tzinfo | None = None) -> bool:
    """Check whether a license is due for automatic renewal on ``today``.

    Args:
        license: License to check
        today: Run date in the scheduler timezone
        tz: Scheduler timezone used to read the expiry day

    Returns:
        True if renewal is enabled, the license is active, it is a
        subscription and it expires today or already expired
    """
    if not license.renewal_enabled:
        return False
    if license.status != LicenseStatus.ATTIVA:
        return False
    if license.license_type in NON_RENEWABLE_TYPES:
        return False
    if license.expiry_date is None:
        return False
    return calendar_day(license.expiry_date, tz) <= today


def append_note(existing: str | None, line: str) -> str:
    """Append a line to a free-text notes field."""
    if not existing:
        return line
    return f"{existing}\n{line}"


def calculate_final_amount(amount: Decimal, discount: Decimal) -> Decimal:
    """Amount due after discount, never negative."""
    return max(Decimal("0"), amount - discount)


async def generate_transaction(
    store: LicenseStore,
    license: License,
    transaction_type: TransactionType = TransactionType.RINNOVO,
) -> Transaction:
    """Create the billing transaction for a renewal or an activation.

    Args:
        store: License store
        license: License being billed
        transaction_type: ``rinnovo`` or ``attivazione``

    Returns:
        Created transaction (status ``in_attesa``)

    Raises:
        ClientNotFoundError: If the license's client does not exist
    """
    client = await store.get_client_by_id(license.client_id)
    if client is None:
        raise ClientNotFoundError(client_id=str(license.client_id), license_id=str(license.id))

    amount = license.price or Decimal("0")
    discount = license.discount or Decimal("0")

    transaction = await store.create_transaction(
        TransactionCreate(
            license_id=license.id,
            client_id=client.id,
            company_id=client.company_id,
            type=transaction_type,
            amount=amount,
            discount=discount,
            final_amount=calculate_final_amount(amount, discount),
            notes=TRANSACTION_NOTE.format(
                type=transaction_type.value, activation_key=license.activation_key
            ),
        )
    )
    logger.info(
        f"Created {transaction_type.value} transaction for license {license.id}: "
        f"{transaction.final_amount} EUR"
    )
    return transaction


class RenewalService:
    """Service running automatic renewal passes against a license store."""

    def __init__(
        self,
        store: LicenseStore,
        clock: Clock | None = None,
        timeout_seconds: float | None = None,
        default_trial_days: int | None = None,
    ) -> None:
        """Initialize service.

        Args:
            store: License store
            clock: Returns the current aware time in the scheduler timezone
            timeout_seconds: Optional wall-clock budget for one pass
            default_trial_days: Trial length for licenses without one,
                defaults to the ``default_trial_days`` setting
        """
        self.store = store
        self.clock = clock or default_clock()
        self.timeout_seconds = timeout_seconds
        if default_trial_days is None:
            default_trial_days = get_settings().default_trial_days
        self.default_trial_days = default_trial_days

    def next_expiry(self, license: License, anchor: datetime) -> datetime | None:
        """Expiry of a new period of ``license`` starting at ``anchor``."""
        return compute_expiry(
            license.license_type, license.trial_days, anchor, self.default_trial_days
        )

    def select_candidates(self, licenses: list[License], now: datetime) -> list[License]:
        """Filter licenses down to the ones due for renewal at ``now``."""
        today = now.date()
        return [lic for lic in licenses if is_renewal_candidate(lic, today, now.tzinfo)]

    async def get_candidates(self) -> tuple[datetime, list[License]]:
        """Dry run: licenses a pass started now would renew.

        Returns:
            Tuple of (now, candidates)
        """
        now = self.clock()
        licenses = await self.store.list_licenses()
        return now, self.select_candidates(licenses, now)

    async def renew_license(self, license: License, now: datetime) -> datetime:
        """Bill one license and move its expiry forward from ``now``.

        The transaction and the license update are separate writes; if the
        update fails the license is still due and is picked up again by the
        next pass.

        Returns:
            The new expiry date

        Raises:
            ExpiryNotComputableError: If the license type has no expiry rule
            ClientNotFoundError: If the license's client does not exist
        """
        new_expiry = self.next_expiry(license, now)
        if new_expiry is None:
            raise ExpiryNotComputableError(
                license_id=str(license.id), license_type=license.license_type
            )

        await generate_transaction(self.store, license, TransactionType.RINNOVO)

        notes = append_note(license.notes, RENEWAL_NOTE.format(date=format_date_it(now.date())))
        await self.store.update_license(
            license.id,
            expiry_date=new_expiry,
            notes=notes,
            status=LicenseStatus.ATTIVA.value,
        )
        logger.info(f"License {license.id} renewed until {format_date_it(new_expiry.date())}")
        return new_expiry

    async def run_once(self) -> RenewalRunSummary:
        """Run one renewal pass.

        Never raises: per-license errors are recorded in the summary and a
        store that cannot list licenses aborts the pass.

        Returns:
            Summary of the pass
        """
        global _run_in_progress

        now = self.clock()
        summary = RenewalRunSummary(run_date=now.date(), started_at=now)

        if _run_in_progress:
            logger.warning("Automatic renewal already running, skipping this pass")
            summary.skipped = True
            summary.finished_at = self.clock()
            return summary

        _run_in_progress = True
        try:
            await self._process(now, summary)
        finally:
            _run_in_progress = False

        summary.finished_at = self.clock()
        logger.info(
            f"Automatic renewal completed: {summary.candidates} candidates, "
            f"{summary.succeeded} renewed, {summary.failed} failed"
            + (f", {summary.not_processed} not processed" if summary.not_processed else "")
        )
        return summary

    async def _process(self, now: datetime, summary: RenewalRunSummary) -> None:
        logger.info(f"Starting automatic renewal for {now.date().isoformat()}")

        try:
            licenses = await self.store.list_licenses()
        except Exception as e:
            log_error(logger, "Automatic renewal aborted: cannot list licenses", e)
            summary.aborted = True
            return

        candidates = self.select_candidates(licenses, now)
        summary.candidates = len(candidates)
        logger.info(f"Found {len(candidates)} licenses due for automatic renewal")

        deadline = None
        if self.timeout_seconds is not None:
            deadline = time.monotonic() + self.timeout_seconds

        for index, license in enumerate(candidates):
            if deadline is not None and time.monotonic() >= deadline:
                summary.not_processed = len(candidates) - index
                summary.aborted = True
                log_warning(
                    logger,
                    f"Automatic renewal timed out, {summary.not_processed} licenses left for next run",
                )
                break

            try:
                await self.renew_license(license, now)
            except Exception as e:
                summary.failed += 1
                summary.failures.append(
                    RenewalFailure(license_id=license.id, reason=describe_error(e))
                )
                log_error(logger, f"Automatic renewal failed for license {license.id}", e)
            else:
                summary.succeeded += 1
                summary.renewed_license_ids.append(license.id)

    async def backfill_missing_expiry_dates(self) -> BackfillSummary:
        """Fill in activation and expiry dates missing on existing licenses.

        Active licenses without an activation date get "now". Non-permanent
        licenses without an expiry date get one computed from their
        activation date, creation date or "now", in that order.

        Returns:
            Summary of the backfill
        """
        now = self.clock()
        summary = BackfillSummary()

        try:
            licenses = await self.store.list_licenses()
        except Exception as e:
            log_error(logger, "Expiry backfill aborted: cannot list licenses", e)
            summary.aborted = True
            return summary

        logger.info(f"Checking {len(licenses)} licenses for missing expiry dates")

        for license in licenses:
            summary.checked += 1
            updates: dict = {}

            if license.activation_date is None and license.status == LicenseStatus.ATTIVA:
                updates["activation_date"] = now

            if license.expiry_date is None and license.license_type != LicenseType.PERMANENTE:
                anchor = license.activation_date or license.created_at or now
                expiry = self.next_expiry(license, anchor)
                if expiry is not None:
                    updates["expiry_date"] = expiry

            if not updates:
                continue

            try:
                await self.store.update_license(license.id, **updates)
            except Exception as e:
                summary.failed += 1
                summary.failures.append(
                    RenewalFailure(license_id=license.id, reason=describe_error(e))
                )
                log_error(logger, f"Expiry backfill failed for license {license.id}", e)
            else:
                summary.updated += 1

        logger.info(f"Expiry backfill completed: {summary.updated} licenses updated")
        return summary


async def run_renewals_once(
    store: LicenseStore,
    clock: Clock | None = None,
    timeout_seconds: float | None = None,
) -> RenewalRunSummary:
    """Run one automatic renewal pass against ``store``.

    Used by the daily scheduled job and by manual triggers.
    """
    service = RenewalService(store, clock=clock, timeout_seconds=timeout_seconds)
    return await service.run_once()
