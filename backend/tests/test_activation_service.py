"""License activation."""

from datetime import date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from licenze_api.exceptions import (
    ClientNotFoundError,
    LicenseAlreadyActiveError,
    LicenseNotFoundError,
)
from licenze_api.models.domain.activation_log import ActivationKeyType, ActivationResult
from licenze_api.models.domain.transaction import TransactionType
from licenze_api.services.activation_service import ActivationService

ROME = ZoneInfo("Europe/Rome")


class TestActivateLicense:
    """Tests for ActivationService.activate_license."""

    @pytest.mark.asyncio
    async def test_activation_computes_expiry_and_bills(self, store, clock, run_time) -> None:
        lic = store.add_license(
            activation_key="LIC-AAAA1111",
            license_type="abbonamento_mensile",
            status="in_attesa_convalida",
        )

        response = await ActivationService(store, clock=clock).activate_license(
            "LIC-AAAA1111", "PC-01"
        )

        updated = store.licenses[lic.id]
        assert updated.status == "attiva"
        assert updated.computer_key == "PC-01"
        assert updated.activation_date == run_time
        assert updated.expiry_date.date() == date(2025, 9, 17)
        assert response.expiry_date == updated.expiry_date
        assert len(store.transactions) == 1
        assert store.transactions[0].type == TransactionType.ATTIVAZIONE
        assert response.transaction_id == store.transactions[0].id

    @pytest.mark.asyncio
    async def test_trial_uses_license_trial_days(self, store, clock) -> None:
        lic = store.add_license(activation_key="TRIAL-1", license_type="trial", trial_days=14, status="demo")

        await ActivationService(store, clock=clock).activate_license("TRIAL-1", "PC-02")

        assert store.licenses[lic.id].expiry_date.date() == date(2025, 9, 1)

    @pytest.mark.asyncio
    async def test_existing_expiry_kept(self, store, clock) -> None:
        expiry = datetime(2026, 1, 1, tzinfo=ROME)
        lic = store.add_license(activation_key="KEEP-1", status="sospesa", expiry_date=expiry)

        await ActivationService(store, clock=clock).activate_license("KEEP-1", "PC-03")

        assert store.licenses[lic.id].expiry_date == expiry

    @pytest.mark.asyncio
    async def test_permanent_license_has_no_expiry(self, store, clock) -> None:
        lic = store.add_license(activation_key="PERM-1", license_type="permanente", status="demo")

        response = await ActivationService(store, clock=clock).activate_license("PERM-1", "PC-04")

        assert response.expiry_date is None
        assert store.licenses[lic.id].expiry_date is None

    @pytest.mark.asyncio
    async def test_unknown_key(self, store, clock) -> None:
        with pytest.raises(LicenseNotFoundError):
            await ActivationService(store, clock=clock).activate_license("NOPE", "PC-05")

    @pytest.mark.asyncio
    async def test_already_active(self, store, clock) -> None:
        store.add_license(activation_key="ACTIVE-1", status="attiva")

        with pytest.raises(LicenseAlreadyActiveError):
            await ActivationService(store, clock=clock).activate_license("ACTIVE-1", "PC-06")

        assert store.transactions == []

    @pytest.mark.asyncio
    async def test_missing_client_leaves_license_untouched(self, store, clock) -> None:
        lic = store.add_license(activation_key="ORPHAN-1", client_id=uuid4(), status="demo")

        with pytest.raises(ClientNotFoundError):
            await ActivationService(store, clock=clock).activate_license("ORPHAN-1", "PC-07")

        assert store.licenses[lic.id] == lic

    @pytest.mark.asyncio
    async def test_trial_without_days_uses_configured_default(self, store, clock) -> None:
        lic = store.add_license(activation_key="TRIAL-2", license_type="trial", trial_days=None, status="demo")

        await ActivationService(store, clock=clock, default_trial_days=7).activate_license(
            "TRIAL-2", "PC-08"
        )

        assert store.licenses[lic.id].expiry_date.date() == date(2025, 8, 25)

    @pytest.mark.asyncio
    async def test_activation_is_logged(self, store, clock) -> None:
        lic = store.add_license(activation_key="LOG-1", status="in_attesa_convalida")

        await ActivationService(store, clock=clock).activate_license(
            "LOG-1",
            "PC-09",
            device_info={"os": "Windows 11"},
            ip_address="10.0.0.5",
            user_agent="GestoreLicenze/2.1",
        )

        assert len(store.activation_logs) == 1
        entry = store.activation_logs[0]
        assert entry.license_id == lic.id
        assert entry.key_type == ActivationKeyType.ACTIVATION
        assert entry.result == ActivationResult.SUCCESS
        assert entry.device_info == {"os": "Windows 11"}
        assert entry.ip_address == "10.0.0.5"
        assert entry.user_agent == "GestoreLicenze/2.1"
        assert store.calls[-3:] == ["create_transaction", "update_license", "log_activation"]

    @pytest.mark.asyncio
    async def test_update_failure_propagates_before_logging(self, store, clock) -> None:
        lic = store.add_license(activation_key="FAIL-1", status="demo")
        store.fail_update_for.add(lic.id)

        with pytest.raises(ConnectionError):
            await ActivationService(store, clock=clock).activate_license("FAIL-1", "PC-10")

        assert store.activation_logs == []
        assert store.licenses[lic.id].status == "demo"
