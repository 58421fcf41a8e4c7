"""Tests for the operational renewal endpoints."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from licenze_api.dependencies import get_activation_service, get_renewal_service
from licenze_api.main import app
from licenze_api.security.rate_limit import limiter
from licenze_api.services.activation_service import ActivationService
from licenze_api.services.renewal_service import RenewalService

ROME = ZoneInfo("Europe/Rome")

AUTH = {"X-Ops-Token": "test-ops-token"}
BASE = "/api/v1/renewals"


@pytest.fixture
def client(store, clock, monkeypatch):
    """Test client wired to the in-memory store."""
    monkeypatch.setattr(limiter, "enabled", False)
    app.dependency_overrides[get_renewal_service] = lambda: RenewalService(store, clock=clock)
    app.dependency_overrides[get_activation_service] = lambda: ActivationService(store, clock=clock)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestOpsTokenGuard:
    """Tests for the X-Ops-Token requirement."""

    def test_missing_token_rejected(self, client) -> None:
        response = client.get(f"{BASE}/candidates")
        assert response.status_code == 403

    def test_wrong_token_rejected(self, client) -> None:
        response = client.post(f"{BASE}/run", headers={"X-Ops-Token": "nope"})
        assert response.status_code == 403

    def test_health_is_open(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestRenewalEndpoints:
    """Tests for candidates, run and backfill."""

    def test_candidates_lists_due_licenses(self, client, store) -> None:
        due = store.add_license(expiry_date=datetime(2025, 8, 17, 23, 0, tzinfo=ROME))
        store.add_license(expiry_date=datetime(2025, 12, 1, tzinfo=ROME))

        response = client.get(f"{BASE}/candidates", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["run_date"] == "2025-08-18"
        assert data["items"][0]["id"] == str(due.id)
        assert data["items"][0]["next_expiry_date"].startswith("2025-09-17")
        assert store.transactions == []

    def test_run_returns_summary(self, client, store) -> None:
        lic = store.add_license(expiry_date=datetime(2025, 8, 18, tzinfo=ROME))
        broken = store.add_license(expiry_date=datetime(2025, 8, 18, tzinfo=ROME))
        store.fail_create_for.add(broken.id)

        response = client.post(f"{BASE}/run", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["candidates"] == 2
        assert data["succeeded"] == 1
        assert data["failed"] == 1
        assert data["renewed_license_ids"] == [str(lic.id)]
        assert data["failures"][0]["license_id"] == str(broken.id)

    def test_backfill_returns_summary(self, client, store) -> None:
        store.add_license(
            license_type="annuale",
            activation_date=datetime(2025, 3, 1, tzinfo=ROME),
            expiry_date=None,
        )

        response = client.post(f"{BASE}/backfill", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["updated"] == 1

    def test_schedule_reports_stopped_scheduler(self, client) -> None:
        response = client.get(f"{BASE}/schedule", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {
            "running": False,
            "timezone": "Europe/Rome",
            "next_run_time": None,
        }


class TestActivateEndpoint:
    """Tests for POST /activate."""

    def test_activate_unknown_key_returns_404(self, client) -> None:
        response = client.post(
            f"{BASE}/activate",
            headers=AUTH,
            json={"activation_key": "LIC-MISSING", "computer_key": "PC-1"},
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "License not found"}

    def test_activate_pending_license(self, client, store) -> None:
        lic = store.add_license(status="in_attesa_convalida", expiry_date=None)

        response = client.post(
            f"{BASE}/activate",
            headers=AUTH,
            json={
                "activation_key": lic.activation_key,
                "computer_key": "PC-1",
                "device_info": {"os": "Windows 11"},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "attiva"
        assert data["expiry_date"].startswith("2025-09-17")
        assert store.licenses[lic.id].computer_key == "PC-1"
        assert store.activation_logs[0].license_id == lic.id
        assert store.activation_logs[0].ip_address == "testclient"
        assert store.activation_logs[0].user_agent == "testclient"
        assert store.activation_logs[0].device_info == {"os": "Windows 11"}

    def test_activate_twice_returns_409(self, client, store) -> None:
        lic = store.add_license(status="attiva")

        response = client.post(
            f"{BASE}/activate",
            headers=AUTH,
            json={"activation_key": lic.activation_key, "computer_key": "PC-1"},
        )

        assert response.status_code == 409
