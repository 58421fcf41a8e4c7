"""Mapping of domain errors to HTTP responses."""

import json

import pytest

from licenze_api.exceptions import (
    ClientNotFoundError,
    ExpiryNotComputableError,
    LicenseAlreadyActiveError,
    LicenseNotFoundError,
)
from licenze_api.middleware.error_handler import domain_exception_handler


class TestDomainExceptionHandler:
    """Tests for domain_exception_handler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (LicenseNotFoundError(activation_key="LIC-1"), 404),
            (ClientNotFoundError(client_id="c1"), 404),
            (LicenseAlreadyActiveError(license_id="l1"), 409),
            (ExpiryNotComputableError(license_id="l1", license_type="settimanale"), 422),
        ],
    )
    async def test_status_codes(self, error, status_code: int) -> None:
        response = await domain_exception_handler(None, error)

        assert response.status_code == status_code
        assert json.loads(response.body) == {"detail": error.message}
