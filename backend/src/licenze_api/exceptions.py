"""Domain-specific exceptions for the licenze API.

These exceptions keep service-layer errors separate from HTTP responses:
routers and the renewal batch loop branch on the type, never on the message.
"""

from typing import Any


class LicenzeAPIError(Exception):
    """Base exception for all licenze API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(LicenzeAPIError):
    """Base class for resource not found errors."""

    pass


class LicenseNotFoundError(NotFoundError):
    """Raised when a license cannot be found."""

    def __init__(self, license_id: str | None = None, activation_key: str | None = None) -> None:
        details: dict[str, Any] = {}
        if license_id:
            details["license_id"] = str(license_id)
        if activation_key:
            details["activation_key"] = activation_key
        super().__init__("License not found", details)


class ClientNotFoundError(NotFoundError):
    """Raised when the client a license bills to cannot be found."""

    def __init__(self, client_id: str | None = None, license_id: str | None = None) -> None:
        details: dict[str, Any] = {}
        if client_id:
            details["client_id"] = str(client_id)
        if license_id:
            details["license_id"] = str(license_id)
        super().__init__("Client not found", details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(LicenzeAPIError):
    """Base class for resource conflict errors."""

    pass


class LicenseAlreadyActiveError(ConflictError):
    """Raised when activating a license that is already active."""

    def __init__(self, license_id: str | None = None) -> None:
        details = {"license_id": str(license_id)} if license_id else {}
        super().__init__("License already activated", details)


# =============================================================================
# Renewal Errors
# =============================================================================


class RenewalError(LicenzeAPIError):
    """Base class for errors while renewing a single license."""

    pass


class ExpiryNotComputableError(RenewalError):
    """Raised when no expiry date can be computed for a renewal candidate."""

    def __init__(self, license_id: str | None = None, license_type: str | None = None) -> None:
        details: dict[str, Any] = {}
        if license_id:
            details["license_id"] = str(license_id)
        if license_type:
            details["license_type"] = license_type
        super().__init__("No expiry date for license type", details)
