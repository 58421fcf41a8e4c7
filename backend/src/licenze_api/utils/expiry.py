"""License expiry date rules.

A subscription bought on day D runs through the day before the same date of
the next period, so monthly and annual expiries are "one period minus one day".
"""

from datetime import date, timedelta
from typing import TypeVar

from dateutil.relativedelta import relativedelta

from licenze_api.models.domain.license import LicenseType

DEFAULT_TRIAL_DAYS = 30

MONTHLY_TYPES = (LicenseType.ABBONAMENTO_MENSILE, LicenseType.MENSILE)
ANNUAL_TYPES = (LicenseType.ABBONAMENTO_ANNUALE, LicenseType.ANNUALE)

# datetime is a subclass of date, so both anchor kinds are accepted
D = TypeVar("D", bound=date)


def compute_expiry(
    license_type: str | None,
    trial_days: int | None,
    anchor: D,
    default_trial_days: int = DEFAULT_TRIAL_DAYS,
) -> D | None:
    """Compute the expiry date of a license starting at ``anchor``.

    Args:
        license_type: License type string (exact match, legacy aliases included)
        trial_days: Trial length in days, only used for trial licenses
        anchor: Start of the period (date or datetime)
        default_trial_days: Trial length used when ``trial_days`` is None

    Returns:
        Expiry of the same type as ``anchor``, or None when the license
        does not expire or the type is unknown
    """
    if license_type == LicenseType.PERMANENTE:
        return None

    if license_type == LicenseType.TRIAL:
        days = trial_days if trial_days is not None else default_trial_days
        return anchor + timedelta(days=days)

    if license_type in MONTHLY_TYPES:
        return anchor + relativedelta(months=1) - timedelta(days=1)

    if license_type in ANNUAL_TYPES:
        return anchor + relativedelta(years=1) - timedelta(days=1)

    return None


def format_date_it(value: date) -> str:
    """Format a date the way it-IT locales print short dates (d/m/yyyy)."""
    return f"{value.day}/{value.month}/{value.year}"
