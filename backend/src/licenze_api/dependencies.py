"""FastAPI dependencies wiring services to the database."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from licenze_api.config import get_settings
from licenze_api.database import get_db
from licenze_api.repositories.store import ActivationStore, SqlLicenseStore
from licenze_api.services.activation_service import ActivationService
from licenze_api.services.renewal_service import RenewalService


def get_license_store(db: Annotated[AsyncSession, Depends(get_db)]) -> ActivationStore:
    """Get a database-backed license store committing each write."""
    return SqlLicenseStore(db, autocommit=True)


def get_activation_store(db: Annotated[AsyncSession, Depends(get_db)]) -> ActivationStore:
    """Get a license store whose writes are committed once, by ``get_db``."""
    return SqlLicenseStore(db)


def get_renewal_service(
    store: Annotated[ActivationStore, Depends(get_license_store)],
) -> RenewalService:
    """Get RenewalService instance."""
    settings = get_settings()
    return RenewalService(
        store,
        timeout_seconds=settings.renewal_run_timeout_seconds,
        default_trial_days=settings.default_trial_days,
    )


def get_activation_service(
    store: Annotated[ActivationStore, Depends(get_activation_store)],
) -> ActivationService:
    """Get ActivationService instance."""
    return ActivationService(store, default_trial_days=get_settings().default_trial_days)
