"""License repository."""

from sqlalchemy import select

from licenze_api.models.orm.license import LicenseORM
from licenze_api.repositories.base import BaseRepository


class LicenseRepository(BaseRepository[LicenseORM]):
    """Repository for license operations."""

    model = LicenseORM

    async def get_all_licenses(self) -> list[LicenseORM]:
        """Get every license, oldest first."""
        result = await self.session.execute(
            select(LicenseORM).order_by(LicenseORM.created_at, LicenseORM.id)
        )
        return list(result.scalars().all())

    async def get_by_activation_key(self, activation_key: str) -> LicenseORM | None:
        """Get a license by its activation key.

        Args:
            activation_key: Unique activation key

        Returns:
            LicenseORM or None if not found
        """
        result = await self.session.execute(
            select(LicenseORM).where(LicenseORM.activation_key == activation_key)
        )
        return result.scalar_one_or_none()
