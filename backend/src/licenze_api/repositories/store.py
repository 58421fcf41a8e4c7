"""License store abstraction used by the renewal and activation services.

The services only need a handful of operations, so they depend on this
narrow interface instead of on sessions or repositories. ``SqlLicenseStore``
is the database-backed implementation; tests use an in-memory one.
"""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from licenze_api.exceptions import LicenseNotFoundError
from licenze_api.models.domain.client import Client
from licenze_api.models.domain.license import License
from licenze_api.models.domain.transaction import Transaction
from licenze_api.models.dto.activation import ActivationLogCreate
from licenze_api.models.dto.transaction import TransactionCreate
from licenze_api.repositories.activation_log_repository import ActivationLogRepository
from licenze_api.repositories.client_repository import ClientRepository
from licenze_api.repositories.license_repository import LicenseRepository
from licenze_api.repositories.transaction_repository import TransactionRepository

# Columns the services are allowed to write back on a license
UPDATABLE_LICENSE_FIELDS = frozenset(
    {"expiry_date", "notes", "status", "activation_date", "computer_key"}
)


class LicenseStore(ABC):
    """Storage operations required by the renewal job."""

    @abstractmethod
    async def list_licenses(self) -> list[License]:
        """Return every license; filtering is done by the caller."""
        pass

    @abstractmethod
    async def get_client_by_id(self, client_id: UUID) -> Client | None:
        """Return a client or None if it does not exist."""
        pass

    @abstractmethod
    async def create_transaction(self, fields: TransactionCreate) -> Transaction:
        """Persist a new transaction and return it."""
        pass

    @abstractmethod
    async def update_license(self, license_id: UUID, **fields: Any) -> None:
        """Write ``fields`` on a license.

        Raises:
            LicenseNotFoundError: If the license does not exist
        """
        pass


class ActivationStore(LicenseStore):
    """License store that can also activate licenses.

    Adds lookup by activation key and the activation audit log.
    """

    @abstractmethod
    async def get_license_by_activation_key(self, activation_key: str) -> License | None:
        """Return a license or None if no license has this key."""
        pass

    @abstractmethod
    async def log_activation(self, fields: ActivationLogCreate) -> None:
        """Record an activation attempt."""
        pass


class SqlLicenseStore(ActivationStore):
    """SQLAlchemy-backed store working inside one ``AsyncSession``.

    Every write runs in a savepoint so a failed write leaves the session
    usable for the next license. With ``autocommit`` each write is committed
    on its own, otherwise the session owner commits.
    """

    def __init__(self, session: AsyncSession, autocommit: bool = False) -> None:
        """Initialize store with database session."""
        self.session = session
        self.autocommit = autocommit
        self.license_repo = LicenseRepository(session)
        self.client_repo = ClientRepository(session)
        self.transaction_repo = TransactionRepository(session)
        self.activation_log_repo = ActivationLogRepository(session)

    async def list_licenses(self) -> list[License]:
        rows = await self.license_repo.get_all_licenses()
        return [License.model_validate(row) for row in rows]

    async def get_client_by_id(self, client_id: UUID) -> Client | None:
        row = await self.client_repo.get_by_id(client_id)
        return Client.model_validate(row) if row else None

    async def create_transaction(self, fields: TransactionCreate) -> Transaction:
        values = fields.model_dump()
        values["type"] = str(fields.type)
        values["status"] = str(fields.status)
        async with self.session.begin_nested():
            row = await self.transaction_repo.create(**values)
            transaction = Transaction.model_validate(row)
        await self._commit()
        return transaction

    async def update_license(self, license_id: UUID, **fields: Any) -> None:
        unknown = set(fields) - UPDATABLE_LICENSE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update license fields: {', '.join(sorted(unknown))}")

        async with self.session.begin_nested():
            updated = await self.license_repo.update(license_id, **fields)
            if updated is None:
                raise LicenseNotFoundError(license_id=str(license_id))
        await self._commit()

    async def get_license_by_activation_key(self, activation_key: str) -> License | None:
        row = await self.license_repo.get_by_activation_key(activation_key)
        return License.model_validate(row) if row else None

    async def log_activation(self, fields: ActivationLogCreate) -> None:
        values = fields.model_dump()
        values["key_type"] = str(fields.key_type)
        values["result"] = str(fields.result)
        async with self.session.begin_nested():
            await self.activation_log_repo.create(**values)
        await self._commit()

    async def _commit(self) -> None:
        if self.autocommit:
            await self.session.commit()
