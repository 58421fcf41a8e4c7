"""Transaction repository."""

from licenze_api.models.orm.transaction import TransactionORM
from licenze_api.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[TransactionORM]):
    """Repository for billing transactions (insert-only here)."""

    model = TransactionORM
