"""Client repository."""

from licenze_api.models.orm.client import ClientORM
from licenze_api.repositories.base import BaseRepository


class ClientRepository(BaseRepository[ClientORM]):
    """Repository for client lookups."""

    model = ClientORM
