"""Activation log repository."""

from licenze_api.models.orm.activation_log import ActivationLogORM
from licenze_api.repositories.base import BaseRepository


class ActivationLogRepository(BaseRepository[ActivationLogORM]):
    """Repository for activation audit records."""

    model = ActivationLogORM
