"""BaseService — shared foundation for leasectl services.

Every service receives an :class:`AgreementStore` at construction time.
The store owns transaction boundaries; services own the translation of
outcomes into :class:`ServiceResult`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leasectl.infrastructure.store import AgreementStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class AgreementService(BaseService):
            def create_agreement(self, ...) -> ServiceResult:
                agreement = self._store.create(...)
                ...
    """

    def __init__(self, store: AgreementStore) -> None:
        self._store = store

    @property
    def store(self) -> AgreementStore:
        return self._store
