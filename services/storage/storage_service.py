"""
Storage Service for MermaidUI

Persistence gateway over collections and diagrams.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from services.storage.collection_mixin import CollectionMixin
from services.storage.diagram_mixin import DiagramMixin
from services.storage.exceptions import StorageInternalError


logger = logging.getLogger(__name__)


class StorageService(
    CollectionMixin,
    DiagramMixin
):
    """
    Collection and diagram persistence service.

    Lookups of missing records return None (get/update) or False
    (delete). Validation runs before any store access. Store failures
    are rolled back and surfaced as StorageInternalError, never retried.
    """

    def __init__(self, db: Session):
        """
        Initialize service.

        Args:
            db: Database session
        """
        self.db = db

    @contextmanager
    def _store_operation(self, operation: str):
        """Wrap store access, translating SQLAlchemy failures."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("[Storage] %s failed: %s", operation, e, exc_info=True)
            raise StorageInternalError(operation, e) from e
