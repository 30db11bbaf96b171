"""
Collection Mixin for MermaidUI

Mixin class for collection operations.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, ContextManager, Optional, List

from sqlalchemy.orm import Session

from models.domain.collections import Collection
from services.storage.exceptions import StorageValidationError


logger = logging.getLogger(__name__)


class CollectionMixin:
    """Mixin for collection operations."""

    # Type annotations for expected attributes provided by classes using this mixin
    db: Session

    if TYPE_CHECKING:
        def _store_operation(self, _operation: str) -> ContextManager[None]:
            """Type stub: context manager provided by StorageService."""

    def list_collections(self) -> List[Collection]:
        """Return every collection, newest first."""
        with self._store_operation("list_collections"):
            return self.db.query(Collection).order_by(
                Collection.created_at.desc(),
                Collection.id.desc()
            ).all()

    def get_collection(self, collection_id: int) -> Optional[Collection]:
        """
        Get a collection by id.

        Returns:
            Collection or None if it does not exist
        """
        with self._store_operation("get_collection"):
            return self.db.query(Collection).filter(
                Collection.id == collection_id
            ).first()

    def create_collection(
        self,
        name: Optional[str],
        description: Optional[str] = None
    ) -> Collection:
        """
        Create a new collection.

        Raises:
            StorageValidationError: If name is missing or blank
        """
        if not name or not name.strip():
            raise StorageValidationError("Name is required", fields=["name"])

        collection = Collection(name=name, description=description or None)
        with self._store_operation("create_collection"):
            self.db.add(collection)
            self.db.commit()
            self.db.refresh(collection)

        logger.info("[Storage] Created collection %s '%s'", collection.id, collection.name)
        return collection

    def update_collection(
        self,
        collection_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[Collection]:
        """
        Update name and description of a collection.

        Fields left as None keep their stored value.

        Returns:
            Updated Collection, or None if it does not exist
        """
        if name is not None and not name.strip():
            raise StorageValidationError("Name is required", fields=["name"])

        collection = self.get_collection(collection_id)
        if not collection:
            return None

        if name is not None:
            collection.name = name
        if description is not None:
            collection.description = description or None
        collection.updated_at = datetime.utcnow()

        with self._store_operation("update_collection"):
            self.db.commit()
            self.db.refresh(collection)
        return collection

    def delete_collection(self, collection_id: int) -> bool:
        """
        Delete a collection and, by cascade, all of its diagrams.

        Returns:
            True if deleted, False if not found
        """
        collection = self.get_collection(collection_id)
        if not collection:
            return False

        with self._store_operation("delete_collection"):
            self.db.delete(collection)
            self.db.commit()

        logger.info("[Storage] Deleted collection %s", collection_id)
        return True
