"""
Diagram Mixin for MermaidUI

Mixin class for diagram operations: CRUD, per-collection listing,
source file upload and duplication.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import logging
import re
from datetime import datetime
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, ContextManager, Optional, List

from sqlalchemy.orm import Session

from models.common import MERMAID_FILE_EXTENSIONS
from models.domain.collections import Collection
from models.domain.diagrams import Diagram
from services.storage.exceptions import (
    StorageValidationError,
    CollectionNotFoundError,
    DiagramNotFoundError,
)


logger = logging.getLogger(__name__)

MERMAID_EXTENSION_PATTERN = re.compile(r'\.(mmd|mermaid)$', re.IGNORECASE)


def diagram_name_from_filename(filename: str) -> str:
    """Strip directories and the .mmd/.mermaid extension from an upload name."""
    base_name = PurePosixPath(filename.replace('\\', '/')).name
    return MERMAID_EXTENSION_PATTERN.sub('', base_name)


def is_mermaid_filename(filename: Optional[str]) -> bool:
    """Whether the file name carries an accepted Mermaid source extension."""
    return bool(filename) and filename.lower().endswith(MERMAID_FILE_EXTENSIONS)


class DiagramMixin:
    """Mixin for diagram operations."""

    # Type annotations for expected attributes provided by classes using this mixin
    db: Session

    if TYPE_CHECKING:
        def _store_operation(self, _operation: str) -> ContextManager[None]:
            """Type stub: context manager provided by StorageService."""

    def list_diagrams_by_collection(self, collection_id: int) -> List[Diagram]:
        """Return the diagrams of one collection, newest first."""
        with self._store_operation("list_diagrams_by_collection"):
            return self.db.query(Diagram).filter(
                Diagram.collection_id == collection_id
            ).order_by(
                Diagram.created_at.desc(),
                Diagram.id.desc()
            ).all()

    def get_diagram(self, diagram_id: int) -> Optional[Diagram]:
        """
        Get a diagram by id.

        Returns:
            Diagram or None if it does not exist
        """
        with self._store_operation("get_diagram"):
            return self.db.query(Diagram).filter(
                Diagram.id == diagram_id
            ).first()

    def create_diagram(
        self,
        collection_id: Optional[int],
        name: Optional[str],
        content: Optional[str]
    ) -> Diagram:
        """
        Create a new diagram in an existing collection.

        Raises:
            StorageValidationError: If collection_id, name or content is missing
            CollectionNotFoundError: If the collection does not exist
        """
        missing = []
        if collection_id is None:
            missing.append("collection_id")
        if not name or not name.strip():
            missing.append("name")
        # Whitespace-only source is still source
        if not content:
            missing.append("content")
        if missing:
            raise StorageValidationError(
                "collection_id, name, and content are required",
                fields=missing
            )

        self._require_collection(collection_id)

        diagram = Diagram(collection_id=collection_id, name=name, content=content)
        with self._store_operation("create_diagram"):
            self.db.add(diagram)
            self.db.commit()
            self.db.refresh(diagram)

        logger.info(
            "[Storage] Created diagram %s '%s' in collection %s",
            diagram.id, diagram.name, collection_id
        )
        return diagram

    def update_diagram(
        self,
        diagram_id: int,
        name: Optional[str] = None,
        content: Optional[str] = None
    ) -> Optional[Diagram]:
        """
        Update name and content of a diagram.

        Fields left as None keep their stored value. Content may be empty.

        Returns:
            Updated Diagram, or None if it does not exist
        """
        if name is not None and not name.strip():
            raise StorageValidationError("Name is required", fields=["name"])

        diagram = self.get_diagram(diagram_id)
        if not diagram:
            return None

        if name is not None:
            diagram.name = name
        if content is not None:
            diagram.content = content
        diagram.updated_at = datetime.utcnow()

        with self._store_operation("update_diagram"):
            self.db.commit()
            self.db.refresh(diagram)

        logger.debug("[Storage] Updated diagram %s", diagram_id)
        return diagram

    def delete_diagram(self, diagram_id: int) -> bool:
        """
        Delete a diagram.

        Returns:
            True if deleted, False if not found
        """
        diagram = self.get_diagram(diagram_id)
        if not diagram:
            return False

        with self._store_operation("delete_diagram"):
            self.db.delete(diagram)
            self.db.commit()

        logger.info("[Storage] Deleted diagram %s", diagram_id)
        return True

    def upload_diagram(
        self,
        collection_id: Optional[int],
        filename: Optional[str],
        data: Optional[bytes]
    ) -> Diagram:
        """
        Create a diagram from an uploaded .mmd/.mermaid file.

        The diagram name is the file name without its extension; the
        content is the file decoded as UTF-8, otherwise untouched.

        Raises:
            StorageValidationError: Missing file/collection, wrong extension or non UTF-8 bytes
            CollectionNotFoundError: If the collection does not exist
        """
        if collection_id is None or data is None or not filename:
            raise StorageValidationError(
                "collection_id and file are required",
                fields=["collection_id", "file"]
            )
        if not is_mermaid_filename(filename):
            raise StorageValidationError(
                "Please upload a .mmd or .mermaid file",
                fields=["file"]
            )

        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise StorageValidationError(
                "File must be UTF-8 encoded text",
                fields=["file"]
            ) from e

        name = diagram_name_from_filename(filename)
        if not name.strip():
            raise StorageValidationError("Name is required", fields=["file"])

        self._require_collection(collection_id)

        diagram = Diagram(collection_id=collection_id, name=name, content=content)
        with self._store_operation("upload_diagram"):
            self.db.add(diagram)
            self.db.commit()
            self.db.refresh(diagram)

        logger.info("[Storage] Uploaded '%s' as diagram %s", filename, diagram.id)
        return diagram

    def duplicate_diagram(self, diagram_id: int) -> Diagram:
        """
        Copy a diagram into its own collection as "<name> (copy)".

        Raises:
            DiagramNotFoundError: If the source diagram does not exist
        """
        source = self.get_diagram(diagram_id)
        if not source:
            raise DiagramNotFoundError(diagram_id)

        copy = Diagram(
            collection_id=source.collection_id,
            name=f"{source.name} (copy)",
            content=source.content
        )
        with self._store_operation("duplicate_diagram"):
            self.db.add(copy)
            self.db.commit()
            self.db.refresh(copy)

        logger.info("[Storage] Duplicated diagram %s as %s", diagram_id, copy.id)
        return copy

    def _require_collection(self, collection_id: int) -> Collection:
        """Return the collection or raise CollectionNotFoundError."""
        with self._store_operation("get_collection"):
            collection = self.db.query(Collection).filter(
                Collection.id == collection_id
            ).first()
        if not collection:
            raise CollectionNotFoundError(collection_id)
        return collection
