"""
Desktop Command Surface
=======================

Name-dispatched storage commands for a desktop shell. Each command runs
in its own database session and returns plain JSON-ready values:
dicts, lists of dicts, None (not found) or bool (delete).

Usage:
    commands = DesktopCommands(SessionLocal)
    commands.invoke("create_diagram", collection_id=1, name="Flow", content="graph TD")

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Callable, Dict, Optional
import inspect
import logging

from sqlalchemy.orm import Session

from models.responses import CollectionResponse, DiagramResponse
from services.storage import StorageService
from services.storage.exceptions import StorageError

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command failed; carries the storage error code."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


def _collection_dict(collection) -> Optional[Dict[str, Any]]:
    if collection is None:
        return None
    return CollectionResponse.model_validate(collection).model_dump(mode='json')


def _diagram_dict(diagram) -> Optional[Dict[str, Any]]:
    if diagram is None:
        return None
    return DiagramResponse.model_validate(diagram).model_dump(mode='json')


class DesktopCommands:
    """Dispatches shell commands to StorageService."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory
        self._commands: Dict[str, Callable[..., Any]] = {
            "get_collections": self.get_collections,
            "get_collection": self.get_collection,
            "create_collection": self.create_collection,
            "update_collection": self.update_collection,
            "delete_collection": self.delete_collection,
            "get_diagrams_by_collection": self.get_diagrams_by_collection,
            "get_diagram": self.get_diagram,
            "create_diagram": self.create_diagram,
            "update_diagram": self.update_diagram,
            "delete_diagram": self.delete_diagram,
        }

    @property
    def names(self):
        return sorted(self._commands)

    def invoke(self, command: str, **kwargs) -> Any:
        """
        Run a command by name with keyword inputs.

        Raises:
            CommandError: Unknown command, bad arguments or a storage failure
        """
        handler = self._commands.get(command)
        if handler is None:
            raise CommandError(f"Unknown command: {command}", error_code="UNKNOWN_COMMAND")
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as e:
            raise CommandError(f"Invalid arguments for {command}: {e}", error_code="VALIDATION") from e
        try:
            return handler(**kwargs)
        except StorageError as e:
            logger.debug("[Commands] %s failed: %s", command, e.message)
            raise CommandError(e.message, error_code=e.error_code) from e

    def _run(self, operation: Callable[[StorageService], Any]) -> Any:
        db = self.session_factory()
        try:
            return operation(StorageService(db))
        finally:
            db.close()

    def get_collections(self):
        return self._run(lambda s: [_collection_dict(c) for c in s.list_collections()])

    def get_collection(self, id: int):  # pylint: disable=redefined-builtin
        return self._run(lambda s: _collection_dict(s.get_collection(id)))

    def create_collection(self, name: str, description: Optional[str] = None):
        return self._run(lambda s: _collection_dict(s.create_collection(name, description)))

    def update_collection(self, id: int, name: str, description: Optional[str] = None):  # pylint: disable=redefined-builtin
        return self._run(lambda s: _collection_dict(s.update_collection(id, name, description)))

    def delete_collection(self, id: int) -> bool:  # pylint: disable=redefined-builtin
        return self._run(lambda s: s.delete_collection(id))

    def get_diagrams_by_collection(self, collection_id: int):
        return self._run(lambda s: [_diagram_dict(d) for d in s.list_diagrams_by_collection(collection_id)])

    def get_diagram(self, id: int):  # pylint: disable=redefined-builtin
        return self._run(lambda s: _diagram_dict(s.get_diagram(id)))

    def create_diagram(self, collection_id: int, name: str, content: str):
        return self._run(lambda s: _diagram_dict(s.create_diagram(collection_id, name, content)))

    def update_diagram(self, id: int, name: str, content: str):  # pylint: disable=redefined-builtin
        return self._run(lambda s: _diagram_dict(s.update_diagram(id, name, content)))

    def delete_diagram(self, id: int) -> bool:  # pylint: disable=redefined-builtin
        return self._run(lambda s: s.delete_diagram(id))
