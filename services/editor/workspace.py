"""
Workspace
=========

Sidebar and selection state of the application window: the collection
list, the selected collection and its diagrams, the selected diagram and
the sidebar collapse flag.

Operates on any client data layer exposing the collection/diagram
coroutines of ``clients.mermaid_ui.MermaidUIClient``. Failures are logged
and surfaced through ``alert``; the workspace state stays consistent.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, List, Optional
import logging

from services.storage.diagram_mixin import is_mermaid_filename

logger = logging.getLogger(__name__)

NEW_DIAGRAM_TEMPLATE = """graph TD
    A[Start] --> B[Process]
    B --> C[End]"""

INVALID_UPLOAD_MESSAGE = "Please upload a .mmd or .mermaid file"


def new_diagram_name(existing_count: int) -> str:
    return f"New Diagram {existing_count + 1}"


class Workspace:
    """Selection state over collections and diagrams."""

    def __init__(self, api: Any):
        self.api = api
        self.collections: List[Any] = []
        self.diagrams: List[Any] = []
        self.selected_collection: Optional[Any] = None
        self.selected_diagram: Optional[Any] = None
        self.sidebar_collapsed = False
        self.alert: Optional[str] = None

    def toggle_sidebar(self) -> bool:
        self.sidebar_collapsed = not self.sidebar_collapsed
        return self.sidebar_collapsed

    async def load(self) -> None:
        """Fetch collections; the first one is selected if nothing is yet."""
        try:
            self.collections = list(await self.api.get_collections())
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to fetch collections: %s", e)
            return
        if self.collections and self.selected_collection is None:
            await self.select_collection(self.collections[0])

    async def select_collection(self, collection: Optional[Any]) -> None:
        self.selected_collection = collection
        self.selected_diagram = None
        await self.refresh_diagrams()

    def select_diagram(self, diagram: Optional[Any]) -> None:
        self.selected_diagram = diagram

    async def refresh_diagrams(self) -> None:
        if self.selected_collection is None:
            self.diagrams = []
            return
        try:
            self.diagrams = list(
                await self.api.get_diagrams_by_collection(self.selected_collection.id)
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to fetch diagrams: %s", e)

    async def create_collection(self, name: str, description: Optional[str] = None) -> Optional[Any]:
        if not name or not name.strip():
            return None
        try:
            collection = await self.api.create_collection(name, description or None)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to create collection: %s", e)
            self.alert = "Failed to create collection"
            return None
        self.collections.append(collection)
        await self.select_collection(collection)
        return collection

    async def delete_collection(self, collection_id: int) -> bool:
        """
        Delete a collection. If it was selected, the first remaining
        collection becomes selected and the diagram selection is cleared.
        """
        try:
            success = await self.api.delete_collection(collection_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to delete collection: %s", e)
            success = False
        if not success:
            self.alert = "Failed to delete collection"
            return False

        self.collections = [c for c in self.collections if c.id != collection_id]
        if self.selected_collection is not None and self.selected_collection.id == collection_id:
            await self.select_collection(self.collections[0] if self.collections else None)
        return True

    async def create_diagram(self) -> Optional[Any]:
        """Add "New Diagram N" with the starter flowchart and select it."""
        if self.selected_collection is None:
            return None
        try:
            diagram = await self.api.create_diagram(
                self.selected_collection.id,
                new_diagram_name(len(self.diagrams)),
                NEW_DIAGRAM_TEMPLATE
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to create diagram: %s", e)
            self.alert = "Failed to create diagram"
            return None
        await self.refresh_diagrams()
        self.select_diagram(diagram)
        return diagram

    async def update_diagram(self, diagram_id: int, name: str, content: str) -> Any:
        """
        Persist a diagram and refresh it in the list and selection.

        Used as the editor's save and auto-save callback; errors propagate.
        """
        updated = await self.api.update_diagram(diagram_id, name, content)
        if self.selected_diagram is not None and self.selected_diagram.id == diagram_id:
            self.selected_diagram = updated
        self.diagrams = [updated if d.id == diagram_id else d for d in self.diagrams]
        return updated

    async def delete_diagram(self, diagram_id: int) -> bool:
        try:
            success = await self.api.delete_diagram(diagram_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Failed to delete diagram: %s", e)
            success = False
        if not success:
            self.alert = "Failed to delete diagram"
            return False

        if self.selected_diagram is not None and self.selected_diagram.id == diagram_id:
            self.selected_diagram = None
        await self.refresh_diagrams()
        return True

    async def upload(self, filename: str, data: bytes) -> Optional[Any]:
        """Upload a .mmd/.mermaid file into the selected collection."""
        if self.selected_collection is None:
            return None
        if not is_mermaid_filename(filename):
            self.alert = INVALID_UPLOAD_MESSAGE
            return None
        try:
            diagram = await self.api.upload_diagram(self.selected_collection.id, filename, data)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Workspace] Upload error: %s", e)
            self.alert = "Failed to upload file"
            return None
        await self.refresh_diagrams()
        self.select_diagram(diagram)
        return diagram
