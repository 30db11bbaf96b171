"""
Diagram Preview
===============

Turns editor content into what the preview pane shows: a placeholder
for empty content, the rendered SVG scaled by the zoom level, or an
inline error block. Render failures are never fatal.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from services.editor.zoom import DEFAULT_ZOOM
from services.export.exceptions import ExportError
from services.export.render_backend import RenderBackend

logger = logging.getLogger(__name__)

EMPTY_PREVIEW_MESSAGE = "Enter Mermaid diagram code in the editor to see the preview"
RENDER_ERROR_TITLE = "Error rendering diagram"


class PreviewKind(str, Enum):
    EMPTY = "empty"
    DIAGRAM = "diagram"
    ERROR = "error"


@dataclass(frozen=True)
class PreviewResult:
    kind: PreviewKind
    svg: Optional[str] = None
    error: Optional[str] = None
    zoom: float = DEFAULT_ZOOM

    @property
    def message(self) -> Optional[str]:
        if self.kind == PreviewKind.EMPTY:
            return EMPTY_PREVIEW_MESSAGE
        if self.kind == PreviewKind.ERROR:
            return RENDER_ERROR_TITLE
        return None

    @property
    def transform(self) -> str:
        """CSS transform applied to the SVG root."""
        return f"scale({self.zoom:g})"


async def render_preview(
    backend: RenderBackend,
    content: str,
    zoom: float = DEFAULT_ZOOM
) -> PreviewResult:
    """Render ``content`` for the preview pane."""
    if not content.strip():
        return PreviewResult(kind=PreviewKind.EMPTY, zoom=zoom)

    try:
        svg = await backend.render(content)
    except ExportError as e:
        logger.debug("[Preview] Render failed: %s", e.message)
        return PreviewResult(kind=PreviewKind.ERROR, error=e.message, zoom=zoom)
    except Exception as e:  # pylint: disable=broad-except
        message = str(e) or type(e).__name__
        logger.error("[Preview] Renderer unavailable: %s", message)
        return PreviewResult(kind=PreviewKind.ERROR, error=message, zoom=zoom)

    return PreviewResult(kind=PreviewKind.DIAGRAM, svg=svg, zoom=zoom)
