"""
Preview API Router
==================

Server-side rendering of editor content for the preview pane:
- /api/preview: Render Mermaid source to SVG, or report the render error

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging

from fastapi import APIRouter, Depends

from models.requests.requests_diagram import PreviewRequest
from models.responses import PreviewResponse
from services.editor.preview import render_preview
from services.export.render_backend import RenderBackend

from .helpers import get_render_backend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["preview"])


@router.post("/preview", response_model=PreviewResponse)
async def preview_diagram(
    req: PreviewRequest,
    backend: RenderBackend = Depends(get_render_backend),
):
    """
    Render Mermaid source for the preview pane.

    Empty content returns neither svg nor error. Render failures are
    reported in ``error`` with status 200.
    """
    result = await render_preview(backend, req.content)
    return PreviewResponse(svg=result.svg, error=result.error)
