"""
Export API Router
=================

API endpoints for diagram export:
- /api/export/svg/{id}: Export diagram as SVG
- /api/export/png/{id}: Export diagram as PNG
- /api/export/pdf/{id}: Export diagram as PDF

Each request renders in its own headless browser context.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from config.database import get_db
from models.common import ExportFormat
from services.export import ExportError, ExportService
from services.export.render_backend import RenderBackend
from services.storage import StorageService

from .helpers import content_disposition, get_render_backend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["export"])


@router.post("/export/{export_format}/{diagram_id}")
async def export_diagram(
    export_format: ExportFormat,
    diagram_id: int,
    db: Session = Depends(get_db),
    backend: RenderBackend = Depends(get_render_backend),
):
    """
    Export a stored diagram as SVG, PNG or PDF.

    Returns the file as an attachment named "<diagram name>.<format>",
    404 when the diagram does not exist and 500 when rendering fails.
    """
    diagram = StorageService(db).get_diagram(diagram_id)
    if not diagram:
        raise HTTPException(status_code=404, detail="Diagram not found")

    format_label = export_format.value.upper()
    start_time = time.time()
    try:
        result = await ExportService(backend).export(diagram.name, diagram.content, export_format)
    except ExportError as e:
        logger.error(
            "[Export] %s export of diagram %s failed (%s): %s",
            format_label, diagram_id, e.error_code, e.message
        )
        return JSONResponse(
            status_code=500,
            content={"error": f"Failed to generate {format_label}", "details": e.message}
        )

    logger.info(
        "[Export] Diagram %s exported as %s (%d bytes, %.2fs)",
        diagram_id, format_label, len(result.data), time.time() - start_time
    )
    return Response(
        content=result.data,
        media_type=result.media_type,
        headers={'Content-Disposition': content_disposition(result.filename)}
    )
