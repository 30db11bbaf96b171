"""Diagram API Router.

API endpoints for Mermaid diagrams:
- GET /api/diagrams/collection/{collection_id} - List diagrams in a collection
- GET /api/diagrams/{id} - Get specific diagram
- POST /api/diagrams - Create diagram
- POST /api/diagrams/upload - Create diagram from a .mmd/.mermaid file
- PUT /api/diagrams/{id} - Update diagram
- DELETE /api/diagrams/{id} - Delete diagram
- POST /api/diagrams/{id}/duplicate - Duplicate diagram

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from config.database import get_db
from models.requests.requests_diagram import DiagramCreateRequest, DiagramUpdateRequest
from models.responses import DeleteResponse, DiagramResponse
from services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagrams"])


@router.get("/diagrams/collection/{collection_id}", response_model=List[DiagramResponse])
def list_diagrams_by_collection(collection_id: int, db: Session = Depends(get_db)):
    """List the diagrams of a collection, newest first."""
    return StorageService(db).list_diagrams_by_collection(collection_id)


@router.post("/diagrams/upload", response_model=DiagramResponse, status_code=201)
async def upload_diagram(
    file: Optional[UploadFile] = File(None),
    collection_id: Optional[int] = Form(None),
    db: Session = Depends(get_db),
):
    """
    Create a diagram from an uploaded Mermaid file.

    The diagram is named after the file without its extension.
    """
    data = await file.read() if file is not None else None
    filename = file.filename if file is not None else None
    return StorageService(db).upload_diagram(collection_id, filename, data)


@router.get("/diagrams/{diagram_id}", response_model=DiagramResponse)
def get_diagram(diagram_id: int, db: Session = Depends(get_db)):
    """Get a specific diagram by ID."""
    diagram = StorageService(db).get_diagram(diagram_id)
    if not diagram:
        raise HTTPException(status_code=404, detail="Diagram not found")
    return diagram


@router.post("/diagrams", response_model=DiagramResponse, status_code=201)
def create_diagram(req: DiagramCreateRequest, db: Session = Depends(get_db)):
    """
    Create a new diagram.

    Returns 400 when collection_id, name or content is missing and 404
    when the collection does not exist.
    """
    return StorageService(db).create_diagram(req.collection_id, req.name, req.content)


@router.put("/diagrams/{diagram_id}", response_model=DiagramResponse)
def update_diagram(
    diagram_id: int,
    req: DiagramUpdateRequest,
    db: Session = Depends(get_db),
):
    """Update a diagram's name and/or content."""
    diagram = StorageService(db).update_diagram(
        diagram_id, name=req.name, content=req.content
    )
    if not diagram:
        raise HTTPException(status_code=404, detail="Diagram not found")
    return diagram


@router.delete("/diagrams/{diagram_id}", response_model=DeleteResponse)
def delete_diagram(diagram_id: int, db: Session = Depends(get_db)):
    """Delete a diagram."""
    if not StorageService(db).delete_diagram(diagram_id):
        raise HTTPException(status_code=404, detail="Diagram not found")
    return DeleteResponse(success=True)


@router.post("/diagrams/{diagram_id}/duplicate", response_model=DiagramResponse, status_code=201)
def duplicate_diagram(diagram_id: int, db: Session = Depends(get_db)):
    """Copy a diagram into the same collection as "<name> (copy)"."""
    return StorageService(db).duplicate_diagram(diagram_id)
