"""Collection API Router.

API endpoints for diagram collections:
- GET /api/collections - List collections, newest first
- GET /api/collections/{id} - Get specific collection
- POST /api/collections - Create collection
- PUT /api/collections/{id} - Update collection
- DELETE /api/collections/{id} - Delete collection and its diagrams

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config.database import get_db
from models.requests.requests_collection import CollectionCreateRequest, CollectionUpdateRequest
from models.responses import CollectionResponse, DeleteResponse
from services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["collections"])


@router.get("/collections", response_model=List[CollectionResponse])
def list_collections(db: Session = Depends(get_db)):
    """List all collections, newest first."""
    return StorageService(db).list_collections()


@router.get("/collections/{collection_id}", response_model=CollectionResponse)
def get_collection(collection_id: int, db: Session = Depends(get_db)):
    """Get a specific collection by ID."""
    collection = StorageService(db).get_collection(collection_id)
    if not collection:
        raise HTTPException(status_code=404, detail="Collection not found")
    return collection


@router.post("/collections", response_model=CollectionResponse, status_code=201)
def create_collection(req: CollectionCreateRequest, db: Session = Depends(get_db)):
    """
    Create a new collection.

    Returns 400 when the name is missing or blank.
    """
    return StorageService(db).create_collection(req.name, req.description)


@router.put("/collections/{collection_id}", response_model=CollectionResponse)
def update_collection(
    collection_id: int,
    req: CollectionUpdateRequest,
    db: Session = Depends(get_db),
):
    """Update a collection's name and description."""
    collection = StorageService(db).update_collection(
        collection_id, name=req.name, description=req.description
    )
    if not collection:
        raise HTTPException(status_code=404, detail="Collection not found")
    return collection


@router.delete("/collections/{collection_id}", response_model=DeleteResponse)
def delete_collection(collection_id: int, db: Session = Depends(get_db)):
    """Delete a collection. Its diagrams are removed with it."""
    if not StorageService(db).delete_collection(collection_id):
        raise HTTPException(status_code=404, detail="Collection not found")
    return DeleteResponse(success=True)
