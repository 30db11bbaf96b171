"""
API Router Module
=================

Main API router that combines all sub-routers for the application:
- Collections
- Diagrams (including upload and duplicate)
- Export (SVG, PNG, PDF)
- Preview
"""
from fastapi import APIRouter

from . import collections, diagrams, export, preview

# Create main router with prefix and tags
router = APIRouter(prefix="/api", tags=["api"])

# Include all sub-routers
router.include_router(collections.router)
router.include_router(diagrams.router)
router.include_router(export.router)
router.include_router(preview.router)

__all__ = ["router"]
