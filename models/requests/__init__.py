"""
Request Models

Pydantic request models for API endpoints.
"""

from .requests_collection import (
    CollectionCreateRequest,
    CollectionUpdateRequest,
)
from .requests_diagram import (
    DiagramCreateRequest,
    DiagramUpdateRequest,
    PreviewRequest,
)

__all__ = [
    "CollectionCreateRequest",
    "CollectionUpdateRequest",
    "DiagramCreateRequest",
    "DiagramUpdateRequest",
    "PreviewRequest",
]
