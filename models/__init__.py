"""
MermaidUI Pydantic Models
=========================

Request and response models for FastAPI type safety and validation.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .requests import (
    CollectionCreateRequest,
    CollectionUpdateRequest,
    DiagramCreateRequest,
    DiagramUpdateRequest,
    PreviewRequest,
)

from .responses import (
    ErrorResponse,
    HealthResponse,
    DeleteResponse,
    CollectionResponse,
    DiagramResponse,
    PreviewResponse,
)

from .common import ExportFormat, MERMAID_FILE_EXTENSIONS

from .domain import (
    Base,
    Collection,
    Diagram,
)

__all__ = [
    # Requests
    'CollectionCreateRequest',
    'CollectionUpdateRequest',
    'DiagramCreateRequest',
    'DiagramUpdateRequest',
    'PreviewRequest',
    # Responses
    'ErrorResponse',
    'HealthResponse',
    'DeleteResponse',
    'CollectionResponse',
    'DiagramResponse',
    'PreviewResponse',
    # Common
    'ExportFormat',
    'MERMAID_FILE_EXTENSIONS',
    # Domain
    'Base',
    'Collection',
    'Diagram',
]
