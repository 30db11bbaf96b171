"""
Response Models
===============

Pydantic models for API response validation and documentation.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response"""
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Underlying failure detail")

    class Config:
        """Configuration for ErrorResponse JSON schema"""
        json_schema_extra = {
            "example": {
                "error": "Failed to generate PNG",
                "details": "Timed out after 10.0s waiting for the rendered diagram"
            }
        }


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")

    class Config:
        """Configuration for HealthResponse JSON schema"""
        json_schema_extra = {
            "example": {
                "status": "ok",
                "version": "1.0.0"
            }
        }


class DeleteResponse(BaseModel):
    """Result of a successful delete"""
    success: bool = Field(True, description="Whether the record was deleted")


# ============================================================================
# STORAGE RESPONSE MODELS
# ============================================================================

class CollectionResponse(BaseModel):
    """Response model for a single collection"""
    id: int = Field(..., description="Collection id")
    name: str = Field(..., description="Collection name")
    description: Optional[str] = Field(None, description="Optional description")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Configuration for CollectionResponse JSON schema"""
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Default Collection",
                "description": "Your default collection of diagrams",
                "created_at": "2025-01-07T12:00:00",
                "updated_at": "2025-01-07T12:00:00"
            }
        }


class DiagramResponse(BaseModel):
    """Response model for a single diagram"""
    id: int = Field(..., description="Diagram id")
    collection_id: int = Field(..., description="Owning collection id")
    name: str = Field(..., description="Diagram name")
    content: str = Field(..., description="Mermaid source text")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Configuration for DiagramResponse JSON schema"""
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 7,
                "collection_id": 1,
                "name": "Checkout flow",
                "content": "graph TD\n    A --> B",
                "created_at": "2025-01-07T12:00:00",
                "updated_at": "2025-01-07T12:00:00"
            }
        }


class PreviewResponse(BaseModel):
    """Rendered preview, or the renderer's error message"""
    svg: Optional[str] = Field(None, description="Rendered SVG markup")
    error: Optional[str] = Field(None, description="Render error message")
