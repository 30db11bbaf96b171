"""Diagram Storage and Preview Request Models.

Pydantic models for validating diagram storage and preview API requests.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Optional

from pydantic import BaseModel, Field


class DiagramCreateRequest(BaseModel):
    """Request model for creating a new diagram"""
    collection_id: Optional[int] = Field(None, description="Owning collection id")
    name: Optional[str] = Field(None, description="Diagram name")
    content: Optional[str] = Field(None, description="Mermaid source text")

    class Config:
        """Configuration for DiagramCreateRequest model."""

        json_schema_extra = {
            "example": {
                "collection_id": 1,
                "name": "Checkout flow",
                "content": "graph TD\n    A[Start] --> B[Process]\n    B --> C[End]"
            }
        }


class DiagramUpdateRequest(BaseModel):
    """Request model for updating an existing diagram"""
    name: Optional[str] = Field(None, description="New diagram name")
    content: Optional[str] = Field(None, description="Updated Mermaid source text")

    class Config:
        """Configuration for DiagramUpdateRequest model."""

        json_schema_extra = {
            "example": {
                "name": "Checkout flow v2",
                "content": "graph LR\n    A --> B"
            }
        }


class PreviewRequest(BaseModel):
    """Request model for server-side preview rendering"""
    content: str = Field("", max_length=500000, description="Mermaid source text")
