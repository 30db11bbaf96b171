"""Collection Storage Request Models.

Pydantic models for collection create/update API requests. Required-field
checks happen in the storage service so that a missing name produces the
same error body regardless of the caller.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Optional

from pydantic import BaseModel, Field


class CollectionCreateRequest(BaseModel):
    """Request model for creating a new collection"""
    name: Optional[str] = Field(None, description="Collection name")
    description: Optional[str] = Field(None, description="Optional description")

    class Config:
        """Configuration for CollectionCreateRequest model."""

        json_schema_extra = {
            "example": {
                "name": "Architecture",
                "description": "System diagrams"
            }
        }


class CollectionUpdateRequest(BaseModel):
    """Request model for updating an existing collection"""
    name: Optional[str] = Field(None, description="New collection name")
    description: Optional[str] = Field(None, description="New description")

    class Config:
        """Configuration for CollectionUpdateRequest model."""

        json_schema_extra = {
            "example": {
                "name": "Architecture (2025)",
                "description": "Updated system diagrams"
            }
        }
