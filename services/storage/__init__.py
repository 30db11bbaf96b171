"""
Storage Service Module

Persistence gateway for collections and diagrams.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .storage_service import StorageService
from .exceptions import (
    StorageError,
    StorageValidationError,
    CollectionNotFoundError,
    DiagramNotFoundError,
    StorageInternalError,
)

__all__ = [
    "StorageService",
    "StorageError",
    "StorageValidationError",
    "CollectionNotFoundError",
    "DiagramNotFoundError",
    "StorageInternalError",
]
