"""
MermaidUI FastAPI Routers
=========================

This package contains all FastAPI route modules organized by functionality.

Routers:
- api/: Collections, diagrams, export and preview endpoints under /api
- core/: Health check endpoints

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from . import api
from . import core

__all__ = [
    "api",
    "core",
]
