"""
Export Service Module

Mermaid to SVG/PNG/PDF export through a headless browser.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .exceptions import ExportError, ExportTimeoutError, RenderError
from .export_service import (
    ExportJob,
    ExportResult,
    ExportService,
    ExportStatus,
    export_filename,
)
from .render_backend import RenderBackend, PlaywrightRenderBackend

__all__ = [
    "ExportError",
    "ExportTimeoutError",
    "RenderError",
    "ExportJob",
    "ExportResult",
    "ExportService",
    "ExportStatus",
    "export_filename",
    "RenderBackend",
    "PlaywrightRenderBackend",
]
