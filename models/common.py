"""
Common Pydantic Models and Enums
=================================

Shared models and enumerations used across requests and responses.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from enum import Enum


class ExportFormat(str, Enum):
    """Supported export formats"""
    SVG = "svg"
    PNG = "png"
    PDF = "pdf"

    @property
    def media_type(self) -> str:
        """HTTP media type of the exported bytes."""
        return EXPORT_MEDIA_TYPES[self]


EXPORT_MEDIA_TYPES = {
    ExportFormat.SVG: "image/svg+xml",
    ExportFormat.PNG: "image/png",
    ExportFormat.PDF: "application/pdf",
}

# Accepted extensions for uploaded Mermaid source files
MERMAID_FILE_EXTENSIONS = (".mmd", ".mermaid")
