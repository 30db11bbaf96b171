"""
API Clients Package

This package contains clients for the MermaidUI service:
- MermaidUIClient: async data layer over the HTTP API

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .mermaid_ui import (
    MermaidUIClient,
    MermaidUIError,
    ValidationFailedError,
    NotFoundError,
    ServerError,
)

__all__ = [
    'MermaidUIClient',
    'MermaidUIError',
    'ValidationFailedError',
    'NotFoundError',
    'ServerError',
]
