"""
Editor Module

Headless view-state of the diagram editor: edit session and auto-save,
pane layout, zoom, preview, export flow and workspace selection.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .autosave import AutosaveCoordinator
from .edit_session import EditSession
from .export_flow import ExportFlow, export_source
from .pane_layout import PaneVisibility, SplitLayout, toggle_left, toggle_right
from .preferences import AutosavePreference, PreferenceStore
from .preview import PreviewKind, PreviewResult, render_preview
from .workspace import Workspace
from .zoom import ZoomState

__all__ = [
    "AutosaveCoordinator",
    "EditSession",
    "ExportFlow",
    "export_source",
    "PaneVisibility",
    "SplitLayout",
    "toggle_left",
    "toggle_right",
    "AutosavePreference",
    "PreferenceStore",
    "PreviewKind",
    "PreviewResult",
    "render_preview",
    "Workspace",
    "ZoomState",
]
