"""
Desktop Module

Command surface and save-dialog capability for a desktop shell.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .commands import CommandError, DesktopCommands
from .save_dialog import DirectorySaveDialog, FileFilter, SaveDialog

__all__ = [
    "CommandError",
    "DesktopCommands",
    "DirectorySaveDialog",
    "FileFilter",
    "SaveDialog",
]
