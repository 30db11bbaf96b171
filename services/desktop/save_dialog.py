"""
Save Dialog Capability
======================

"Prompt for a save path given a suggested name and filters; return the
chosen path or a cancellation (None)."

``DirectorySaveDialog`` is the headless implementation: it answers every
prompt with a path inside a configured export directory.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union
import logging
import re

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass(frozen=True)
class FileFilter:
    """A named group of extensions offered by the dialog (without dots)."""
    name: str
    extensions: List[str] = field(default_factory=list)


def safe_filename(name: str) -> str:
    """Replace characters that are not allowed in file names."""
    cleaned = UNSAFE_FILENAME_CHARS.sub('_', name).strip().strip('.')
    return cleaned or 'diagram'


class SaveDialog(ABC):
    """Capability to choose where a file is saved."""

    @abstractmethod
    async def prompt(self, default_path: str, filters: Sequence[FileFilter] = ()) -> Optional[Path]:
        """Return the chosen path, or None if the user cancelled."""


class DirectorySaveDialog(SaveDialog):
    """Saves into a fixed directory without asking; never cancels."""

    def __init__(self, directory: Union[str, Path], overwrite: bool = False):
        self.directory = Path(directory)
        self.overwrite = overwrite

    @classmethod
    def from_config(cls, config_instance) -> "DirectorySaveDialog":
        """Save into EXPORT_DIR."""
        return cls(config_instance.EXPORT_DIR)

    async def prompt(self, default_path: str, filters: Sequence[FileFilter] = ()) -> Optional[Path]:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / safe_filename(Path(default_path).name)

        allowed = {ext.lower() for file_filter in filters for ext in file_filter.extensions}
        if allowed and target.suffix.lstrip('.').lower() not in allowed:
            target = target.with_name(f"{target.name}.{sorted(allowed)[0]}")

        if not self.overwrite:
            stem, suffix = target.stem, target.suffix
            counter = 1
            while target.exists():
                target = target.with_name(f"{stem} ({counter}){suffix}")
                counter += 1

        logger.debug("[SaveDialog] Chose %s", target)
        return target
