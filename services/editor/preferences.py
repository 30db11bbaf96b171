"""
Editor Preferences
==================

Explicit preference values for the editor, persisted as a small JSON
file instead of ambient global state.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Union
import json
import logging

logger = logging.getLogger(__name__)

AUTOSAVE_PREFERENCE_KEY = "mermaid-ui-auto-save"


@dataclass(frozen=True)
class AutosavePreference:
    """Whether content edits are saved automatically. Off by default."""
    enabled: bool = False


class PreferenceStore:
    """Reads and writes editor preferences in a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def from_config(cls, config_instance) -> "PreferenceStore":
        return cls(config_instance.PREFERENCES_PATH)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning("[Preferences] Could not read %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load_autosave(self) -> AutosavePreference:
        """Stored auto-save preference, or the default when unset or unreadable."""
        value = self._read().get(AUTOSAVE_PREFERENCE_KEY)
        return AutosavePreference(enabled=value is True or value == "true")

    def save_autosave(self, preference: AutosavePreference) -> None:
        data = self._read()
        data[AUTOSAVE_PREFERENCE_KEY] = preference.enabled
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding='utf-8')
        logger.debug("[Preferences] Auto-save %s", "enabled" if preference.enabled else "disabled")
