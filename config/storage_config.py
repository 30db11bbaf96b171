"""Storage configuration settings.

This module provides the locations of the SQLite database, the editor
preference file and the default export directory.
"""
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)


class StorageConfigMixin:
    """Mixin class for storage configuration properties.

    This mixin expects the class to inherit from BaseConfig or provide
    a _get_cached_value method.
    """

    if TYPE_CHECKING:
        def _get_cached_value(self, _key: str, _default: Any = None) -> Any:
            """Type stub: method provided by BaseConfig."""
            return _default

    @property
    def DATABASE_PATH(self) -> Path:
        """SQLite database file. Override with DATABASE_PATH."""
        raw = self._get_cached_value('DATABASE_PATH', '')
        if raw:
            return Path(raw).expanduser()
        return Path.cwd() / 'mermaid-ui.db'

    @property
    def DATABASE_URL(self) -> str:
        """SQLAlchemy URL derived from DATABASE_PATH."""
        return f"sqlite:///{self.DATABASE_PATH}"

    @property
    def PREFERENCES_PATH(self) -> Path:
        """JSON file holding editor preferences (auto-save toggle)."""
        raw = self._get_cached_value('PREFERENCES_PATH', '')
        if raw:
            return Path(raw).expanduser()
        return self.DATABASE_PATH.parent / 'mermaid-ui.preferences.json'

    @property
    def EXPORT_DIR(self) -> Path:
        """Directory used by the non-interactive save dialog."""
        raw = self._get_cached_value('EXPORT_DIR', '')
        if raw:
            return Path(raw).expanduser()
        return Path.cwd() / 'exports'
