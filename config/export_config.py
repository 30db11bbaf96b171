"""Rendering, export and editor configuration settings.

This module provides the mermaid renderer location, browser capture
parameters and the editor auto-save quiet period.
"""
import logging
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

DEFAULT_MERMAID_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"
VALID_MERMAID_THEMES = ('default', 'dark', 'forest', 'neutral', 'base')


class ExportConfigMixin:
    """Mixin class for export and editor configuration properties.

    This mixin expects the class to inherit from BaseConfig or provide
    _get_cached_value, _get_positive_int and _get_positive_float.
    """

    if TYPE_CHECKING:
        def _get_cached_value(self, _key: str, _default: Any = None) -> Any:
            """Type stub: method provided by BaseConfig."""
            return _default

        def _get_positive_int(self, _key: str, _default: int) -> int:
            """Type stub: method provided by BaseConfig."""
            return _default

        def _get_positive_float(self, _key: str, _default: float) -> float:
            """Type stub: method provided by BaseConfig."""
            return _default

    @property
    def MERMAID_SCRIPT_URL(self) -> str:
        """URL of the mermaid.js bundle referenced by the export host page."""
        return self._get_cached_value('MERMAID_SCRIPT_URL', DEFAULT_MERMAID_SCRIPT_URL)

    @property
    def MERMAID_THEME(self) -> str:
        """Mermaid theme used for previews and exports."""
        theme = self._get_cached_value('MERMAID_THEME', 'default').lower()
        if theme not in VALID_MERMAID_THEMES:
            logger.warning("Invalid MERMAID_THEME '%s', using default", theme)
            return 'default'
        return theme

    @property
    def EXPORT_RENDER_TIMEOUT(self) -> float:
        """Seconds to wait for the renderer to produce an <svg> root."""
        return self._get_positive_float('EXPORT_RENDER_TIMEOUT', 10.0)

    @property
    def EXPORT_VIEWPORT_WIDTH(self) -> int:
        """Browser viewport width used for captures."""
        return self._get_positive_int('EXPORT_VIEWPORT_WIDTH', 1200)

    @property
    def EXPORT_VIEWPORT_HEIGHT(self) -> int:
        """Browser viewport height used for captures."""
        return self._get_positive_int('EXPORT_VIEWPORT_HEIGHT', 800)

    @property
    def EXPORT_DEVICE_SCALE(self) -> int:
        """Device scale factor for PNG captures."""
        return self._get_positive_int('EXPORT_DEVICE_SCALE', 2)

    @property
    def AUTOSAVE_QUIET_PERIOD(self) -> float:
        """Seconds of editor inactivity before content is auto-saved."""
        return self._get_positive_float('AUTOSAVE_QUIET_PERIOD', 2.0)
