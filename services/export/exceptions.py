"""
Export-specific exceptions.

Raised by the render backend and the export state machine; routers turn
them into 500 responses carrying the message in ``details``.
"""

from typing import Optional


class ExportError(Exception):
    """Base exception for export-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[dict] = None):
        """
        Initialize export error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context (format, timeout, etc.)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "EXPORT_ERROR"
        self.context = context or {}


class ExportTimeoutError(ExportError):
    """Raised when the renderer produced no diagram within the time limit."""

    def __init__(self, timeout: float, message: Optional[str] = None):
        super().__init__(
            message or f"Timed out after {timeout:g}s waiting for the rendered diagram",
            error_code="TIMEOUT",
            context={"timeout": timeout}
        )
        self.timeout = timeout


class RenderError(ExportError):
    """Raised when mermaid rejects the diagram source or the page throws."""

    def __init__(self, message: str):
        super().__init__(
            message,
            error_code="RENDER_ERROR"
        )
