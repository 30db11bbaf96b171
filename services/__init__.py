"""Services package for MermaidUI application.

This package contains the service modules:
- Storage (collections and diagrams persistence)
- Export (Mermaid to SVG/PNG/PDF through a headless browser)
- Editor (edit session, auto-save, layout, preview, export flow, workspace)
- Desktop (command surface and save dialog)
- Infrastructure (HTTP handlers, lifecycle, logging, browser)

Import directly from subpackages:
    from services.storage import StorageService
    from services.export import ExportService
"""

__all__ = []
