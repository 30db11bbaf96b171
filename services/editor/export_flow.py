"""
Export Flow
===========

View-state of the export menu: unsaved-changes guard, progress status,
save dialog and file write.

    request_export(fmt)
      unsaved?  -> warning shown: cancel | export_anyway | save_and_export
      otherwise -> preparing -> generating -> complete | error
    download()  -> save dialog (cancel returns silently) -> bytes written

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from pathlib import Path
from typing import Awaitable, Callable, Optional
import logging

import aiofiles

from models.common import ExportFormat
from services.desktop.save_dialog import FileFilter, SaveDialog
from services.export.export_service import ExportStatus, STATUS_MESSAGES, export_filename

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save diagram. Export cancelled."

# exporter(diagram_id, export_format) -> exported bytes
Exporter = Callable[[int, ExportFormat], Awaitable[bytes]]


class ExportFlow:
    """Export menu state for the diagram open in the editor."""

    def __init__(
        self,
        diagram_id: int,
        diagram_name: str,
        exporter: Exporter,
        save_dialog: SaveDialog,
        has_unsaved_changes: Callable[[], bool],
        save_before_export: Callable[[], Awaitable[object]],
        on_status: Optional[Callable[[ExportStatus], None]] = None
    ):
        self.diagram_id = diagram_id
        self.diagram_name = diagram_name
        self.exporter = exporter
        self.save_dialog = save_dialog
        self.has_unsaved_changes = has_unsaved_changes
        self.save_before_export = save_before_export
        self.on_status = on_status

        self.show_unsaved_warning = False
        self.pending_format: Optional[ExportFormat] = None
        self.show_progress = False
        self.status = ExportStatus.IDLE
        self.export_format: Optional[ExportFormat] = None
        self.data: Optional[bytes] = None
        self.error_message: Optional[str] = None
        self.alert: Optional[str] = None

    @property
    def status_message(self) -> str:
        if self.status == ExportStatus.ERROR:
            return self.error_message or STATUS_MESSAGES[ExportStatus.ERROR]
        template = STATUS_MESSAGES.get(self.status, "")
        return template.format(format=self.export_format.value.upper() if self.export_format else "")

    async def request_export(self, export_format: ExportFormat) -> None:
        """Menu item chosen."""
        if self.has_unsaved_changes():
            self.pending_format = export_format
            self.show_unsaved_warning = True
            return
        await self._perform_export(export_format)

    async def save_and_export(self) -> None:
        self.show_unsaved_warning = False
        export_format = self.pending_format
        self.pending_format = None
        try:
            await self.save_before_export()
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[ExportFlow] Save before export failed: %s", e)
            self.alert = SAVE_FAILED_MESSAGE
            return
        if export_format:
            await self._perform_export(export_format)

    async def export_anyway(self) -> None:
        self.show_unsaved_warning = False
        export_format = self.pending_format
        self.pending_format = None
        if export_format:
            await self._perform_export(export_format)

    def cancel(self) -> None:
        self.show_unsaved_warning = False
        self.pending_format = None

    async def _perform_export(self, export_format: ExportFormat) -> None:
        self.show_progress = True
        self.export_format = export_format
        self.data = None
        self.error_message = None
        self._set_status(ExportStatus.PREPARING)

        self._set_status(ExportStatus.GENERATING)
        try:
            data = await self.exporter(self.diagram_id, export_format)
        except Exception as e:  # pylint: disable=broad-except
            self.error_message = str(e) or f"Failed to export as {export_format.value.upper()}"
            self._set_status(ExportStatus.ERROR)
            logger.error("[ExportFlow] Export error: %s", self.error_message)
            return

        self.data = data
        self._set_status(ExportStatus.COMPLETE)

    def _set_status(self, status: ExportStatus) -> None:
        self.status = status
        if self.on_status:
            self.on_status(status)

    async def download(self) -> Optional[Path]:
        """
        Ask where to save the completed export and write it.

        Returns the written path, or None when there is nothing to save
        or the dialog was cancelled. A cancelled dialog closes the flow.
        """
        if self.status != ExportStatus.COMPLETE or self.data is None or self.export_format is None:
            return None

        extension = self.export_format.value
        file_path = await self.save_dialog.prompt(
            export_filename(self.diagram_name, self.export_format),
            [FileFilter(name=extension.upper(), extensions=[extension])]
        )
        if not file_path:
            self.close()
            return None

        async with aiofiles.open(file_path, 'wb') as f:
            await f.write(self.data)
        logger.info("[ExportFlow] Saved %s (%s bytes)", file_path, len(self.data))

        self.close()
        return Path(file_path)

    def close(self) -> None:
        self.show_progress = False
        self.status = ExportStatus.IDLE
        self.export_format = None
        self.data = None
        self.error_message = None


async def export_source(
    diagram_name: str,
    content: str,
    save_dialog: SaveDialog
) -> Optional[Path]:
    """Save the Mermaid source as ``<name>.mmd``; None if cancelled."""
    file_path = await save_dialog.prompt(
        f"{diagram_name}.mmd",
        [FileFilter(name="Mermaid", extensions=["mmd", "mermaid"])]
    )
    if not file_path:
        return None

    async with aiofiles.open(file_path, 'w', encoding='utf-8') as f:
        await f.write(content)
    logger.info("[ExportFlow] Saved Mermaid source to %s", file_path)
    return Path(file_path)
