"""
Export Service
==============

One-shot export state machine: ``idle -> preparing -> generating ->
complete | error``. Each job owns its own browser context through the
render backend and shares no mutable state with other jobs.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import logging

from models.common import ExportFormat
from services.export.exceptions import ExportError
from services.export.render_backend import RenderBackend

logger = logging.getLogger(__name__)


class ExportStatus(str, Enum):
    """Lifecycle of a single export"""
    IDLE = "idle"
    PREPARING = "preparing"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


ALLOWED_TRANSITIONS = {
    ExportStatus.IDLE: {ExportStatus.PREPARING},
    ExportStatus.PREPARING: {ExportStatus.GENERATING, ExportStatus.ERROR},
    ExportStatus.GENERATING: {ExportStatus.COMPLETE, ExportStatus.ERROR},
    ExportStatus.COMPLETE: set(),
    ExportStatus.ERROR: set(),
}

STATUS_MESSAGES = {
    ExportStatus.PREPARING: "Preparing diagram...",
    ExportStatus.GENERATING: "Generating {format}...",
    ExportStatus.COMPLETE: "Export complete!",
    ExportStatus.ERROR: "Export failed",
}


@dataclass(frozen=True)
class ExportResult:
    """Bytes produced by a completed export."""
    data: bytes
    media_type: str
    filename: str
    export_format: ExportFormat


def export_filename(diagram_name: str, export_format: ExportFormat) -> str:
    """Suggested file name for an export: ``<diagram name>.<format>``."""
    return f"{diagram_name}.{export_format.value}"


class ExportJob:
    """
    A single export invocation.

    Status listeners are called synchronously on every transition with
    the new status and the job itself.
    """

    def __init__(
        self,
        backend: RenderBackend,
        diagram_name: str,
        content: str,
        export_format: ExportFormat
    ):
        self.backend = backend
        self.diagram_name = diagram_name
        self.content = content
        self.export_format = export_format
        self.status = ExportStatus.IDLE
        self.error: Optional[str] = None
        self.error_code: Optional[str] = None
        self.result: Optional[ExportResult] = None
        self._listeners: List[Callable[[ExportStatus, "ExportJob"], None]] = []

    def add_listener(self, listener: Callable[[ExportStatus, "ExportJob"], None]) -> None:
        self._listeners.append(listener)

    @property
    def message(self) -> str:
        """Human-readable progress message for the current status."""
        if self.status == ExportStatus.ERROR and self.error:
            return self.error
        template = STATUS_MESSAGES.get(self.status, "")
        return template.format(format=self.export_format.value.upper())

    def _transition(self, status: ExportStatus) -> None:
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise RuntimeError(
                f"Invalid export transition {self.status.value} -> {status.value}"
            )
        self.status = status
        logger.debug("[Export] %s '%s' -> %s", self.export_format.value, self.diagram_name, status.value)
        for listener in self._listeners:
            listener(status, self)

    async def run(self) -> ExportResult:
        """
        Drive the job to ``complete`` or ``error``.

        Raises:
            ExportError: The job ended in ``error``; the job keeps the message
        """
        self._transition(ExportStatus.PREPARING)
        try:
            html = self.backend.host_html(self.content)
            self._transition(ExportStatus.GENERATING)
            data = await self.backend.capture(html, self.export_format)
        except ExportError as e:
            self._fail(e.message, e.error_code)
            raise
        except Exception as e:
            self._fail(str(e) or type(e).__name__, "EXPORT_ERROR")
            raise ExportError(self.error) from e

        self.result = ExportResult(
            data=data,
            media_type=self.export_format.media_type,
            filename=export_filename(self.diagram_name, self.export_format),
            export_format=self.export_format
        )
        self._transition(ExportStatus.COMPLETE)
        logger.info(
            "[Export] %s generated for '%s': %s bytes",
            self.export_format.value.upper(), self.diagram_name, len(data)
        )
        return self.result

    def _fail(self, message: str, error_code: str) -> None:
        self.error = message
        self.error_code = error_code
        logger.error(
            "[Export] %s export of '%s' failed: %s",
            self.export_format.value.upper(), self.diagram_name, message
        )
        self._transition(ExportStatus.ERROR)


class ExportService:
    """Creates and runs export jobs against a render backend."""

    def __init__(self, backend: RenderBackend):
        self.backend = backend

    def create_job(self, diagram_name: str, content: str, export_format: ExportFormat) -> ExportJob:
        return ExportJob(self.backend, diagram_name, content, export_format)

    async def export(self, diagram_name: str, content: str, export_format: ExportFormat) -> ExportResult:
        """Run a fresh job to completion."""
        job = self.create_job(diagram_name, content, export_format)
        return await job.run()
