"""
Autosave Coordinator
====================

Debounced auto-save of editor content on the asyncio event loop.

Content edits restart a quiet-period timer; when it expires the content
is persisted under the last-persisted name (name edits always need a
manual save). The timer is the only cancellable scheduled operation:
it is cancelled on close, on selection change and when auto-save is
turned off. A save that already started is never cancelled.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from typing import Any, Awaitable, Callable, Optional
import asyncio
import logging

from services.editor.edit_session import EditSession
from services.editor.preferences import AutosavePreference

logger = logging.getLogger(__name__)

# persist(diagram_id, name, content) -> updated diagram record
PersistCallback = Callable[[int, str, str], Awaitable[Any]]

DEFAULT_QUIET_PERIOD = 2.0


class AutosaveCoordinator:
    """Owns an EditSession and keeps it in step with the store."""

    def __init__(
        self,
        session: EditSession,
        persist: PersistCallback,
        preference: AutosavePreference = AutosavePreference(),
        quiet_period: float = DEFAULT_QUIET_PERIOD
    ):
        self.session = session
        self.persist = persist
        self.preference = preference
        self.quiet_period = quiet_period
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None

    @classmethod
    def from_config(
        cls,
        config_instance,
        session: EditSession,
        persist: PersistCallback,
        preference: AutosavePreference = AutosavePreference()
    ) -> "AutosaveCoordinator":
        """Coordinator using AUTOSAVE_QUIET_PERIOD."""
        return cls(session, persist, preference, quiet_period=config_instance.AUTOSAVE_QUIET_PERIOD)

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def has_unsaved_changes(self) -> bool:
        return self.session.dirty

    def content_changed(self, content: str) -> None:
        """Editor content edit; restarts the quiet period."""
        self.session.edit_content(content)
        self._schedule()

    def name_changed(self, name: str) -> None:
        """Editor name edit; never triggers auto-save."""
        self.session.edit_name(name)

    def set_preference(self, preference: AutosavePreference) -> None:
        self.preference = preference
        if preference.enabled:
            self._schedule()
        else:
            self.cancel()

    async def save(self) -> Any:
        """
        Manual save of name and content together.

        Raises whatever the persist callback raises; flags stay set on failure.
        """
        self.cancel()
        # An auto-save already writing must land before this one
        if self._in_flight is not None and not self._in_flight.done():
            await asyncio.gather(self._in_flight, return_exceptions=True)
        name, content = self.session.name, self.session.content
        updated = await self.persist(self.session.diagram_id, name, content)
        self.session.mark_saved(name, content)
        logger.debug("[Autosave] Diagram %s saved manually", self.session.diagram_id)
        return updated

    def select(self, diagram: Any) -> None:
        """Switch to another diagram: drop the timer and resync both flags."""
        self.cancel()
        self.session.reset(diagram)

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def close(self) -> None:
        self.cancel()

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no auto-save is running."""
        while self.timer_pending or (self._in_flight is not None and not self._in_flight.done()):
            pending = [task for task in (self._timer, self._in_flight) if task is not None]
            await asyncio.gather(*pending, return_exceptions=True)

    def _schedule(self) -> None:
        self.cancel()
        if not self.session.needs_autosave(self.preference.enabled):
            return
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_save())

    async def _wait_then_save(self) -> None:
        await asyncio.sleep(self.quiet_period)
        # Past the quiet period the save is detached from the timer
        self._timer = None
        self._in_flight = asyncio.current_task()
        try:
            await self._autosave()
        finally:
            self._in_flight = None

    async def _autosave(self) -> None:
        session = self.session
        if not session.needs_autosave(self.preference.enabled):
            return

        diagram_id = session.diagram_id
        content = session.content
        try:
            await self.persist(diagram_id, session.persisted_name, content)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("[Autosave] Auto-save of diagram %s failed: %s", diagram_id, e)
            return

        if session.diagram_id != diagram_id:
            return
        session.mark_autosaved(content)
        logger.debug("[Autosave] Diagram %s content auto-saved", diagram_id)
