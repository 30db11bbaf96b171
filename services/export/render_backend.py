"""
Render Backend
==============

Capability interface over the headless browser: render Mermaid source to
SVG markup, or capture a host document as SVG, PNG or PDF bytes.

The export state machine and the preview only talk to ``RenderBackend``;
tests substitute a fake.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from abc import ABC, abstractmethod
import logging
import time

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from config.settings import Config
from models.common import ExportFormat
from services.export.exceptions import ExportTimeoutError, RenderError
from services.export.export_core import (
    DIAGRAM_SELECTOR,
    RENDER_SETTLED_CHECK,
    build_host_html,
)
from services.infrastructure.utils.browser import BrowserContextManager

logger = logging.getLogger(__name__)


def _remaining_ms(deadline: float) -> float:
    """Milliseconds left before ``deadline``; at least 1, since Playwright reads 0 as no limit."""
    return max((deadline - time.monotonic()) * 1000, 1)


class RenderBackend(ABC):
    """Text in, image out."""

    @abstractmethod
    def host_html(self, content: str) -> str:
        """Build the host document for ``content``."""

    @abstractmethod
    async def capture(self, html: str, export_format: ExportFormat) -> bytes:
        """
        Load ``html`` and extract the rendered diagram.

        Raises:
            ExportTimeoutError: No diagram appeared within the time limit
            RenderError: Mermaid or the page reported an error
        """

    async def render(self, content: str) -> str:
        """Render Mermaid source to SVG markup."""
        svg_bytes = await self.capture(self.host_html(content), ExportFormat.SVG)
        return svg_bytes.decode('utf-8')


class PlaywrightRenderBackend(RenderBackend):
    """Renders with mermaid.js inside a fresh headless Chromium per call."""

    def __init__(
        self,
        script_url: str,
        theme: str = 'default',
        timeout: float = 10.0,
        viewport_width: int = 1200,
        viewport_height: int = 800,
        device_scale_factor: int = 2
    ):
        self.script_url = script_url
        self.theme = theme
        self.timeout = timeout
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.device_scale_factor = device_scale_factor

    @classmethod
    def from_config(cls, config_instance: Config) -> "PlaywrightRenderBackend":
        """Build a backend from application settings."""
        return cls(
            script_url=config_instance.MERMAID_SCRIPT_URL,
            theme=config_instance.MERMAID_THEME,
            timeout=config_instance.EXPORT_RENDER_TIMEOUT,
            viewport_width=config_instance.EXPORT_VIEWPORT_WIDTH,
            viewport_height=config_instance.EXPORT_VIEWPORT_HEIGHT,
            device_scale_factor=config_instance.EXPORT_DEVICE_SCALE,
        )

    def host_html(self, content: str) -> str:
        return build_host_html(content, self.script_url, self.theme)

    async def capture(self, html: str, export_format: ExportFormat) -> bytes:
        logger.debug(
            "[Export] Capturing %s: html=%s chars, timeout=%ss",
            export_format.value, len(html), self.timeout
        )

        browser_manager = BrowserContextManager(
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
            device_scale_factor=self.device_scale_factor
        )
        async with browser_manager as context:
            page = await context.new_page()

            page_errors = []

            def log_console_message(msg):
                logger.debug("BROWSER CONSOLE: %s: %s", msg.type, msg.text)

            def log_page_error(err):
                page_errors.append(str(err))
                logger.debug("BROWSER ERROR: %s", err)

            page.on("console", log_console_message)
            page.on("pageerror", log_page_error)

            # One budget shared by loading, rendering and locating the diagram
            deadline = time.monotonic() + self.timeout

            try:
                await page.set_content(html, timeout=_remaining_ms(deadline))
                await page.wait_for_function(RENDER_SETTLED_CHECK, timeout=_remaining_ms(deadline))
            except PlaywrightTimeoutError as e:
                if page_errors:
                    raise RenderError(page_errors[0]) from e
                raise ExportTimeoutError(self.timeout) from e

            rendering_error = await page.evaluate("window.renderError")
            if rendering_error:
                raise RenderError(str(rendering_error))
            if page_errors:
                raise RenderError(page_errors[0])

            try:
                element = await page.wait_for_selector(DIAGRAM_SELECTOR, timeout=_remaining_ms(deadline))
            except PlaywrightTimeoutError as e:
                raise ExportTimeoutError(self.timeout) from e
            if element is None:
                raise RenderError("SVG element not found. The diagram could not be rendered.")

            if export_format == ExportFormat.SVG:
                svg = await element.evaluate("el => el.outerHTML")
                data = svg.encode('utf-8')
            elif export_format == ExportFormat.PNG:
                data = await page.screenshot(full_page=True, type='png')
            else:
                data = await page.pdf(format='A4', print_background=True)

        logger.debug("[Export] Captured %s: %s bytes", export_format.value, len(data))
        return data
