"""
Browser Manager for MermaidUI

Simple browser manager that creates a fresh browser instance for each export.
This approach ensures reliability and isolation between exports.

Features:
- Fresh browser instance per export (no pooling, no shared state)
- Unconditional cleanup of browser resources
- Viewport and device scale configurable per capture

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging
import os
import platform
import sys

from playwright.async_api import async_playwright
import playwright


logger = logging.getLogger(__name__)

BROWSER_LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--disable-background-networking',
    '--disable-background-timer-throttling',
    '--disable-renderer-backgrounding',
]


async def log_browser_diagnostics():
    """
    Log browser diagnostic information once at startup.
    This should be called from the application lifespan function.
    A missing Chromium is reported but never fatal; exports fail individually.
    """
    try:
        logger.debug("[Browser] Python executable: %s", sys.executable)
        logger.debug("[Browser] Python version: %s", sys.version.split('\n', maxsplit=1)[0])
        logger.debug("[Browser] Playwright module path: %s", playwright.__file__)

        playwright_instance = await async_playwright().start()
        try:
            chromium_path = playwright_instance.chromium.executable_path
            logger.debug("[Browser] Chromium executable path: %s", chromium_path)
            if chromium_path and os.path.exists(chromium_path):
                logger.debug("[Browser] Chromium executable exists: YES")
            else:
                logger.warning(
                    "[Browser] Chromium executable exists: NO "
                    "(run: python -m playwright install chromium)"
                )
        finally:
            await playwright_instance.stop()
    except Exception as e:
        logger.warning("[Browser] Diagnostic check failed: %s", e)


class BrowserContextManager:
    """Context manager that creates a fresh browser for each export"""

    def __init__(
        self,
        viewport_width: int = 1200,
        viewport_height: int = 800,
        device_scale_factor: int = 2
    ):
        self.viewport = {'width': viewport_width, 'height': viewport_height}
        self.device_scale_factor = device_scale_factor
        self.context = None
        self.browser = None
        self.playwright = None

    async def __aenter__(self):
        """Create fresh browser instance for this export"""
        logger.debug("Creating fresh browser instance for export")

        try:
            self.playwright = await async_playwright().start()
        except NotImplementedError as e:
            # Raised when the running event loop cannot spawn subprocesses
            logger.error("[Browser] NotImplementedError starting Playwright: %s", e)
            logger.error("[Browser] Platform: %s", platform.system())
            raise RuntimeError(
                "Playwright could not start a browser process on this event loop. "
                "Please run: python -m playwright install chromium"
            ) from e

        try:
            self.browser = await self.playwright.chromium.launch(
                headless=True,
                args=BROWSER_LAUNCH_ARGS
            )
            self.context = await self.browser.new_context(
                viewport=self.viewport,
                device_scale_factor=self.device_scale_factor,
                user_agent='MermaidUI/1.0 (Exporter)'
            )
        except Exception:
            await self._cleanup()
            raise

        logger.debug("Fresh browser context created - id: %s", id(self.context))
        return self.context

    async def __aexit__(self, exc_type, _exc_val, _exc_tb):
        """Clean up browser resources"""
        await self._cleanup()

    async def _cleanup(self):
        """Close context, browser and driver; each step runs even if an earlier one fails."""
        try:
            if self.context:
                await self.context.close()
        except Exception as e:
            logger.warning("[Browser] Error closing context: %s", e)
        finally:
            self.context = None

        try:
            if self.browser:
                await self.browser.close()
        except Exception as e:
            logger.warning("[Browser] Error closing browser: %s", e)
        finally:
            self.browser = None

        try:
            if self.playwright:
                await self.playwright.stop()
        except Exception as e:
            logger.warning("[Browser] Error stopping Playwright: %s", e)
        finally:
            self.playwright = None

        logger.debug("Fresh browser instance cleaned up")
