"""
Export Service Tests
====================

Unit tests for the export pipeline including:
- Status transitions of a single export job
- Timeout and render failures
- Host document generation
- Playwright capture with a mocked browser

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, Mock, patch

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from models.common import ExportFormat
from services.export import (
    ExportError,
    ExportJob,
    ExportService,
    ExportStatus,
    ExportTimeoutError,
    PlaywrightRenderBackend,
    RenderError,
    export_filename,
)
from services.export.export_core import build_host_html
from services.infrastructure.utils.browser import BrowserContextManager


def _record_statuses(job):
    statuses = []
    job.add_listener(lambda status, _job: statuses.append(status))
    return statuses


class TestExportJob:
    """State machine of one export."""

    @pytest.mark.asyncio
    async def test_successful_export_walks_all_states(self, render_backend):
        job = ExportJob(render_backend, "Flow", "graph TD", ExportFormat.PNG)
        statuses = _record_statuses(job)

        result = await job.run()

        assert statuses == [ExportStatus.PREPARING, ExportStatus.GENERATING, ExportStatus.COMPLETE]
        assert job.status == ExportStatus.COMPLETE
        assert job.message == "Export complete!"
        assert result.media_type == "image/png"
        assert result.filename == "Flow.png"
        assert result.data.startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_generating_message_names_format(self, render_backend):
        job = ExportJob(render_backend, "Flow", "graph TD", ExportFormat.PDF)
        messages = []
        job.add_listener(lambda _status, j: messages.append(j.message))

        await job.run()

        assert messages[:2] == ["Preparing diagram...", "Generating PDF..."]

    @pytest.mark.asyncio
    async def test_timeout_ends_in_error(self, fake_backend_class):
        backend = fake_backend_class(error=ExportTimeoutError(10.0))
        job = ExportJob(backend, "Flow", "graph TD", ExportFormat.SVG)
        statuses = _record_statuses(job)

        with pytest.raises(ExportTimeoutError):
            await job.run()

        assert statuses[-1] == ExportStatus.ERROR
        assert ExportStatus.COMPLETE not in statuses
        assert job.error_code == "TIMEOUT"
        assert "Timed out after 10s" in job.message
        assert job.result is None

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self, fake_backend_class):
        backend = fake_backend_class(error=OSError("browser crashed"))
        job = ExportJob(backend, "Flow", "graph TD", ExportFormat.PNG)

        with pytest.raises(ExportError) as exc_info:
            await job.run()

        assert exc_info.value.message == "browser crashed"
        assert job.status == ExportStatus.ERROR
        assert job.error_code == "EXPORT_ERROR"

    @pytest.mark.asyncio
    async def test_job_cannot_run_twice(self, render_backend):
        job = ExportJob(render_backend, "Flow", "graph TD", ExportFormat.SVG)
        await job.run()

        with pytest.raises(RuntimeError):
            await job.run()

    @pytest.mark.asyncio
    async def test_service_runs_fresh_jobs(self, render_backend):
        service = ExportService(render_backend)

        first = await service.export("A", "graph TD", ExportFormat.SVG)
        second = await service.export("B", "graph LR", ExportFormat.SVG)

        assert first.filename == "A.svg"
        assert second.filename == "B.svg"
        assert len(render_backend.captures) == 2

    def test_export_filename(self):
        assert export_filename("My Flow", ExportFormat.PDF) == "My Flow.pdf"


class TestHostHtml:
    """Host document generation."""

    def test_content_is_escaped(self):
        page = build_host_html('graph TD\n    A["<b>x</b>"] --> B', "https://cdn.example/mermaid.js")

        assert '<pre class="mermaid">graph TD\n    A[&quot;&lt;b&gt;x&lt;/b&gt;&quot;] --&gt; B</pre>' in page
        assert '<script src="https://cdn.example/mermaid.js"></script>' in page

    def test_theme_and_security_level(self):
        page = build_host_html("graph TD", "https://cdn.example/mermaid.js", theme="dark")

        assert '"theme": "dark"' in page
        assert '"securityLevel": "strict"' in page
        assert "window.renderError = null" in page


def _mock_browser(page):
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=context)
    manager.__aexit__ = AsyncMock(return_value=False)
    return manager


def _mock_page(render_error=None, svg="<svg id=\"d\"></svg>"):
    page = MagicMock()
    page.set_content = AsyncMock()
    page.wait_for_function = AsyncMock()
    page.evaluate = AsyncMock(return_value=render_error)
    element = MagicMock()
    element.evaluate = AsyncMock(return_value=svg)
    page.wait_for_selector = AsyncMock(return_value=element)
    page.screenshot = AsyncMock(return_value=b"\x89PNG")
    page.pdf = AsyncMock(return_value=b"%PDF")
    return page


class TestPlaywrightRenderBackend:
    """Capture logic with the browser mocked out."""

    @pytest.fixture
    def backend(self):
        return PlaywrightRenderBackend("https://cdn.example/mermaid.js", timeout=1.5)

    @pytest.mark.asyncio
    async def test_svg_capture_returns_outer_html(self, backend):
        page = _mock_page()
        with patch("services.export.render_backend.BrowserContextManager", return_value=_mock_browser(page)):
            data = await backend.capture("<html></html>", ExportFormat.SVG)

        assert data == b'<svg id="d"></svg>'
        page.wait_for_function.assert_awaited_once()
        assert 0 < page.wait_for_function.await_args.kwargs["timeout"] <= 1500

    @pytest.mark.asyncio
    async def test_png_and_pdf_capture(self, backend):
        page = _mock_page()
        with patch("services.export.render_backend.BrowserContextManager", return_value=_mock_browser(page)):
            png = await backend.capture("<html></html>", ExportFormat.PNG)
            pdf = await backend.capture("<html></html>", ExportFormat.PDF)

        assert png == b"\x89PNG"
        assert pdf == b"%PDF"
        page.screenshot.assert_awaited_with(full_page=True, type='png')
        page.pdf.assert_awaited_with(format='A4', print_background=True)

    @pytest.mark.asyncio
    async def test_render_timeout(self, backend):
        page = _mock_page()
        page.wait_for_function = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 1500ms exceeded"))
        manager = _mock_browser(page)
        with patch("services.export.render_backend.BrowserContextManager", return_value=manager):
            with pytest.raises(ExportTimeoutError) as exc_info:
                await backend.capture("<html></html>", ExportFormat.PNG)

        assert exc_info.value.timeout == 1.5
        page.screenshot.assert_not_awaited()
        manager.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_mermaid_error_becomes_render_error(self, backend):
        page = _mock_page(render_error="Parse error on line 2")
        manager = _mock_browser(page)
        with patch("services.export.render_backend.BrowserContextManager", return_value=manager):
            with pytest.raises(RenderError) as exc_info:
                await backend.capture("<html></html>", ExportFormat.SVG)

        assert exc_info.value.message == "Parse error on line 2"
        manager.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_steps_share_one_time_budget(self, backend):
        clock = [100.0]

        async def slow_load(*_args, **_kwargs):
            clock[0] += 1.0

        page = _mock_page()
        page.set_content = AsyncMock(side_effect=slow_load)
        time_mock = Mock(monotonic=lambda: clock[0])
        with patch("services.export.render_backend.BrowserContextManager", return_value=_mock_browser(page)), \
                patch("services.export.render_backend.time", time_mock):
            await backend.capture("<html></html>", ExportFormat.SVG)

        assert page.set_content.await_args.kwargs["timeout"] == 1500
        assert page.wait_for_function.await_args.kwargs["timeout"] == 500
        assert page.wait_for_selector.await_args.kwargs["timeout"] == 500

    @pytest.mark.asyncio
    async def test_exhausted_budget_never_disables_timeout(self, backend):
        clock = [100.0]

        async def stalled_load(*_args, **_kwargs):
            clock[0] += 5.0

        page = _mock_page()
        page.set_content = AsyncMock(side_effect=stalled_load)
        time_mock = Mock(monotonic=lambda: clock[0])
        with patch("services.export.render_backend.BrowserContextManager", return_value=_mock_browser(page)), \
                patch("services.export.render_backend.time", time_mock):
            await backend.capture("<html></html>", ExportFormat.SVG)

        assert page.wait_for_function.await_args.kwargs["timeout"] == 1

    @pytest.mark.asyncio
    async def test_render_returns_svg_text(self, backend):
        page = _mock_page(svg="<svg>ok</svg>")
        with patch("services.export.render_backend.BrowserContextManager", return_value=_mock_browser(page)):
            svg = await backend.render("graph TD")

        assert svg == "<svg>ok</svg>"
        html = page.set_content.await_args.args[0]
        assert "graph TD" in html

    def test_from_config(self):
        config_mock = Mock(
            MERMAID_SCRIPT_URL="https://cdn.example/m.js",
            MERMAID_THEME="forest",
            EXPORT_RENDER_TIMEOUT=5.0,
            EXPORT_VIEWPORT_WIDTH=800,
            EXPORT_VIEWPORT_HEIGHT=600,
            EXPORT_DEVICE_SCALE=1,
        )

        backend = PlaywrightRenderBackend.from_config(config_mock)

        assert backend.script_url == "https://cdn.example/m.js"
        assert backend.theme == "forest"
        assert backend.timeout == 5.0
        assert backend.viewport_width == 800


class TestBrowserContextManager:
    """Browser teardown."""

    @staticmethod
    def _manager(context=None, browser=None, driver=None):
        manager = BrowserContextManager()
        manager.context = context or Mock(close=AsyncMock())
        manager.browser = browser or Mock(close=AsyncMock())
        manager.playwright = driver or Mock(stop=AsyncMock())
        return manager

    @pytest.mark.asyncio
    async def test_exit_closes_everything(self):
        manager = self._manager()
        context, browser, driver = manager.context, manager.browser, manager.playwright

        await manager.__aexit__(None, None, None)

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        driver.stop.assert_awaited_once()
        assert (manager.context, manager.browser, manager.playwright) == (None, None, None)

    @pytest.mark.asyncio
    async def test_driver_stopped_when_browser_close_fails(self):
        browser = Mock(close=AsyncMock(side_effect=RuntimeError("browser crashed")))
        manager = self._manager(browser=browser)
        driver = manager.playwright

        await manager.__aexit__(RuntimeError, None, None)

        browser.close.assert_awaited_once()
        driver.stop.assert_awaited_once()
        assert manager.browser is None
        assert manager.playwright is None

    @pytest.mark.asyncio
    async def test_failed_launch_cleans_up_driver(self):
        driver = Mock(stop=AsyncMock())
        driver.chromium.launch = AsyncMock(side_effect=RuntimeError("no chromium"))
        starter = Mock(start=AsyncMock(return_value=driver))

        with patch("services.infrastructure.utils.browser.async_playwright", return_value=starter):
            with pytest.raises(RuntimeError, match="no chromium"):
                async with BrowserContextManager():
                    pass

        driver.stop.assert_awaited_once()
