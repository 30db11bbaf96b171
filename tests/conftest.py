"""
Pytest Configuration
====================

Ensures project root is in Python path for imports and provides shared
fixtures: an in-memory SQLite store, a fake render backend and a test
application wired to both.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent.absolute()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from config.database import enable_sqlite_foreign_keys, get_db, init_db  # noqa: E402
from models.common import ExportFormat  # noqa: E402
from routers.api.helpers import get_render_backend  # noqa: E402
from routers.register import register_routers  # noqa: E402
from services.export.render_backend import RenderBackend  # noqa: E402
from services.infrastructure.http.exception_handlers import setup_exception_handlers  # noqa: E402
from services.infrastructure.http.middleware import setup_middleware  # noqa: E402


class FakeRenderBackend(RenderBackend):
    """Records captures; returns canned bytes or raises ``error``."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.captures = []

    def host_html(self, content: str) -> str:
        return f"<pre class=\"mermaid\">{content}</pre>"

    async def capture(self, html: str, export_format: ExportFormat) -> bytes:
        self.captures.append((html, export_format))
        if self.error is not None:
            raise self.error
        if export_format == ExportFormat.SVG:
            return b'<svg xmlns="http://www.w3.org/2000/svg"><g/></svg>'
        if export_format == ExportFormat.PNG:
            return b'\x89PNG\r\n\x1a\nfake'
        return b'%PDF-1.4 fake'


@pytest.fixture
def engine():
    """Fresh in-memory database with tables and the default collection."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def render_backend():
    return FakeRenderBackend()


@pytest.fixture
def fake_backend_class():
    return FakeRenderBackend


@pytest.fixture
def app(session_factory, render_backend):
    """Application with the test store and fake backend injected."""
    test_app = FastAPI(title="MermaidUI API (test)")
    setup_middleware(test_app)
    setup_exception_handlers(test_app)
    register_routers(test_app)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    test_app.dependency_overrides[get_db] = override_get_db
    test_app.dependency_overrides[get_render_backend] = lambda: render_backend
    return test_app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
