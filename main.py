"""
MermaidUI - Mermaid Diagram Management Application (FastAPI)
============================================================

Organize Mermaid diagrams into collections, edit and preview them, and
export them to SVG, PNG or PDF.

Version: See VERSION file (centralized version management)
Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License

Features:
- FastAPI with Pydantic models for type safety
- SQLite store through SQLAlchemy
- Headless Chromium export through Playwright
- Uvicorn ASGI server (Windows + Ubuntu compatible)
- Auto-generated OpenAPI documentation at /docs (DEBUG only)
"""

# Third-party imports
from fastapi import FastAPI

# First-party imports
from config.settings import config
from routers.register import register_routers
from services.infrastructure.lifecycle.startup import setup_early_configuration
from services.infrastructure.utils.logging_config import setup_logging
from services.infrastructure.lifecycle.lifespan import lifespan
from services.infrastructure.http.middleware import setup_middleware
from services.infrastructure.http.exception_handlers import setup_exception_handlers
from services.infrastructure.process.server_launcher import run_server

# Early configuration setup (must happen before logging)
setup_early_configuration()

# Setup logging (must happen early, before other modules use logger)
logger = setup_logging()

# ============================================================================
# FASTAPI APPLICATION INITIALIZATION
# ============================================================================

app = FastAPI(
    title="MermaidUI API",
    description="Mermaid diagram collections, preview and export",
    version=config.version,
    # Only expose Swagger UI in DEBUG mode
    docs_url="/docs" if config.debug else None,
    redoc_url="/redoc" if config.debug else None,
    lifespan=lifespan
)

# ============================================================================
# MIDDLEWARE & EXCEPTION HANDLERS
# ============================================================================

setup_middleware(app)
setup_exception_handlers(app)

# ============================================================================
# ROUTER REGISTRATION
# ============================================================================

register_routers(app)

# ============================================================================
# APPLICATION ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    run_server()
