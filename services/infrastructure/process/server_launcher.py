"""
Server launcher for MermaidUI FastAPI application.

Orchestrates the startup sequence:
- Uvicorn server startup
- Port conflict reporting
- Graceful shutdown handling
"""

import os
import sys
import traceback
import logging

import uvicorn

from config.settings import config
from uvicorn_config import TIMEOUT_GRACEFUL_SHUTDOWN, TIMEOUT_KEEP_ALIVE, build_logging_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """
    Run MermaidUI with Uvicorn (FastAPI async server).

    A single worker is used: SQLite serializes writes and every export
    launches its own browser.
    """
    try:
        script_dir = os.path.dirname(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        )
        os.chdir(script_dir)

        os.makedirs("logs", exist_ok=True)

        host = config.host
        port = config.port
        debug = config.debug
        log_level = config.log_level.lower()
        reload = debug

        print(f"Environment: {'development' if debug else 'production'} (DEBUG={debug})")
        print(f"Host: {host}")
        print(f"Port: {port}")
        print(f"Database: {config.DATABASE_PATH}")
        print(f"Log Level: {log_level.upper()}")
        print(f"Auto-reload: {reload}")
        print("=" * 80)
        print(f"Server ready at: http://localhost:{port}/api")
        if debug:
            print(f"API Docs: http://localhost:{port}/docs")
        print("Press Ctrl+C to stop the server")
        print()

        try:
            uvicorn.run(
                "main:app",
                host=host,
                port=port,
                reload=reload,
                log_level=log_level,
                log_config=build_logging_config(log_level),
                use_colors=False,
                timeout_keep_alive=TIMEOUT_KEEP_ALIVE,
                timeout_graceful_shutdown=TIMEOUT_GRACEFUL_SHUTDOWN,
                access_log=False,
            )
        except OSError as e:
            if e.errno == 98 or "address already in use" in str(e).lower():
                print(f"\n[ERROR] Port {port} is already in use!")
                print("        Set PORT=<different_port> in .env")
                sys.exit(1)
            raise
        except KeyboardInterrupt:
            print("\n" + "=" * 80)
            print("Shutting down gracefully...")
            print("=" * 80)
    except KeyboardInterrupt:
        print("\nStartup interrupted by user")
        sys.exit(0)
    except (ImportError, OSError, ValueError, RuntimeError) as e:
        print(f"[ERROR] Failed to start Uvicorn: {e}")
        traceback.print_exc()
        sys.exit(1)
