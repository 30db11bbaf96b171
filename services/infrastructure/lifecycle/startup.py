"""
Early startup configuration for MermaidUI application.

Handles:
- Windows event loop policy setup (required for Playwright)
- Environment loading
- Logs directory creation
- Startup banner
"""

import os
import sys
import asyncio
import logging
from pathlib import Path
from dotenv import load_dotenv

from config.settings import config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def _print_startup_banner() -> None:
    """Print the startup banner once per process."""
    print("=" * 80)
    print(f"MermaidUI v{config.version}")
    print("=" * 80)


def setup_early_configuration():
    """
    Perform early configuration setup that must happen before other initialization.

    This includes:
    - Banner display
    - Windows event loop policy setup (required for Playwright)
    - Environment loading
    - Logs directory creation
    """
    should_log_startup = os.getenv('UVICORN_WORKER_ID') is None

    if should_log_startup:
        _print_startup_banner()

    # Fix for Windows: Set event loop policy to support subprocesses (required for Playwright)
    # MUST be set before any event loop is created (before Uvicorn starts)
    if sys.platform == 'win32':
        try:
            current_policy = asyncio.get_event_loop_policy()
            if not isinstance(current_policy, asyncio.WindowsProactorEventLoopPolicy):
                asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
                if should_log_startup:
                    logging.debug(
                        "Windows: Set event loop policy to "
                        "WindowsProactorEventLoopPolicy for Playwright support"
                    )
        except Exception as e:  # pylint: disable=broad-except
            logging.warning("Windows: Could not set event loop policy: %s", e)

    # Load environment variables
    load_dotenv(PROJECT_ROOT / '.env')

    # Create logs directory
    (PROJECT_ROOT / 'logs').mkdir(exist_ok=True)
