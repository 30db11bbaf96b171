"""
Uvicorn Configuration for MermaidUI FastAPI Application
=======================================================

Server timeouts and the logging dictConfig handed to uvicorn.run(), so
uvicorn output shares the application's UnifiedFormatter.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import os
from typing import Any, Dict

from services.infrastructure.utils.logging_config import SafeStdoutHandler, UnifiedFormatter

# ============================================================================
# SERVER CONFIGURATION
# ============================================================================

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '3001'))

# A PDF export can hold a request open for the whole render timeout
TIMEOUT_KEEP_ALIVE = 75
TIMEOUT_GRACEFUL_SHUTDOWN = 5

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

# logger name -> minimum level (None: follow LOG_LEVEL)
UVICORN_LOGGERS = {
    "uvicorn": None,
    "uvicorn.error": None,
    "uvicorn.access": None,
    "watchfiles": "WARNING",  # file change notices in reload mode
}


def build_logging_config(log_level: str = "INFO") -> Dict[str, Any]:
    """
    dictConfig for uvicorn's own loggers.

    Args:
        log_level: Level applied to uvicorn loggers and the root logger
    """
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "unified": {"()": UnifiedFormatter},
        },
        "handlers": {
            "stdout": {"()": SafeStdoutHandler, "formatter": "unified"},
        },
        "loggers": {
            name: {
                "handlers": ["stdout"],
                "level": override or level,
                "propagate": False,
            }
            for name, override in UVICORN_LOGGERS.items()
        },
        "root": {"handlers": ["stdout"], "level": level},
    }


LOG_LEVEL = os.getenv('LOG_LEVEL', 'info').lower()
LOGGING_CONFIG = build_logging_config(LOG_LEVEL)

config_summary = f"""
Uvicorn Configuration Summary:
------------------------------
Host: {HOST}
Port: {PORT}
Timeout Keep-Alive: {TIMEOUT_KEEP_ALIVE}s
Graceful Shutdown: {TIMEOUT_GRACEFUL_SHUTDOWN}s
Log Level: {LOG_LEVEL}
"""

if __name__ == "__main__":
    print(config_summary)
