"""
Logging configuration for MermaidUI application.

Handles:
- Custom file handlers with timestamped rotation
- Unified formatter with ANSI colors
- Logger configuration and filters
"""

import os
import sys
import logging
import re
from logging.handlers import BaseRotatingHandler
from datetime import datetime, timedelta
from typing import Literal

from config.settings import config

_CLOSED_STREAM_PHRASES = (
    "closed file", "i/o operation", "bad file descriptor",
    "operation on closed", "stream is closed"
)


class TimestampedRotatingFileHandler(BaseRotatingHandler):
    """
    File handler that starts a new timestamped log file every interval.
    Each file is named with the start timestamp of its period.
    Example: app.2025-01-15_00-00-00.log
    """

    def __init__(self, base_filename, interval_hours=72, backup_count=10, encoding='utf-8'):
        self.base_filename = base_filename
        self.interval_hours = interval_hours
        self.backup_count = backup_count
        self.interval_seconds = interval_hours * 3600

        self.current_period_start = self._get_period_start()
        current_filename = self._get_current_filename()

        log_dir = os.path.dirname(current_filename)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        BaseRotatingHandler.__init__(self, current_filename, 'a', encoding=encoding, delay=False)
        self.next_rotation_time = self.current_period_start + timedelta(hours=interval_hours)

    def _get_period_start(self) -> datetime:
        """Start timestamp of the current rotation period."""
        now = datetime.now()
        seconds_since_epoch = (now - datetime(1970, 1, 1)).total_seconds()
        periods_passed = int(seconds_since_epoch / self.interval_seconds)
        return datetime.fromtimestamp(periods_passed * self.interval_seconds)

    def _get_base_name(self) -> str:
        base_name = os.path.basename(self.base_filename)
        if base_name.endswith('.log'):
            base_name = base_name[:-4]
        return base_name

    def _get_current_filename(self):
        timestamp_str = self.current_period_start.strftime('%Y-%m-%d_%H-%M-%S')
        base_dir = os.path.dirname(self.base_filename) or '.'
        return os.path.join(base_dir, f"{self._get_base_name()}.{timestamp_str}.log")

    def shouldRollover(self, record):  # pylint: disable=invalid-name
        del record
        return datetime.now() >= self.next_rotation_time

    def doRollover(self):  # pylint: disable=invalid-name
        if self.stream:
            self.stream.close()

        self._cleanup_old_files()

        self.current_period_start = self._get_period_start()
        self.next_rotation_time = self.current_period_start + timedelta(hours=self.interval_hours)

        self.baseFilename = self._get_current_filename()
        self.stream = self._open()

    def emit(self, record):
        """Emit a record, reopening the stream once if it was closed underneath us."""
        if not _is_stream_usable(self.stream):
            try:
                self.stream = self._open()
            except (ValueError, OSError):
                return

        try:
            super().emit(record)
        except (ValueError, OSError) as error:
            if not any(phrase in str(error).lower() for phrase in _CLOSED_STREAM_PHRASES):
                raise
            try:
                self.stream = self._open()
                super().emit(record)
            except (ValueError, OSError):
                return

    def _cleanup_old_files(self) -> None:
        """Remove old log files beyond backup_count."""
        base_dir = os.path.dirname(self.base_filename) or '.'
        base_name = self._get_base_name()

        log_files = []
        try:
            for filename in os.listdir(base_dir):
                if filename.startswith(base_name + '.') and filename.endswith('.log'):
                    filepath = os.path.join(base_dir, filename)
                    try:
                        log_files.append((os.path.getmtime(filepath), filepath))
                    except OSError:
                        continue
        except OSError:
            return

        log_files.sort()
        if len(log_files) > self.backup_count:
            for _, filepath in log_files[:-self.backup_count]:
                try:
                    os.remove(filepath)
                except OSError:
                    pass


def _is_stream_usable(stream) -> bool:
    """
    Check if a stream is usable for logging without triggering errors.

    Returns True if stream can be written to, False otherwise.
    """
    if stream is None:
        return False

    try:
        if getattr(stream, 'closed', False):
            return False
        return hasattr(stream, 'write')
    except (AttributeError, ValueError, OSError):
        return False


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that gracefully handles closed streams."""

    def emit(self, record):
        if not _is_stream_usable(self.stream):
            return

        try:
            super().emit(record)
        except (ValueError, OSError) as error:
            if any(phrase in str(error).lower() for phrase in _CLOSED_STREAM_PHRASES):
                return
            raise


class SafeStdoutHandler(SafeStreamHandler):
    """SafeStreamHandler that uses stdout, falling back to stderr if stdout is closed."""

    def __init__(self, stream=None):
        if stream is None:
            stream = sys.stdout if _is_stream_usable(sys.stdout) else sys.stderr
        super().__init__(stream)


class UnifiedFormatter(logging.Formatter):
    """Unified logging formatter with ANSI color support."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARN': '\033[33m',     # Yellow
        'ERROR': '\033[31m',    # Red
        'CRIT': '\033[35m',     # Magenta
        'RESET': '\033[0m',     # Reset
        'BOLD': '\033[1m',      # Bold
    }

    LEVEL_NAMES = {
        'WARNING': 'WARN',
        'CRITICAL': 'CRIT',
    }

    def __init__(self, fmt=None, datefmt=None, style: Literal['%', '{', '$'] = '%', validate=True, **_kwargs):
        """
        Initialize formatter, accepting Uvicorn's use_colors parameter.
        We ignore use_colors since we handle our own color logic.
        """
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate)

    @staticmethod
    def source_tag(name: str) -> str:
        """Four-letter source abbreviation for a logger name."""
        if name == '__main__':
            return 'MAIN'
        if name.startswith('routers'):
            return 'API'
        if name.startswith('config'):
            return 'CONF'
        if name.startswith('uvicorn'):
            return 'SRVR'
        if name.startswith('watchfiles'):
            return 'WATC'
        if name == 'asyncio':
            return 'ASYN'
        if name.startswith('clients'):
            return 'CLIE'
        if name.startswith('services.export'):
            return 'EXPT'
        if name.startswith('services.editor'):
            return 'EDIT'
        if name.startswith('services'):
            return 'SERV'
        return name[:4].upper()

    def format(self, record):
        timestamp = self.formatTime(record, '%H:%M:%S')

        level_name = self.LEVEL_NAMES.get(record.levelname, record.levelname)
        color = self.COLORS.get(level_name, '')
        reset = self.COLORS['RESET']

        if level_name == 'CRIT':
            colored_level = f"{self.COLORS['BOLD']}{color}{level_name.ljust(5)}{reset}"
        else:
            colored_level = f"{color}{level_name.ljust(5)}{reset}"

        source = self.source_tag(record.name).ljust(4)
        pid = os.getpid()

        message = record.getMessage().lstrip()
        message = re.sub(r' +', ' ', message)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"[{timestamp}] {colored_level} | {source} | [{pid}] {message}"


class UvicornInvalidRequestFilter(logging.Filter):
    """Filter to downgrade uvicorn 'Invalid HTTP request' warnings to DEBUG level."""
    def filter(self, record):
        if record.levelno == logging.WARNING:
            message = record.getMessage()
            if 'Invalid HTTP request' in message or 'invalid request' in message.lower():
                record.levelno = logging.DEBUG
                record.levelname = 'DEBUG'
        return True


def setup_logging():
    """
    Configure all logging for the application.

    Sets up:
    - Console and file handlers with unified formatter
    - Logger levels from LOG_LEVEL
    - Uvicorn logger configuration
    """
    unified_formatter = UnifiedFormatter()
    handlers = []

    if _is_stream_usable(sys.stdout):
        console_handler = SafeStreamHandler(sys.stdout)
        console_handler.setFormatter(unified_formatter)
        handlers.append(console_handler)

    try:
        file_handler = TimestampedRotatingFileHandler(
            os.path.join("logs", "app.log"),
            interval_hours=72,
            backup_count=10,
            encoding="utf-8"
        )
        file_handler.setFormatter(unified_formatter)
        handlers.append(file_handler)
    except OSError:
        if not handlers:
            handlers.append(logging.NullHandler())

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for logger_name in ['services', 'clients', 'routers', 'config']:
        specific_logger = logging.getLogger(logger_name)
        specific_logger.setLevel(log_level)
        specific_logger.propagate = True

    # access_log=False in run_server disables uvicorn.access
    for uvicorn_logger_name in ['uvicorn', 'uvicorn.error']:
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers = []
        for handler in handlers:
            uvicorn_logger.addHandler(handler)
        uvicorn_logger.addFilter(UvicornInvalidRequestFilter())
        uvicorn_logger.propagate = False

    # Chatty below WARNING unless HTTP_DEBUG is set
    http_debug_enabled = os.getenv('HTTP_DEBUG', '').lower() in ('1', 'true', 'yes')
    http_level = logging.DEBUG if http_debug_enabled else logging.WARNING
    for noisy_logger in ('httpx', 'httpcore', 'asyncio', 'multipart'):
        logging.getLogger(noisy_logger).setLevel(http_level)

    logger = logging.getLogger(__name__)
    if os.getenv('UVICORN_WORKER_ID') is None:
        logger.debug("Logging initialized: %s", config.log_level)

    return logger
