import logging
import os
from collections import deque
from datetime import UTC, datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger


# Ring Buffer for real-time logs in UI
class RingBufferHandler(logging.Handler):
    """In-memory ring buffer for log entries that the UI can poll."""

    def __init__(self, maxlen: int = 1000) -> None:
        super().__init__()
        self._buffer: deque[dict[str, Any]] = deque(maxlen=maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            timestamp = datetime.fromtimestamp(record.created, tz=UTC)
        except (OverflowError, OSError, ValueError):
            timestamp = datetime.now(UTC)
        entry = {
            "timestamp": timestamp.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self.format(record),
        }
        self._buffer.append(entry)

    def get_logs(self, limit: int | None = None) -> list[dict[str, Any]]:
        logs = list(self._buffer)
        if limit is not None:
            logs = logs[-limit:] if limit > 0 else []
        return logs

    def clear(self) -> None:
        self._buffer.clear()


# Global instances
_ring_buffer_handler = RingBufferHandler(maxlen=1000)
_configured = False

LOGGER_NAMESPACES = ("springyaml", "generator")


def setup_logging(force: bool = False) -> None:
    """
    Configure console logging, the UI ring buffer and, when LOG_DIR is set,
    a JSON file with daily rotation.

    Safe to call repeatedly; handlers are only installed once.
    """
    global _configured
    if _configured and not force:
        return

    log_level_str = os.environ.get("LOG_LEVEL", "INFO").upper()
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if log_level_str not in valid_levels:
        log_level_str = "INFO"

    log_level = getattr(logging, log_level_str)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 1. Console Handler (Simple format)
    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter("%(levelname)s:\t%(name)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    # 2. File Handler (JSON, Timed Rotation), opt-in
    log_dir_str = os.environ.get("LOG_DIR")
    if log_dir_str:
        log_dir = Path(log_dir_str)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_dir / "spring-yaml-generator.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        json_formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(module)s %(lineno)d"
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    # 3. Ring Buffer Handler (for UI)
    _ring_buffer_handler.setFormatter(console_formatter)
    if _ring_buffer_handler not in root_logger.handlers:
        root_logger.addHandler(_ring_buffer_handler)

    for namespace in LOGGER_NAMESPACES:
        logging.getLogger(namespace).setLevel(log_level)

    _configured = True


def get_ring_buffer() -> RingBufferHandler:
    """Return the global ring buffer handler instance."""
    return _ring_buffer_handler
