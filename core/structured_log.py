"""
Structured JSON event log.

Every event is one JSON object on one line, emitted through the
``teamforge.events`` logger. Hosts that want the events on disk call
``configure_event_log`` once; benchmark loops that do not care simply never
attach a file handler and pay only for the JSON encoding.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional


EVENT_LOGGER_NAME = "teamforge.events"

# Log rotation settings (configurable via environment)
MAX_LOG_BYTES = int(os.getenv("TEAMFORGE_LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB default
LOG_BACKUP_COUNT = int(os.getenv("TEAMFORGE_LOG_BACKUP_COUNT", 5))  # Keep 5 backups

_event_logger = logging.getLogger(EVENT_LOGGER_NAME)
_file_handler: RotatingFileHandler | None = None
_log_file: Optional[Path] = None


def configure_event_log(path: str | Path) -> Path:
    """
    Attach a rotating JSONL file handler to the event logger.

    Calling it again with another path replaces the previous handler.

    Args:
        path: Target .jsonl file; parent directories are created

    Returns:
        The resolved log file path
    """
    global _file_handler, _log_file

    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    if _file_handler is not None:
        _event_logger.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = RotatingFileHandler(
        str(log_file),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    _file_handler.setFormatter(logging.Formatter("%(message)s"))
    _event_logger.addHandler(_file_handler)
    _event_logger.setLevel(logging.DEBUG)
    _log_file = log_file
    return log_file


def jlog(event: str, level: str = "INFO", **fields: Any) -> Dict[str, Any]:
    """
    Write a structured JSON log entry.

    Args:
        event: Event name/type
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **fields: Additional fields to include in the log entry

    Returns:
        The record that was emitted
    """
    rec: Dict[str, Any] = {
        "ts": datetime.utcnow().isoformat(),
        "level": level,
        "event": event,
        **fields,
    }
    line = json.dumps(rec, default=str)
    _event_logger.log(getattr(logging, level.upper(), logging.INFO), line)
    return rec


def read_recent_logs(count: int = 100, level: str | None = None) -> List[Dict[str, Any]]:
    """
    Read the most recent entries from the configured event log file.

    Args:
        count: Maximum number of entries to return
        level: Optional filter by log level

    Returns:
        List of log entries (most recent last); empty when no file is configured
    """
    entries: List[Dict[str, Any]] = []

    if _log_file is None or not _log_file.exists():
        return entries

    if _file_handler is not None:
        _file_handler.flush()

    with _log_file.open("r", encoding="utf-8") as f:
        lines = f.readlines()

    # Read from end for efficiency
    for line in reversed(lines):
        if len(entries) >= count:
            break
        try:
            entry = json.loads(line.strip())
        except json.JSONDecodeError:
            continue
        if level is None or entry.get("level") == level:
            entries.append(entry)

    return list(reversed(entries))
