"""
Taskboard Logging — Structured JSON file-based event log with async queue.

Implements:
- FileLogger: Per-area, per-category log files (daily rotation)
- AsyncLogQueue: In-memory queue with background flush (100ms / 50 entries)
- Entry builders for task, comment, auth and system events

Files live at {log_dir}/{area}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import defaultdict
from datetime import date, datetime, timezone
from pathlib import Path
from queue import Empty, Full, Queue
from typing import Any, Dict, List, Optional

logger = logging.getLogger("taskboard.engine.logging")

# Areas and the categories each may write to
AREA_CATEGORIES = {
    "tasks": ["execution", "security"],
    "comments": ["execution", "security"],
    "auth": ["execution", "security"],
    "system": ["execution"],
}


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("area", "category", "data")

    def __init__(self, area: str, category: str, data: Dict[str, Any]):
        self.area = area
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-area, per-category files.

    Thread-safe — uses a lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for area, categories in AREA_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / area / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        self.write_batch([entry])

    def write_batch(self, entries: List[LogEntry]) -> None:
        """Write a batch of log entries, grouping by file path."""
        grouped: Dict[str, List[LogEntry]] = defaultdict(list)
        for entry in entries:
            grouped[str(self._resolve_path(entry.area, entry.category))].append(entry)

        for file_path, batch in grouped.items():
            with self._file_locks[file_path]:
                with open(file_path, "a", encoding="utf-8") as f:
                    for entry in batch:
                        f.write(entry.to_json())
                        f.write("\n")

    def _resolve_path(self, area: str, category: str) -> Path:
        today = date.today().isoformat()
        return self._log_dir / area / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def read_today(self, area: str, category: str) -> List[Dict[str, Any]]:
        """Return today's entries for an area/category, oldest first."""
        path = self._resolve_path(area, category)
        if not path.exists():
            return []
        entries: List[Dict[str, Any]] = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed log line in %s", path)
        return entries


class AsyncLogQueue:
    """
    In-memory queue with a background flush thread.

    Entries are pushed non-blocking. The flush thread writes to the
    FileLogger every flush_interval_ms or once flush_batch_size entries
    have accumulated, whichever comes first.
    """

    def __init__(
        self,
        file_logger: FileLogger,
        flush_interval_ms: int = 100,
        flush_batch_size: int = 50,
        max_queue_size: int = 10000,
    ):
        self._logger = file_logger
        self._flush_interval = flush_interval_ms / 1000.0
        self._flush_batch_size = flush_batch_size
        self._queue: Queue[LogEntry] = Queue(maxsize=max_queue_size)
        self._running = False
        self._flush_thread: Optional[threading.Thread] = None
        self._dropped_count = 0

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._flush_thread = threading.Thread(
            target=self._flush_loop,
            name="taskboard-log-flush",
            daemon=True,
        )
        self._flush_thread.start()
        logger.info("Async log queue started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the flush thread and drain remaining entries."""
        self._running = False
        if self._flush_thread and self._flush_thread.is_alive():
            self._flush_thread.join(timeout=timeout)
        self._drain()
        logger.info(f"Async log queue stopped (dropped: {self._dropped_count})")

    def push(self, entry: LogEntry) -> bool:
        """
        Push a log entry to the queue. Non-blocking.

        Returns:
            True if queued, False if dropped (queue full).
        """
        try:
            self._queue.put_nowait(entry)
            return True
        except Full:
            self._dropped_count += 1
            return False

    def _flush_loop(self) -> None:
        while self._running:
            batch = self._collect_batch()
            if batch:
                try:
                    self._logger.write_batch(batch)
                except OSError as e:
                    logger.error(f"Log flush error: {e}")
            else:
                time.sleep(self._flush_interval)

    def _collect_batch(self) -> List[LogEntry]:
        batch: List[LogEntry] = []
        deadline = time.monotonic() + self._flush_interval

        while len(batch) < self._flush_batch_size:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                batch.append(self._queue.get(timeout=min(remaining, 0.01)))
            except Empty:
                if batch:
                    break
        return batch

    def _drain(self) -> None:
        batch: List[LogEntry] = []
        while not self._queue.empty():
            try:
                batch.append(self._queue.get_nowait())
            except Empty:
                break
        if batch:
            try:
                self._logger.write_batch(batch)
            except OSError as e:
                logger.error(f"Log drain error: {e}")

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    @property
    def dropped_count(self) -> int:
        return self._dropped_count


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(
    event: str,
    level: str,
    user_id: Optional[Any] = None,
    **extra: Any,
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
    }
    if user_id is not None:
        entry["user_id"] = user_id
    entry.update({k: v for k, v in extra.items() if v is not None})
    return entry


def log_task_event(
    event: str,
    task_id: Optional[int],
    user_id: Any,
    success: bool = True,
    fields_changed: Optional[List[str]] = None,
    error: Optional[str] = None,
) -> LogEntry:
    """Build a task mutation entry (task_created, task_status_updated, ...)."""
    data = _base_entry(
        event=event,
        level="INFO" if success else "ERROR",
        user_id=user_id,
        task_id=task_id,
        success=success,
        fields_changed=fields_changed or None,
        error=error,
    )
    return LogEntry("tasks", "execution", data)


def log_comment_event(
    event: str,
    comment_id: Optional[int],
    task_id: Optional[int],
    user_id: Any,
    success: bool = True,
    error: Optional[str] = None,
) -> LogEntry:
    """Build a comment entry (comment_added, comment_deleted)."""
    data = _base_entry(
        event=event,
        level="INFO" if success else "ERROR",
        user_id=user_id,
        comment_id=comment_id,
        task_id=task_id,
        success=success,
        error=error,
    )
    return LogEntry("comments", "execution", data)


def log_auth_event(
    event: str,
    email: Optional[str],
    user_id: Optional[Any] = None,
    success: bool = True,
    failure_reason: Optional[str] = None,
) -> LogEntry:
    """Build a login/signup/logout entry. Failures go to the security file."""
    data = _base_entry(
        event=event,
        level="INFO" if success else "WARNING",
        user_id=user_id,
        email=email,
        success=success,
        failure_reason=failure_reason,
    )
    return LogEntry("auth", "execution" if success else "security", data)


def log_security_event(
    area: str,
    action: str,
    user_id: Any,
    target_id: Optional[int] = None,
    reason: Optional[str] = None,
) -> LogEntry:
    """Build a denied-action entry for the area's security file."""
    data = _base_entry(
        event="action_denied",
        level="WARNING",
        user_id=user_id,
        action=action,
        target_id=target_id,
        reason=reason,
    )
    return LogEntry(area if area in AREA_CATEGORIES else "auth", "security", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event entry (startup, shutdown, config)."""
    data = _base_entry(event=event, level=level, details=details)
    return LogEntry("system", "execution", data)


# ---------------------------------------------------------------------------
# Global Log Queue Singleton
# ---------------------------------------------------------------------------

_global_queue: Optional[AsyncLogQueue] = None


def init_logging(
    log_dir: str = "logs",
    flush_interval_ms: int = 100,
    flush_batch_size: int = 50,
    max_queue_size: int = 10000,
    level: str = "INFO",
) -> AsyncLogQueue:
    """Configure module loggers and start the global async log queue."""
    global _global_queue
    logging.getLogger("taskboard").setLevel(level)
    if _global_queue is not None:
        _global_queue.stop()
    _global_queue = AsyncLogQueue(
        file_logger=FileLogger(log_dir=log_dir),
        flush_interval_ms=flush_interval_ms,
        flush_batch_size=flush_batch_size,
        max_queue_size=max_queue_size,
    )
    _global_queue.start()
    return _global_queue


def get_log_queue() -> Optional[AsyncLogQueue]:
    return _global_queue


def log(entry: LogEntry) -> bool:
    """Push a log entry to the global queue. Non-blocking."""
    if _global_queue is None:
        logger.debug("Log queue not initialized — entry dropped: %s", entry.data.get("event"))
        return False
    return _global_queue.push(entry)


def shutdown_logging() -> None:
    """Flush and stop the global log queue."""
    global _global_queue
    if _global_queue:
        _global_queue.stop()
        _global_queue = None
