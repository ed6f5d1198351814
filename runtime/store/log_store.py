"""
LogStore: append-only event log for interview lifecycle events.

Writes JSON lines to:

    <log_dir>/events_YYYY-MM-DD.jsonl

one object per event:

    {"timestamp": "...", "event_type": "answer_recorded", "payload": {...}}
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


class LogStore:
    """Date-based JSONL event sink."""

    def __init__(self, log_dir: str = "data/logs"):
        self.log_dir = Path(log_dir)
        self._lock = threading.Lock()

    def path_for(self, when: datetime) -> Path:
        return self.log_dir / f"events_{when.strftime('%Y-%m-%d')}.jsonl"

    def log_event(self, event_type: str, payload: dict) -> None:
        """
        Append an event to today's log file.

        Write failures are reported through the standard logger and never
        reach the caller.
        """
        now = datetime.now(timezone.utc)
        record = {
            "timestamp": now.isoformat(),
            "event_type": event_type,
            "payload": payload,
        }
        line = json.dumps(record, ensure_ascii=False, default=str)

        try:
            with self._lock:
                self.log_dir.mkdir(parents=True, exist_ok=True)
                with self.path_for(now).open("a", encoding="utf-8") as f:
                    f.write(line + "\n")
        except OSError as exc:
            logger.warning("[LOG] Could not write event %s: %s", event_type, exc)
