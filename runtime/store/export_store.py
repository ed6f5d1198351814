"""SessionExportStore: saved interview sessions as JSON files.

Expected layout (by convention):

    <data_dir>/sessions/session-<session_id>.json

Each file holds the full InterviewSession plus:

    {
      ...session fields...,
      "exported_at": "2026-01-01T10:00:00+00:00",
      "status": "completed"
    }

This store provides a simple API:

    save(session) -> filename
    list_sessions() -> [summary, ...]
    get(session_id) -> dict | None
    delete(session_id) -> bool

and hides the details of locating and parsing the files.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.session_models import InterviewSession

logger = logging.getLogger(__name__)

FILE_PREFIX = "session-"
FILE_SUFFIX = ".json"

_SAFE_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class SessionExportStore:
    """Read/write access to saved session JSON files.

    Parameters
    ----------
    data_dir:
        Base directory; files live under ``<data_dir>/sessions``. The
        directory is created on first write or listing.
    """

    def __init__(self, data_dir: str = "data") -> None:
        self.data_dir = Path(data_dir)

    @property
    def sessions_dir(self) -> Path:
        return self.data_dir / "sessions"

    @staticmethod
    def filename_for(session_id: str) -> str:
        return f"{FILE_PREFIX}{session_id}{FILE_SUFFIX}"

    def _session_path(self, session_id: str) -> Optional[Path]:
        """Return the file path for a session id, or None for ids that are not file-safe."""
        if not session_id or not _SAFE_SESSION_ID.match(session_id):
            return None
        return self.sessions_dir / self.filename_for(session_id)

    def _ensure_dir(self) -> None:
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public API used by InterviewAgent
    # ------------------------------------------------------------------

    def save(self, session: InterviewSession) -> str:
        """Write the session with an export timestamp and return the filename."""
        path = self._session_path(session.id)
        if path is None:
            raise ValueError(f"Session id is not usable as a filename: {session.id!r}")

        self._ensure_dir()
        payload = session.model_dump(mode="json")
        payload["exported_at"] = datetime.now(timezone.utc).isoformat()
        payload["status"] = "completed"

        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        return path.name

    def list_sessions(self) -> List[Dict[str, Any]]:
        """Summaries of every saved session, newest first.

        Files that cannot be read or parsed are skipped with a warning.
        """
        self._ensure_dir()
        summaries: List[Dict[str, Any]] = []

        for path in self.sessions_dir.glob(f"{FILE_PREFIX}*{FILE_SUFFIX}"):
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("[EXPORT] Skipping unreadable session file %s: %s", path.name, exc)
                continue
            if not isinstance(data, dict):
                logger.warning("[EXPORT] Skipping malformed session file %s", path.name)
                continue

            session_id = data.get("id") or path.name[len(FILE_PREFIX) : -len(FILE_SUFFIX)]
            answers = data.get("answers") or []
            insights = data.get("insights") or []
            summaries.append(
                {
                    "id": session_id,
                    "topic": data.get("topic") or "ไม่ระบุหัวข้อ",
                    "created_at": data.get("created_at") or data.get("exported_at") or "",
                    "exported_at": data.get("exported_at"),
                    "total_questions": len(answers),
                    "total_insights": len(insights),
                    "filename": path.name,
                }
            )

        summaries.sort(key=lambda s: s["created_at"], reverse=True)
        return summaries

    def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Return the saved session document, or None if it does not exist."""
        path = self._session_path(session_id)
        if path is None or not path.is_file():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("[EXPORT] Could not read %s: %s", path.name, exc)
            return None
        return data if isinstance(data, dict) else None

    def delete(self, session_id: str) -> bool:
        """Remove a saved session file; return False if it was not there."""
        path = self._session_path(session_id)
        if path is None or not path.is_file():
            return False
        path.unlink()
        logger.info("[EXPORT] Deleted session file %s", path.name)
        return True
