"""ConfigStore: interview configuration backed by two JSON files.

    <defaults_path>          read-only defaults (shipped as configs/default_config.json)
    <data_dir>/config.json   stored overrides, edited through /api/config

The effective config is merge_config(defaults, stored). A missing or
unreadable stored file falls back to the defaults; a missing defaults file
falls back to an empty object (i.e. the model defaults).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from ..models.config_models import InterviewConfig, apply_update, merge_config

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "interviewer_config.json"


class ConfigStore:
    """Load, update, import, export and reset the interview configuration.

    Parameters
    ----------
    config_path:
        Path of the stored overrides file (created on first write).
    defaults_path:
        Path of the read-only defaults file.
    """

    def __init__(self, config_path: str, defaults_path: str) -> None:
        self.config_path = Path(config_path)
        self.defaults_path = Path(defaults_path)

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        if not path.is_file():
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("[CONFIG] Could not read %s: %s", path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("[CONFIG] Ignoring %s: expected a JSON object", path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_defaults(self) -> Dict[str, Any]:
        return self._read_json(self.defaults_path)

    def load_stored(self) -> Dict[str, Any]:
        """Stored overrides, or the defaults when nothing has been stored yet."""
        if not self.config_path.is_file():
            return self.load_defaults()
        return self._read_json(self.config_path)

    def load(self) -> InterviewConfig:
        """Effective configuration (defaults overlaid by stored overrides)."""
        defaults = self.load_defaults()
        try:
            return merge_config(defaults, self.load_stored())
        except ValidationError as exc:
            logger.warning("[CONFIG] Stored config is invalid, using defaults: %s", exc)
            try:
                return merge_config(defaults, {})
            except ValidationError:
                logger.exception("[CONFIG] Default config is invalid, using built-in values")
                return InterviewConfig()

    def update(self, updates: Dict[str, Any]) -> InterviewConfig:
        """Apply a partial update on top of the effective config and persist it."""
        current = self.load().model_dump()
        updated = apply_update(current, updates)
        # Validate before writing so a bad update never reaches disk.
        config = merge_config(self.load_defaults(), updated)
        self._write(updated)
        return config

    def import_config(self, data: Dict[str, Any]) -> InterviewConfig:
        """Replace the stored overrides wholesale."""
        config = merge_config(self.load_defaults(), data)
        self._write(dict(data))
        return config

    def reset(self) -> None:
        """Restore the stored file to the defaults."""
        self._write(self.load_defaults())

    def export_json(self) -> str:
        return json.dumps(self.load().model_dump(), ensure_ascii=False, indent=2)
