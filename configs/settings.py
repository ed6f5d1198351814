from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def _split_csv(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """
    Central configuration for the interviewer backend.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties. A missing OPENAI_API_KEY is not an
    error: it switches question generation and answer analysis to their
    canned / naive fallbacks.
    """

    def __init__(self) -> None:
        # OpenAI / model configuration
        self._openai_api_key = os.getenv("OPENAI_API_KEY") or None
        self._openai_base_url = os.getenv("OPENAI_BASE_URL") or None
        self._openai_model = os.getenv("INTERVIEWER_OPENAI_MODEL", "gpt-4o")

        # Data paths
        self._data_dir = Path(os.getenv("INTERVIEWER_DATA_DIR", "data"))
        self._default_config_path = Path(
            os.getenv(
                "INTERVIEWER_DEFAULT_CONFIG",
                str(Path(__file__).resolve().parent / "default_config.json"),
            )
        )

        # HTTP server
        self._app_env = os.getenv("APP_ENV", "development")
        self._allowed_origins = (
            _split_csv(os.getenv("ALLOWED_ORIGINS")) or list(DEFAULT_ALLOWED_ORIGINS)
        )
        self._host = os.getenv("HOST", "0.0.0.0")
        self._port = _int_env("PORT", 8000)
        self._api_ports = [
            int(p) for p in _split_csv(os.getenv("API_PORTS")) if p.isdigit() and int(p) > 0
        ]

        # In-memory session store policy
        self._session_ttl_seconds = _int_env("SESSION_TTL_SECONDS", 6 * 60 * 60)
        self._session_max_entries = _int_env("SESSION_MAX_ENTRIES", 1000)

    # ------------------------------------------------------------------
    # OpenAI / model settings
    # ------------------------------------------------------------------

    @property
    def has_openai_api_key(self) -> bool:
        return bool(self._openai_api_key)

    @property
    def openai_api_key(self) -> str:
        if not self._openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY is not set. Please export it in your environment "
                "or define it in a .env file."
            )
        return self._openai_api_key

    @property
    def openai_base_url(self) -> Optional[str]:
        return self._openai_base_url

    @property
    def openai_model(self) -> str:
        return self._openai_model

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def sessions_dir(self) -> Path:
        return self._data_dir / "sessions"

    @property
    def config_path(self) -> Path:
        return self._data_dir / "config.json"

    @property
    def default_config_path(self) -> Path:
        return self._default_config_path

    @property
    def log_dir(self) -> Path:
        return self._data_dir / "logs"

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------

    @property
    def is_production(self) -> bool:
        return self._app_env.strip().lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return list(self._allowed_origins)

    @property
    def host(self) -> str:
        return self._host

    @property
    def api_ports(self) -> List[int]:
        """Listen ports, de-duplicated in order (API_PORTS or PORT + 8001)."""
        ports = self._api_ports or [self._port, 8001]
        return list(dict.fromkeys(ports))

    # ------------------------------------------------------------------
    # Session store
    # ------------------------------------------------------------------

    @property
    def session_ttl_seconds(self) -> int:
        return self._session_ttl_seconds

    @property
    def session_max_entries(self) -> int:
        return self._session_max_entries


settings = Settings()
