"""HTTP routes for the interview configuration (admin page).

- GET  /api/config                            -> effective config
- POST /api/config                            -> partial update
- GET  /api/config/export                     -> config as a JSON attachment
- POST /api/config/import                     -> replace stored config
- POST /api/config/reset                      -> restore defaults
- GET  /api/config/default/question_prompt    -> default question prompt
- GET  /api/config/default/analysis_prompt    -> default analysis prompt
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import Response
from pydantic import ValidationError

from ..models.api_models import MessageResponse, PromptResponse
from ..store.config_store import EXPORT_FILENAME, ConfigStore


logger = logging.getLogger(__name__)

router = APIRouter()

_CONFIG_STORE: Optional[ConfigStore] = None


def init_routes(config_store: ConfigStore) -> None:
    """Initialize the module-level ConfigStore used by the route handlers."""
    global _CONFIG_STORE
    _CONFIG_STORE = config_store


def _require_config_store() -> ConfigStore:
    if _CONFIG_STORE is None:
        raise HTTPException(
            status_code=500,
            detail="ConfigStore is not configured on the server.",
        )
    return _CONFIG_STORE


def _invalid_config(exc: ValidationError) -> HTTPException:
    logger.warning("[CONFIG] Rejected invalid config: %s", exc)
    return HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))


@router.get("")
def get_config() -> Dict[str, Any]:
    return _require_config_store().load().model_dump()


@router.post("", response_model=MessageResponse)
def update_config(updates: Dict[str, Any] = Body(...)) -> MessageResponse:
    store = _require_config_store()
    try:
        store.update(updates)
    except ValidationError as e:
        raise _invalid_config(e)
    return MessageResponse(message="Config updated successfully")


@router.get("/export")
def export_config() -> Response:
    store = _require_config_store()
    return Response(
        content=store.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=MessageResponse)
def import_config(data: Dict[str, Any] = Body(...)) -> MessageResponse:
    store = _require_config_store()
    try:
        store.import_config(data)
    except ValidationError as e:
        raise _invalid_config(e)
    return MessageResponse(message="Config imported successfully")


@router.post("/reset", response_model=MessageResponse)
def reset_config() -> MessageResponse:
    _require_config_store().reset()
    return MessageResponse(message="Config reset to default")


@router.get("/default/question_prompt", response_model=PromptResponse)
def default_question_prompt() -> PromptResponse:
    defaults = _require_config_store().load_defaults()
    return PromptResponse(prompt=defaults.get("question_generation_prompt") or "")


@router.get("/default/analysis_prompt", response_model=PromptResponse)
def default_analysis_prompt() -> PromptResponse:
    defaults = _require_config_store().load_defaults()
    return PromptResponse(prompt=defaults.get("analysis_prompt") or "")
