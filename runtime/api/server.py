"""
FastAPI application entry point for the interviewer backend.

Responsibilities:
- create the FastAPI app (CORS, /health)
- construct shared singletons (stores, interview components, InterviewAgent)
- include interview routes under /api and config routes under /api/config
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs.settings import settings
from core.interview.answer_analyzer import AnswerAnalyzer
from core.interview.insight_synthesizer import InsightSynthesizer
from core.interview.model_backend import OpenAIChatBackend
from core.interview.question_generator import QuestionGenerator
from runtime.agents.interview_agent import InterviewAgent
from runtime.models.api_models import HealthResponse
from runtime.store.config_store import ConfigStore
from runtime.store.export_store import SessionExportStore
from runtime.store.log_store import LogStore
from runtime.store.session_store import InMemorySessionStore
from . import config_routes, session_routes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Shared singletons
# ---------------------------------------------------------------------------


def build_config_store() -> ConfigStore:
    return ConfigStore(
        config_path=str(settings.config_path),
        defaults_path=str(settings.default_config_path),
    )


def build_interview_agent(config_store: ConfigStore) -> InterviewAgent:
    """Wire the InterviewAgent from settings.

    Without OPENAI_API_KEY no chat backend is created and every component
    runs on its fallback path.
    """
    chat_backend = None
    if settings.has_openai_api_key:
        chat_backend = OpenAIChatBackend(default_model=settings.openai_model)
        logger.info("[SERVER] AI enabled (model=%s)", settings.openai_model)
    else:
        logger.warning("[SERVER] OPENAI_API_KEY not set; using fallback questions and analysis")

    return InterviewAgent(
        session_store=InMemorySessionStore(
            ttl_seconds=settings.session_ttl_seconds,
            max_sessions=settings.session_max_entries,
        ),
        export_store=SessionExportStore(data_dir=str(settings.data_dir)),
        config_store=config_store,
        question_generator=QuestionGenerator(chat_backend=chat_backend),
        answer_analyzer=AnswerAnalyzer(chat_backend=chat_backend),
        insight_synthesizer=InsightSynthesizer(chat_backend=chat_backend),
        log_store=LogStore(log_dir=str(settings.log_dir)),
    )


# ---------------------------------------------------------------------------
# FastAPI app + route registration
# ---------------------------------------------------------------------------


def create_app(
    interview_agent: Optional[InterviewAgent] = None,
    config_store: Optional[ConfigStore] = None,
) -> FastAPI:
    """Build the FastAPI app.

    Parameters
    ----------
    interview_agent:
        Agent serving /api routes. Built from settings when omitted.
    config_store:
        Store serving /api/config routes. Built from settings when omitted.
    """
    if config_store is None:
        config_store = build_config_store()
    if interview_agent is None:
        interview_agent = build_interview_agent(config_store)

    app = FastAPI(title="In-depth Interviewer API")

    if settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    # Initialize the router modules with our shared objects, then include them.
    session_routes.init_routes(interview_agent=interview_agent)
    config_routes.init_routes(config_store=config_store)
    app.include_router(config_routes.router, prefix="/api/config")
    app.include_router(session_routes.router, prefix="/api")

    return app


app = create_app()
