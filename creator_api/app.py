import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates

from creator_api.core.config import Settings, get_settings
from creator_api.core.logs import setup_logging
from creator_api.db.session import reset_engine
from creator_api.routers import content as content_router
from creator_api.routers import history as history_router
from creator_api.services.history_service import build_history_store
from creator_api.services.history_view import HistoryProjection

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
TEMPLATES = os.path.join(BASE, "templates")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = build_history_store(settings)
        app.state.history_store = store
        app.state.history_view = HistoryProjection(store)
        mode = await store.initialize()
        logger.info("Creator Intelligence API started (history backend: %s)", mode.value if mode else "none")
        try:
            yield
        finally:
            app.state.history_view.close()
            if settings.remote_configured:
                reset_engine()

    app = FastAPI(title="Creator Intelligence API", lifespan=lifespan)
    app.state.templates = Jinja2Templates(directory=TEMPLATES)

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:8000",
                "http://127.0.0.1:8000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ],
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    app.include_router(content_router.router)
    app.include_router(history_router.router)
    return app


app = create_app()
