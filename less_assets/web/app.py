"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from less_assets import __version__
from less_assets.config import load_config
from less_assets.models import CompileConfig
from less_assets.pipeline import CompileOrchestrator
from less_assets.web.api import router
from less_assets.web.state import AppState


def create_app(
    config: CompileConfig | None = None,
    orchestrator: CompileOrchestrator | None = None,
) -> FastAPI:
    app = FastAPI(title="less-assets", version=__version__)
    app.state.less = AppState(config or load_config(), orchestrator=orchestrator)
    app.include_router(router)
    return app
