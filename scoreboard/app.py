"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_error_handlers, register_routes
from .core import ALLOWED_CORS_ORIGINS, DB_RESET, HOST, LOG_LEVEL, PORT, create_tables, engine
from .services import RankingEngine, ScoreStore

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: ScoreStore = app.state.store
    create_tables(store.engine, reset=DB_RESET)
    logger.info(f"Tournament scores table ready ({store.engine.url.render_as_string()})")
    yield
    store.engine.dispose()


def create_app(store: Optional[ScoreStore] = None) -> FastAPI:
    app = FastAPI(title="Tournament Scoreboard API", version="1.0.0", lifespan=lifespan)

    store = store or ScoreStore(engine)
    app.state.store = store
    app.state.ranking = RankingEngine(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)
    logger.setLevel(LOG_LEVEL)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("scoreboard.app:app", host=HOST, port=PORT)
