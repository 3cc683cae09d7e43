"""FastAPI application factory. No business logic; only wiring, lifespan and middleware."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine

from pushups import __version__
from pushups.api import router as api_router
from pushups.api.pages import STATIC_DIR
from pushups.api.pages import router as pages_router
from pushups.core.config import settings
from pushups.core.database import create_session_factory, get_engine
from pushups.migrations import migrate

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # MigrationError propagates: never serve a partially migrated store.
    applied = migrate(app.state.engine)
    logger.info("Startup migrations complete (%s applied)", applied)
    yield


def create_app(engine: Engine | None = None) -> FastAPI:
    """Build the app around an explicit engine (defaults to DATABASE_URL's)."""
    app = FastAPI(
        title="Pushup Tracker",
        version=__version__,
        docs_url="/docs" if settings.APP_ENV == "dev" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.engine = engine if engine is not None else get_engine()
    app.state.session_factory = create_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.mount("/js", StaticFiles(directory=STATIC_DIR / "js"), name="js")
    # Catch-all /{secret} route must come last.
    app.include_router(pages_router)
    return app
