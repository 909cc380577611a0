"""FastAPI application entry point."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from . import __version__
from .config import Settings
from .db import TaskStore, keep_connecting
from .errors import register_error_handlers
from .logging_setup import setup_logging
from .routers import items

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

DESCRIPTION = "Personal task tracker"

templates = Jinja2Templates(directory=TEMPLATES_DIR)

pages = APIRouter(tags=["status"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to the store, retrying in the background until it is up."""
    store: TaskStore = app.state.store
    reconnect = None
    if not await run_in_threadpool(store.connect):
        reconnect = asyncio.create_task(keep_connecting(store, app.state.settings.db_retry_delay))
    yield
    if reconnect is not None:
        reconnect.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reconnect
    store.close()


@pages.get("/")
def health(request: Request):
    """Service and store status."""
    return {
        "service": request.app.title,
        "status": "online",
        "db_status": "connected" if request.app.state.store.connected else "disconnected",
    }


@pages.get("/info")
def info(request: Request):
    return {
        "service": request.app.title,
        "version": __version__,
        "description": DESCRIPTION,
    }


@pages.get("/app", response_class=HTMLResponse)
def index(request: Request):
    """Render the main page."""
    return templates.TemplateResponse(request, "index.html", {"title": request.app.title})


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if store is None:
        store = TaskStore(settings.database_url)

    app = FastAPI(
        title=settings.app_name,
        description=DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(pages)
    app.include_router(items.router)
    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Starting %s on %s:%s (store %s)", settings.app_name, settings.host, settings.port, app.state.store.url)

    uvicorn.run(
        "tasktracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
