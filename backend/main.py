import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from pathlib import Path

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.api.routers import catalog, sessions, system
from backend.core.logging import setup_logging
from backend.core.websockets import ws_manager
from backend.middleware.timing import TimingMiddleware
from backend.services.catalog_service import CatalogService
from backend.services.session_service import SessionService
from generator import __version__
from generator.catalog import CatalogEntry, load_catalog
from generator.config import GeneratorConfig, load_generator_config

logger = logging.getLogger("springyaml.main")

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    catalog_service: CatalogService = app.state.catalog_service
    logger.info(
        "Spring YAML Generator starting with %d catalog entries", len(catalog_service.entries)
    )
    yield
    logger.info("Spring YAML Generator shutting down")
    await catalog_service.invalidate()


def create_app(
    config: GeneratorConfig | None = None,
    catalog_entries: Sequence[CatalogEntry] | None = None,
) -> socketio.ASGIApp:
    """Factory to create the ASGI app."""
    setup_logging()
    config = config or load_generator_config()
    if catalog_entries is None:
        catalog_entries = load_catalog(config.catalog.path)

    # 1. Create FastAPI App
    app = FastAPI(
        title="Spring YAML Generator",
        version=__version__,
        description="Visual editor for Spring Boot application.yml files",
        lifespan=lifespan,
    )
    app.state.catalog_service = CatalogService(
        catalog_entries, cache_ttl_seconds=config.catalog.cache_ttl_seconds
    )
    app.state.session_service = SessionService(
        max_sessions=config.sessions.max_sessions,
        empty_placeholder=config.output.empty_placeholder,
        error_placeholder=config.output.error_placeholder,
    )

    # 2. CORS
    ws_manager.configure_cors(config.server.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 3. Timing Middleware
    app.add_middleware(TimingMiddleware)

    # 4. Mount Routers
    app.include_router(system.router)
    app.include_router(catalog.router)
    app.include_router(sessions.router)

    # 5. Mount Static Files (Frontend)
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
    else:
        logger.warning(f"Static directory not found at {STATIC_DIR}. Frontend will not be served.")

    # 6. Wrap with Socket.IO ASGI App
    # This intercepts /socket.io requests and passes others to FastAPI
    return socketio.ASGIApp(ws_manager.sio, other_asgi_app=app)


# The entry point for uvicorn
# Usage: uvicorn backend.main:app
app: socketio.ASGIApp = create_app()
