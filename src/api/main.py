"""
FastAPI application factory

create_app() assembles routers, CORS and exception handlers. The app holds
no state of its own: endpoints reach the running services through
api.dependencies, so main_asyncio.py and the tests build the same app and
only differ in the container they install.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware.error_handler import register_exception_handlers
from api.routes import attributes, configurations, engine, states
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

API_PREFIX = "/api/v1"

ROUTERS = [
    attributes.router,
    configurations.router,
    configurations.impulse_router,
    states.router,
    engine.router,
]

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def create_app(
    title: str = "Glissando",
    description: str = "REST API for attribute transitions",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Build the API app

    Args:
        title: Shown in the OpenAPI docs
        description: Shown in the OpenAPI docs
        version: Reported by /api/health
        docs_enabled: Serve /docs, /redoc and /openapi.json
        cors_origins: Allowed browser origins (local dev servers by default)
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else DEFAULT_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/api/health", tags=["System"], summary="Health check")
    async def health_check():
        return {"status": "healthy", "service": "glissando-api", "version": version}

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": title, "docs": "/docs" if docs_enabled else None, "health": "/api/health"}

    log.info("API app created", title=title, version=version, routes=len(app.routes))
    return app
