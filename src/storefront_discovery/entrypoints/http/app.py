from fastapi import FastAPI

from storefront_discovery.entrypoints.http.exception_handlers import register_exception_handlers
from storefront_discovery.entrypoints.http.routes.discovery import router as discovery_router
from storefront_discovery.entrypoints.http.routes.health import router as health_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Discovery Stub API",
        description="""
        Local stand-in for the marketplace discovery backend.

        ## Features
        - Page through a deterministic demo catalog
        - Filter by text, category, price, rating, stock and country
        - Sort by trending, newest, price, rating or popularity

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(discovery_router, prefix="/v1")

    return app


app = build_app()
