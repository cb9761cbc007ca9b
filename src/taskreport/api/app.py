"""FastAPI application factory for the report REST API."""

from fastapi import APIRouter, FastAPI

from taskreport.api.routes import register_routes


def create_app(store) -> FastAPI:
    """Build and return a FastAPI app wired to the given ReportStore."""
    app = FastAPI(title="taskreport", docs_url="/api/docs", openapi_url="/api/openapi.json")

    api = APIRouter(prefix="/api")
    register_routes(api, store)
    app.include_router(api)

    return app
