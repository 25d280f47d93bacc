from fastapi import FastAPI

from searchcrawl.api.routers import create_crawls_router, create_systems_router


def create_app(container) -> FastAPI:
    """Return the FastAPI app wired to the container's session controller."""
    app = FastAPI(title="SearchCrawl")
    app.include_router(create_crawls_router(container.session_controller()))
    app.include_router(create_systems_router(container.config()))
    return app
