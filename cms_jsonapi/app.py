"""FastAPI application factory serving processed CMS page content."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cms_jsonapi.client import CMSClient
from cms_jsonapi.config import Settings, get_settings
from cms_jsonapi.core.logging import setup_logging
from cms_jsonapi.middleware import ErrorHandlerMiddleware
from cms_jsonapi.pages import (
    AboutPageProcessor,
    HomePageProcessor,
    LocationsPageProcessor,
    ServicesPageProcessor,
    ToolboxPageProcessor,
)
from cms_jsonapi.pagination import StandardPagination
from cms_jsonapi.routers import ContentRouter


def build_router(settings: Settings) -> ContentRouter:
    router = ContentRouter(prefix="/pages", tags=["pages"])
    router.register_page("/home", HomePageProcessor(), name="home_page")
    router.register_page("/about", AboutPageProcessor(), name="about_page")
    router.register_page("/services", ServicesPageProcessor(), name="services_page")
    router.register_page("/locations", LocationsPageProcessor(), name="locations_page")
    router.register_page(
        "/toolbox",
        ToolboxPageProcessor(
            StandardPagination(
                default_limit=settings.default_page_limit,
                max_limit=settings.max_page_limit,
            )
        ),
        name="toolbox_page",
    )
    return router


def create_app(settings: Settings | None = None, *, cms_client: CMSClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Uvicorn calls it with the --factory flag:
        uvicorn cms_jsonapi.app:create_app --factory
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        client = cms_client or CMSClient(settings)
        app.state.cms_client = client
        yield
        await client.aclose()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.add_middleware(ErrorHandlerMiddleware)
    app.include_router(build_router(settings))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
