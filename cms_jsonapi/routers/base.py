"""Router that exposes processed page content over HTTP."""

from typing import Any, Callable

from fastapi import APIRouter, Depends, Request

from cms_jsonapi.client import CMSClient
from cms_jsonapi.pages.base import PageProcessor
from cms_jsonapi.utils.query_params import parse_query_params


def get_cms_client(request: Request) -> CMSClient:
    """Return the client created by the application lifespan."""
    return request.app.state.cms_client


class ContentRouter(APIRouter):
    """APIRouter wrapper that registers one GET route per page processor."""

    def register_page(
        self,
        prefix: str,
        processor: PageProcessor,
        *,
        client_dependency: Callable[..., Any] = get_cms_client,
        name: str | None = None,
        dependencies: list[Any] | None = None,
    ) -> None:
        """Register ``GET {prefix}`` returning the processor's page content.

        Args:
            prefix: URL path for the page (e.g., "/pages/home")
            processor: Processor that loads and aggregates the page document.
            client_dependency: FastAPI dependency providing a ``CMSClient``.
            name: Route name for OpenAPI documentation.
            dependencies: Additional FastAPI dependencies for the route.

        Examples:
            router.register_page("/pages/about", AboutPageProcessor())
        """

        async def page_view(
            request: Request,
            client: CMSClient = Depends(client_dependency),
        ) -> dict[str, Any]:
            document = await processor.load(client)
            content = processor.process(document, base_url=client.base_url)
            params = parse_query_params(request.query_params)
            params["base_url"] = str(request.url.replace(query=""))
            return processor.render(content, params)

        self.register_view(
            prefix,
            page_view,
            name=name or prefix.strip("/").replace("/", "_"),
            dependencies=dependencies,
        )

    def register_view(
        self,
        path: str,
        view: Callable[..., Any],
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        dependencies: list[Any] | None = None,
    ) -> None:
        """Register a single view function with optional dependencies."""
        self.add_api_route(
            path,
            view,
            methods=methods or ["GET"],
            name=name,
            dependencies=dependencies or None,
        )
