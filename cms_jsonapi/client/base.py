"""Async JSON:API transport for the CMS."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from cms_jsonapi.config import Settings
from cms_jsonapi.core.document import merge_documents
from cms_jsonapi.core.errors import JSONAPIErrorBuilder
from cms_jsonapi.core.exceptions import CMSConfigurationError, CMSFetchError
from cms_jsonapi.schemas.resource import JSONAPIDocument
from cms_jsonapi.utils.content_negotiation import JSONAPI_MEDIA_TYPE, is_json_response
from cms_jsonapi.utils.query_params import FetchOptions, build_query_params
from cms_jsonapi.utils.urls import build_api_url, resource_type_for

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 500


class CMSClient:
    """Fetch JSON:API documents from the CMS.

    ``fetch`` never raises for transport or HTTP failures: it logs and
    returns an empty document so pages render their defaults. ``fetch_strict``
    raises ``CMSFetchError`` instead. With ``settings.strict_fetch`` enabled
    ``fetch`` behaves like ``fetch_strict``.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not settings.site_base_url:
            raise CMSConfigurationError("CMS API URL is not configured")
        self.settings = settings
        self.base_url = settings.site_base_url
        self.auth_token = settings.auth_token
        self.strict = settings.strict_fetch
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.request_timeout, follow_redirects=True
        )
        self._errors = JSONAPIErrorBuilder()

    async def __aenter__(self) -> "CMSClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": JSONAPI_MEDIA_TYPE, "Content-Type": JSONAPI_MEDIA_TYPE}
        if self.auth_token:
            headers["Authorization"] = f"Basic {self.auth_token}"
        return headers

    def build_url(
        self,
        endpoint: str,
        options: FetchOptions | None = None,
        *,
        resource_type: str | None = None,
    ) -> str:
        """Return the full request URL for ``endpoint`` and ``options``.

        ``resource_type`` keys the sparse fieldset; it defaults to the type
        addressed by ``endpoint``.
        """
        api_url = build_api_url(endpoint, self.base_url)
        query = build_query_params(
            options or FetchOptions(), resource_type or resource_type_for(endpoint)
        )
        return f"{api_url}?{'&'.join(query)}" if query else api_url

    async def fetch_strict(
        self,
        endpoint: str,
        options: FetchOptions | None = None,
        *,
        resource_type: str | None = None,
    ) -> JSONAPIDocument:
        """Fetch ``endpoint`` and raise ``CMSFetchError`` on any failure."""
        url = self.build_url(endpoint, options, resource_type=resource_type)
        logger.info("Fetching CMS resource", extra={"endpoint": endpoint, "url": url})

        try:
            response = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise CMSFetchError(f"Request to CMS failed: {exc}", url=url) from exc

        if response.is_error:
            body = response.text[:ERROR_BODY_LIMIT]
            logger.error(
                "CMS returned an error response",
                extra={"status_code": response.status_code, "url": url, "body": body},
            )
            if response.status_code == 400 and options is not None:
                logger.error(
                    "Rejected request options",
                    extra={"fields": options.fields, "include": options.include},
                )
            raise CMSFetchError(
                f"CMS responded with status {response.status_code}",
                url=url,
                status_code=response.status_code,
                errors=self._errors.parse_errors(response.text),
            )

        content_type = response.headers.get("content-type")
        if content_type and not is_json_response(content_type):
            logger.warning(
                "Unexpected content type from CMS",
                extra={"content_type": content_type, "url": url},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CMSFetchError("CMS response was not valid JSON", url=url) from exc

        try:
            return JSONAPIDocument.model_validate(payload)
        except ValidationError as exc:
            raise CMSFetchError(
                f"CMS response is not a JSON:API document: {exc.error_count()} errors",
                url=url,
            ) from exc

    async def fetch(
        self,
        endpoint: str,
        options: FetchOptions | None = None,
        *,
        resource_type: str | None = None,
    ) -> JSONAPIDocument:
        """Fetch ``endpoint``, substituting an empty document on failure."""
        if self.strict:
            return await self.fetch_strict(endpoint, options, resource_type=resource_type)
        try:
            return await self.fetch_strict(endpoint, options, resource_type=resource_type)
        except CMSFetchError as exc:
            logger.error(
                "CMS fetch failed, using empty document",
                extra={"endpoint": endpoint, "error": exc.message},
            )
            return JSONAPIDocument.empty()

    async def discover_fields(self, content_type: str) -> tuple[list[str], list[str]]:
        """Return the attribute and relationship names of ``content_type``."""
        # No sparse fieldset: it would also hide the relationships.
        document = await self.fetch(content_type)
        entity = document.primary()
        if entity is None:
            return [], []
        fields = list(entity.attributes)
        relationships = list(entity.relationships)
        logger.info(
            "Discovered fields",
            extra={
                "content_type": content_type,
                "fields": fields,
                "relationships": relationships,
            },
        )
        return fields, relationships


    async def fetch_merged(
        self,
        endpoint: str,
        requests: Iterable[FetchOptions],
        *,
        resource_type: str | None = None,
    ) -> JSONAPIDocument:
        """Fetch ``endpoint`` once per option set and merge the responses.

        The CMS rejects queries that ask for too many fields and includes at
        once, so callers split them into chunks. The first chunk carries the
        essential data: when it comes back empty the whole result is empty.
        """
        documents = [
            await self.fetch(endpoint, options, resource_type=resource_type)
            for options in requests
        ]
        if not documents or documents[0].is_empty():
            logger.error("Failed to fetch primary chunk", extra={"endpoint": endpoint})
            return JSONAPIDocument.empty()
        logger.info(
            "Merging chunked responses",
            extra={"endpoint": endpoint, "responses": len(documents)},
        )
        return merge_documents(*documents)
