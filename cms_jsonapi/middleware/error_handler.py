"""Render uncaught errors as JSON:API error documents."""

import logging
from typing import Any

from starlette.responses import JSONResponse

from cms_jsonapi.core.errors import JSONAPIErrorBuilder
from cms_jsonapi.core.exceptions import CMSError, CMSFetchError

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(self, app: Any) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.errors = JSONAPIErrorBuilder()

    def _error_response(self, exc: Exception) -> JSONResponse:
        if isinstance(exc, CMSFetchError):
            status_code = 502
            error = self.errors.error_object(
                status="502",
                title="Bad Gateway",
                detail=exc.message,
                meta={"upstream_status": exc.status_code, "upstream_errors": exc.errors},
            )
        elif isinstance(exc, CMSError):
            status_code = 500
            error = self.errors.error_object(
                status="500", title="Content Error", detail=exc.message
            )
        else:
            status_code = 500
            error = self.errors.error_object(
                status="500", title="Internal Server Error", detail=str(exc)
            )
        return JSONResponse(
            self.errors.error_document([error]),
            status_code=status_code,
            media_type="application/vnd.api+json",
        )

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:  # noqa: BLE001 - last-resort handler
            logger.exception("Unhandled error while serving %s", scope.get("path"))
            if response_started:
                # Headers are already out; nothing valid can be sent.
                raise
            response = self._error_response(exc)
            await response(scope, receive, send)
