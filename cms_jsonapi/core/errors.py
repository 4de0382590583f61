"""JSON:API error objects: building our own and reading the CMS's."""

from __future__ import annotations

import json
from typing import Any


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        candidates = {
            "status": status,
            "code": code,
            "title": title,
            "detail": detail,
            "source": source,
            "meta": meta,
        }
        error = {key: value for key, value in candidates.items() if value is not None}
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}

    def parse_errors(self, body: str | bytes | None) -> list[dict[str, Any]]:
        """Extract error objects from a CMS error response body.

        Bodies that are not JSON:API error documents yield an empty list.
        """
        if not body:
            return []
        try:
            payload = json.loads(body)
        except (TypeError, ValueError):
            return []
        if not isinstance(payload, dict):
            return []
        errors = payload.get("errors")
        if not isinstance(errors, list):
            return []
        return [error for error in errors if isinstance(error, dict)]
