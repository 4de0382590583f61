"""Recognise JSON media types on CMS responses."""

from __future__ import annotations

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
JSON_MEDIA_TYPES = frozenset({JSONAPI_MEDIA_TYPE, "application/json"})


def parse_media_type(content_type: str | None) -> tuple[str, dict[str, str]]:
    """Split a Content-Type header into its media type and parameters.

    ``'application/vnd.api+json; ext="a b"'`` -> ``("application/vnd.api+json", {"ext": "a b"})``
    """
    media_type, *raw_params = (content_type or "").split(";")
    params: dict[str, str] = {}
    for raw in raw_params:
        name, sep, value = raw.partition("=")
        if sep:
            params[name.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params


def is_json_response(content_type: str | None) -> bool:
    """Return True when the header names JSON:API or plain JSON."""
    return parse_media_type(content_type)[0] in JSON_MEDIA_TYPES
