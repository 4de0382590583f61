"""URL, query parameter and media type helpers."""

from .content_negotiation import is_json_response, parse_media_type
from .query_params import FetchOptions, build_query_params, parse_query_params
from .urls import build_api_url, to_absolute_url, to_safe_link_href

__all__ = [
    "FetchOptions",
    "build_api_url",
    "build_query_params",
    "is_json_response",
    "parse_media_type",
    "parse_query_params",
    "to_absolute_url",
    "to_safe_link_href",
]
