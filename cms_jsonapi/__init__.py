"""Resolve CMS JSON:API documents into page content."""

from .client import CMSClient
from .core.document import IncludedIndex, JSONAPIDocumentBuilder, merge_documents
from .core.normalizer import normalize_text
from .core.resolver import resolve_media_url, resolve_media_urls
from .schemas.resource import JSONAPIDocument, JSONAPIResource
from .utils.urls import to_absolute_url, to_safe_link_href

__all__ = [
    "CMSClient",
    "IncludedIndex",
    "JSONAPIDocument",
    "JSONAPIDocumentBuilder",
    "JSONAPIResource",
    "merge_documents",
    "normalize_text",
    "resolve_media_url",
    "resolve_media_urls",
    "to_absolute_url",
    "to_safe_link_href",
]
