"""Core JSON:API document, resolution and normalization helpers."""

from .document import IncludedIndex, JSONAPIDocumentBuilder, merge_documents
from .errors import JSONAPIErrorBuilder
from .normalizer import normalize_text
from .resolver import resolve_media_url, resolve_media_urls

__all__ = [
    "IncludedIndex",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "merge_documents",
    "normalize_text",
    "resolve_media_url",
    "resolve_media_urls",
]
