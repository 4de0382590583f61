"""Helpers for turning CMS paths into absolute and link-safe URLs."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ABSOLUTE_URL_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_UNSAFE_SCHEMES = frozenset({"javascript", "vbscript", "data"})
_HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def is_absolute_url(url: str | None) -> bool:
    """Return True for ``scheme://`` URLs and inline ``data:`` URIs."""
    if not url:
        return False
    return bool(ABSOLUTE_URL_RE.match(url)) or url.startswith("data:")


def to_absolute_url(path: str | None, base_url: str) -> str:
    """Join a CMS path onto ``base_url`` unless it is already absolute."""
    if not path:
        return ""
    if is_absolute_url(path):
        return path
    base = (base_url or "").rstrip("/")
    clean_path = path if path.startswith("/") else f"/{path}"
    return f"{base}{clean_path}"


def _parses_as_absolute(url: str) -> bool:
    match = _SCHEME_RE.match(url)
    if not match:
        return False
    scheme = match.group(1).lower()
    if scheme in _UNSAFE_SCHEMES:
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if scheme in _HIERARCHICAL_SCHEMES:
        return bool(parts.netloc)
    return bool(parts.path or parts.netloc)


def to_safe_link_href(url: Any) -> str:
    """Return ``url`` when it is usable as an href, otherwise the site root."""
    if not isinstance(url, str) or not url or url == "#":
        return "/"
    if url.startswith("/"):
        return url
    if _parses_as_absolute(url.strip()):
        return url
    logger.warning("Invalid link URL, defaulting to site root", extra={"url": url})
    return "/"


def site_base_url(api_url: str | None) -> str:
    """Strip a ``/jsonapi`` suffix and trailing slashes from an API URL."""
    if not api_url:
        return ""
    return api_url.split("/jsonapi", 1)[0].rstrip("/")


def build_api_url(endpoint: str, base_url: str) -> str:
    """Build the JSON:API collection or resource URL for ``endpoint``.

    ``node/home_page`` and ``node--home_page`` both map to
    ``{base}/jsonapi/node/home_page``; a bare entity type maps to
    ``{base}/jsonapi/{type}``.
    """
    base = (base_url or "").rstrip("/")
    endpoint = endpoint.strip("/")
    if "/" not in endpoint and "--" in endpoint:
        entity, bundle = endpoint.split("--", 1)
        endpoint = f"{entity}/{bundle}"
    return f"{base}/jsonapi/{endpoint}"


def resource_type_for(endpoint: str) -> str:
    """Return the ``entity--bundle`` resource type addressed by ``endpoint``."""
    endpoint = endpoint.strip("/")
    if "--" in endpoint:
        return endpoint.split("/", 1)[0]
    parts = [part for part in endpoint.split("/") if part]
    if len(parts) >= 2:
        return f"{parts[0]}--{parts[1]}"
    return parts[0] if parts else ""
