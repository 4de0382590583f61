"""Normalize CMS field values into canonical text.

Text and formatted-text fields arrive in several shapes depending on the
field's cardinality and format:

    "plain string"
    {"value": "<p>raw</p>", "format": "basic_html", "processed": "<p>raw</p>"}
    [{"value": ..., "processed": ...}, ...]

Every helper here is total: malformed input degrades to an empty string
(or the caller's default) instead of raising.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Literal, Mapping

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

TextMode = Literal["plain", "html"]

TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_SIZE_UNITS = ("B", "KB", "MB", "GB")


def _stringify(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - arbitrary __str__ implementations
        logger.debug("Could not stringify field value of type %s", type(value).__name__)
        return ""


def _select_text(value: Any) -> str:
    # Self-containing sequences stop at the first repeat.
    seen: set[int] = set()
    while isinstance(value, (list, tuple)):
        if not value or id(value) in seen:
            return ""
        seen.add(id(value))
        value = value[0]
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        if value.get("processed") is not None:
            return _stringify(value["processed"])
        if value.get("value") is not None:
            return _stringify(value["value"])
    return _stringify(value)


def strip_tags(html: str | None) -> str:
    """Remove every ``<...>`` tag from ``html``."""
    if not html:
        return ""
    return TAG_RE.sub("", html)


def normalize_text(value: Any, mode: TextMode = "plain") -> str:
    """Return the canonical text of a CMS field value.

    Precedence: ``None`` -> ``""``; strings as-is; sequences by their first
    element; mappings by ``processed`` then ``value``; anything else via
    ``str()``. ``mode="plain"`` additionally strips tags, ``mode="html"``
    returns the chosen markup untouched (it is not sanitized).
    """
    text = _select_text(value)
    if mode == "plain":
        return strip_tags(text)
    return text


def get_field(data: Any, path: str, default: Any = None) -> Any:
    """Safely follow a dotted ``path`` through nested mappings."""
    if data is None:
        return default
    current = data
    for part in path.split("."):
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return default if current is None else current


def extract_paragraphs(html: str | None) -> list[str]:
    """Return the stripped text of each non-empty ``<p>`` element."""
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    paragraphs = []
    for element in soup.find_all("p"):
        text = element.get_text().strip()
        if text:
            paragraphs.append(text)
    return paragraphs


def first_paragraph(html: str | None) -> str:
    paragraphs = extract_paragraphs(html)
    return paragraphs[0] if paragraphs else ""


def html_to_text(html: str | None) -> str:
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "iframe"]):
        element.decompose()
    return _WHITESPACE_RE.sub(" ", soup.get_text()).strip()


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length].strip() + "..."
    return text


def generate_excerpt(html: str | None, max_length: int = 120) -> str:
    """Collapse ``html`` to plain text and truncate it with an ellipsis."""
    return _truncate(html_to_text(html), max_length)


def extract_summary(html: str | None, max_length: int = 160) -> str:
    """Prefer the first paragraph, falling back to all text."""
    if not html:
        return ""
    summary = first_paragraph(html) or html_to_text(html)
    return _truncate(summary, max_length)


def format_file_size(size: Any) -> str:
    try:
        size = float(size or 0)
    except (TypeError, ValueError):
        return "Unknown size"
    if size <= 0:
        return "Unknown size"

    unit_index = 0
    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    rounded = round(size, 1)
    if rounded.is_integer():
        rounded = int(rounded)
    return f"{rounded} {_SIZE_UNITS[unit_index]}"


def format_date(value: Any) -> str:
    """Format an ISO-8601 timestamp as ``Month D, YYYY``."""
    if isinstance(value, datetime):
        parsed: date = value
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return ""
    else:
        return ""
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"
