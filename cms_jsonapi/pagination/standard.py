"""page[offset]/page[limit] pagination for list content."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

from .base import PaginationBase


class StandardPagination(PaginationBase):
    """Offset/limit pagination that keeps active filters in its links."""

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit

    def _window(self, params: dict[str, Any]) -> tuple[int, int]:
        page = params.get("page", {})
        try:
            offset = int(page.get("offset", 0))
        except (TypeError, ValueError):
            offset = 0
        try:
            limit = int(page.get("limit", self.default_limit))
        except (TypeError, ValueError):
            limit = self.default_limit
        offset = max(offset, 0)
        limit = min(max(limit, 1), self.max_limit)
        return offset, limit

    def paginate_queryset(self, items: list[Any], params: dict[str, Any]) -> list[Any]:
        offset, limit = self._window(params)
        return items[offset : offset + limit]

    def get_links(self, *, total: int, params: dict[str, Any]) -> dict[str, str]:
        base_url = params.get("base_url")
        if not base_url:
            return {}
        offset, limit = self._window(params)
        filters = params.get("filter", {})

        def build_url(page_offset: int) -> str:
            split = urlsplit(base_url)
            query_params: dict[str, Any] = {
                f"filter[{key}]": ",".join(value) if isinstance(value, list) else value
                for key, value in filters.items()
            }
            query_params["page[offset]"] = page_offset
            query_params["page[limit]"] = limit
            return urlunsplit(
                (split.scheme, split.netloc, split.path, urlencode(query_params), split.fragment)
            )

        last_offset = (max(total - 1, 0) // limit) * limit
        links = {
            "self": build_url(offset),
            "first": build_url(0),
            "last": build_url(last_offset),
        }
        if offset - limit >= 0:
            links["prev"] = build_url(offset - limit)
        if offset + limit <= last_offset:
            links["next"] = build_url(offset + limit)
        return links

    def get_meta(self, *, total: int, params: dict[str, Any]) -> dict[str, Any]:
        offset, limit = self._window(params)
        return {"total": total, "limit": limit, "offset": offset}
