"""Pagination base class for list content."""

from typing import Any


class PaginationBase:
    """Slice a list and describe the slice with links and meta.

    Subclasses supply the three hooks; ``paginate`` combines them.
    """

    def paginate_queryset(self, items: list[Any], params: dict[str, Any]) -> list[Any]:
        raise NotImplementedError

    def get_links(self, *, total: int, params: dict[str, Any]) -> dict[str, str]:
        raise NotImplementedError

    def get_meta(self, *, total: int, params: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    def paginate(self, items: list[Any], params: dict[str, Any]) -> dict[str, Any]:
        """Return ``{"items", "links", "meta"}`` for the requested window."""
        total = len(items)
        return {
            "items": self.paginate_queryset(items, params),
            "links": self.get_links(total=total, params=params),
            "meta": self.get_meta(total=total, params=params),
        }
