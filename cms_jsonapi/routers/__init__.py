"""HTTP routing for page content."""

from .base import ContentRouter, get_cms_client

__all__ = ["ContentRouter", "get_cms_client"]
