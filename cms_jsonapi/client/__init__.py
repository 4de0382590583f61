"""HTTP transport for the CMS JSON:API."""

from .base import CMSClient

__all__ = ["CMSClient"]
