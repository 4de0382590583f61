"""Pydantic schemas for JSON:API documents and page content."""

from .pages import (
    AboutPageContent,
    HomePageContent,
    LocationsPageContent,
    ServicesPageContent,
    ToolboxPageContent,
)
from .resource import (
    JSONAPIDocument,
    JSONAPIErrorDocument,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

__all__ = [
    "AboutPageContent",
    "HomePageContent",
    "JSONAPIDocument",
    "JSONAPIErrorDocument",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "LocationsPageContent",
    "ServicesPageContent",
    "ToolboxPageContent",
]
