"""Toolbox resource library processor."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.normalizer import format_date, format_file_size, normalize_text
from cms_jsonapi.core.resolver import (
    FILE_TYPE,
    relationship_references,
    resolve_entity,
    resolve_file_url,
)
from cms_jsonapi.pages.base import PageProcessor, media_include
from cms_jsonapi.pagination import StandardPagination
from cms_jsonapi.schemas.pages import ToolboxPageContent, ToolboxResource
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource

logger = logging.getLogger(__name__)

FILE_FIELD = "field_resource_file"
DEFAULT_CATEGORY = "General"
DEFAULT_DESCRIPTION = "Download this resource file."


def resource_categories(resource: JSONAPIResource) -> list[str]:
    value = resource.attributes.get("field_resource_category") or []
    items = value if isinstance(value, list) else [value]
    return [category for category in (normalize_text(item, "plain").strip() for item in items) if category]


def collect_categories(resources: list[JSONAPIResource]) -> list[str]:
    """Return unique categories in first-seen order, or ``["General"]``."""
    categories: list[str] = []
    for resource in resources:
        for category in resource_categories(resource):
            if category not in categories:
                categories.append(category)
    return categories or [DEFAULT_CATEGORY]


class ToolboxPageProcessor(PageProcessor):
    """Aggregate downloadable toolbox resources and their categories."""

    class Meta(PageProcessor.Meta):
        type_ = "node--toolbox_resource"
        endpoint = "node/toolbox_resource"
        include = media_include("field_hero_image") + (FILE_FIELD,)
        content_model = ToolboxPageContent

    def __init__(self, pagination: StandardPagination | None = None) -> None:
        self.pagination = pagination or StandardPagination()

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> ToolboxPageContent:
        resources = document.entities()
        categories = collect_categories(resources)
        content = ToolboxPageContent(
            title=self.title(entity, "RCR Toolbox"),
            page_content=self.body(entity),
            hero_image_url=self.hero_image(entity, index, base_url),
            categories=categories,
            resources=[
                self.resource(resource, index, base_url, categories[0]) for resource in resources
            ],
        )
        logger.info(
            "Processed toolbox data",
            extra={
                "has_hero_image": content.hero_image_url is not None,
                "categories_count": len(content.categories),
                "resources_count": len(content.resources),
            },
        )
        return content

    def resource(
        self,
        resource: JSONAPIResource,
        index: IncludedIndex,
        base_url: str,
        default_category: str,
    ) -> ToolboxResource:
        attributes = resource.attributes
        # Responses for a single resource sometimes omit the relationship but
        # still include the file, so fall back to the first included file.
        has_reference = bool(relationship_references(resource, FILE_FIELD))
        file_entity = resolve_entity(resource, index, [(FILE_FIELD, FILE_TYPE)])
        if file_entity is None and not has_reference:
            file_entity = index.first_of_type(FILE_TYPE)
        file_attributes = file_entity.attributes if file_entity is not None else {}
        mime = file_attributes.get("filemime") or ""

        return ToolboxResource(
            id=resource.id or "",
            title=self.title(resource, "Untitled Resource"),
            description=normalize_text(attributes.get("field_resource_description"), "html")
            or DEFAULT_DESCRIPTION,
            file_url=resolve_file_url(
                resource, index, FILE_FIELD, base_url, fallback_to_first_included=True
            ),
            file_type=mime.split("/")[-1] if isinstance(mime, str) and mime else "pdf",
            file_size=format_file_size(file_attributes.get("filesize")),
            category=next(iter(resource_categories(resource)), default_category),
            last_updated=format_date(attributes.get("changed") or attributes.get("created")),
        )

    def render(self, content: BaseModel, params: dict[str, Any]) -> dict[str, Any]:
        """Serialize with ``filter[category]`` and page[offset]/page[limit] applied."""
        payload = content.model_dump(mode="json")
        resources = payload["resources"]
        category = params.get("filter", {}).get("category")
        if category:
            wanted = set(category) if isinstance(category, list) else {category}
            resources = [resource for resource in resources if resource["category"] in wanted]
        page = self.pagination.paginate(resources, params)
        payload["resources"] = page["items"]
        payload["links"] = page["links"]
        payload["meta"] = page["meta"]
        return payload
