"""Services page processor."""

from __future__ import annotations

import json
import logging
from typing import Any

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.normalizer import normalize_text
from cms_jsonapi.core.resolver import resolve_image_urls
from cms_jsonapi.pages.base import PageProcessor, media_include
from cms_jsonapi.schemas.pages import ServicesPageContent
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource
from cms_jsonapi.utils.query_params import FetchOptions, FilterCondition

logger = logging.getLogger(__name__)


def _text_item(item: Any) -> dict[str, Any]:
    if isinstance(item, dict):
        return item
    return {"description": normalize_text(item, "html")}


def parse_staggered_text(value: Any) -> list[dict[str, Any]]:
    """Normalize the staggered text field into a list of mappings.

    The field holds either a JSON string, a plain string, one object or a
    list of objects depending on how the content was entered.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.debug("Staggered text is not JSON; using it as one description")
            return [{"description": value}]
        if isinstance(value, str):
            return [{"description": value}]
    if isinstance(value, list):
        return [_text_item(item) for item in value]
    return [_text_item(value)]


class ServicesPageProcessor(PageProcessor):
    """Aggregate the hero and staggered image/text rows for the services page."""

    class Meta(PageProcessor.Meta):
        type_ = "node--page"
        endpoint = "node/page"
        include = (
            media_include("field_hero_image")
            + media_include("field_article_image")
            + media_include("field_staggered_images")
        )
        content_model = ServicesPageContent
        hero_fields = ("field_hero_image", "field_article_image")

    def fetch_options(self, client: Any) -> FetchOptions:
        options = super().fetch_options(client)
        options.filter["path.alias"] = FilterCondition(value=client.settings.services_path)
        return options

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> ServicesPageContent:
        return ServicesPageContent(
            title=self.title(entity),
            body=self.body(entity),
            hero_image_url=self.hero_image(entity, index, base_url),
            staggered_images=resolve_image_urls(entity, index, "field_staggered_images", base_url),
            staggered_text=parse_staggered_text(entity.attributes.get("field_staggered_text")),
        )
