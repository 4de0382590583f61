"""Base page processor for turning JSON:API documents into page content."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.normalizer import normalize_text
from cms_jsonapi.core.resolver import MEDIA_FILE_FIELD, resolve_image_url
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource
from cms_jsonapi.utils.query_params import FetchOptions


def media_include(field_name: str) -> tuple[str, ...]:
    """Return the include paths for a media image field and its file."""
    return (field_name, f"{field_name}.{MEDIA_FILE_FIELD}")


class PageProcessor:
    """Fetch and aggregate the content for one page template."""

    class Meta:
        """Processor metadata.

        ``type_`` and ``endpoint`` address the CMS resource; ``fields`` and
        ``include`` shape the request. ``content_model`` is the page content
        produced and ``hero_fields`` the image fields tried for the hero.
        """

        type_: str = ""
        endpoint: str = ""
        fields: tuple[str, ...] = ()
        include: tuple[str, ...] = ()
        content_model: type[BaseModel] = BaseModel
        hero_fields: tuple[str, ...] = ("field_hero_image",)

    def fetch_options(self, client: Any) -> FetchOptions:
        """Build the request options from ``Meta`` (override to add filters)."""
        return FetchOptions(fields=list(self.Meta.fields), include=list(self.Meta.include))

    async def load(self, client: Any) -> JSONAPIDocument:
        """Fetch the document this page is built from."""
        return await client.fetch(
            self.Meta.endpoint,
            self.fetch_options(client),
            resource_type=self.Meta.type_ or None,
        )

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> BaseModel:
        """Build page content from the primary entity (override in subclasses)."""
        raise NotImplementedError

    def process(self, document: JSONAPIDocument, *, base_url: str) -> BaseModel:
        """Return page content, or the content model's defaults when empty."""
        entity = document.primary()
        if entity is None:
            return self.default()
        return self.build(document, entity, IncludedIndex.from_document(document), base_url)

    def default(self) -> BaseModel:
        return self.Meta.content_model()

    def render(self, content: BaseModel, params: dict[str, Any]) -> dict[str, Any]:
        """Serialize page content for the HTTP response."""
        return content.model_dump(mode="json")

    def hero_image(
        self, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> str | None:
        """Try each hero field in turn, then the first included media image."""
        for field_name in self.Meta.hero_fields:
            url = resolve_image_url(entity, index, field_name, base_url)
            if url:
                return url
        return resolve_image_url(
            entity,
            index,
            self.Meta.hero_fields[0],
            base_url,
            fallback_to_first_included=True,
        )

    @staticmethod
    def title(entity: JSONAPIResource, default: str = "") -> str:
        return normalize_text(entity.attributes.get("title"), "plain") or default

    @staticmethod
    def body(entity: JSONAPIResource) -> str:
        return normalize_text(entity.attributes.get("body"), "html")


def pick_by_index(values: Any, index: int) -> Any:
    """Return ``values[index]``, falling back to the first value.

    Scalars are returned as-is so single-valued fields apply to every item.
    """
    if isinstance(values, (list, tuple)):
        if index < len(values) and values[index]:
            return values[index]
        return values[0] if values else None
    return values
