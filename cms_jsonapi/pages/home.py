"""Home page processor."""

from __future__ import annotations

from typing import Any

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.normalizer import extract_paragraphs, get_field, normalize_text
from cms_jsonapi.core.resolver import (
    MEDIA_IMAGE_TYPE,
    find_included,
    relationship_references,
    resolve_image_url,
    resolve_media_entity_image,
)
from cms_jsonapi.pages.base import PageProcessor, media_include, pick_by_index
from cms_jsonapi.schemas.pages import CardContent, HomePageContent, PartnerContent
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource
from cms_jsonapi.utils.query_params import FetchOptions
from cms_jsonapi.utils.urls import to_safe_link_href

WHY_FIELDS = ("field_why_rcr_description", "field_why_rcr")

# Requested after the basic chunk, one request each.
HOME_CHUNKS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("field_rcr_card_title", "field_rcr_card_description", "field_rcr_card_images"),
        media_include("field_rcr_card_images"),
    ),
    (("field_partner_logo",), media_include("field_partner_logo")),
    (("field_why_rcr_description", "field_map_text_left", "field_map_text_right"), ()),
)
# Only requested when the content type has them; unknown includes are rejected.
OPTIONAL_IMAGE_FIELDS = ("field_article_image", "field_rcr_map_image")


def map_locations(entity: JSONAPIResource, field_name: str) -> str:
    """Return the non-empty paragraphs of a formatted text field, one per line."""
    html = normalize_text(entity.attributes.get(field_name), "html")
    return "\n".join(extract_paragraphs(html))


def home_image(
    entity: JSONAPIResource, index: IncludedIndex, field_name: str, base_url: str
) -> str | None:
    """Resolve a home page image field, falling back to the first included media."""
    return resolve_image_url(
        entity, index, field_name, base_url, fallback_to_first_included=True
    )


def _why_section_text(sections: Any) -> str:
    if not isinstance(sections, list):
        sections = [sections]
    for section in sections:
        title = get_field(section, "field_section_title", "")
        if not isinstance(title, str):
            continue
        lowered = title.lower()
        if "why" in lowered and "rcr" in lowered:
            return normalize_text(get_field(section, "field_section_text"), "html")
    return ""


class HomePageProcessor(PageProcessor):
    """Aggregate hero images, cards, partners and map text for the home page."""

    class Meta(PageProcessor.Meta):
        type_ = "node--home_page"
        endpoint = "node/home_page"
        fields = ("title", "body", "field_hero_image", "field_rcr_logo")
        include = media_include("field_hero_image") + media_include("field_rcr_logo")
        content_model = HomePageContent

    def chunk_options(self, client: Any, relationships: list[str]) -> list[FetchOptions]:
        """Split the home page request into chunks the CMS accepts."""
        requests = [self.fetch_options(client)]
        requests.extend(
            FetchOptions(fields=list(fields), include=list(include))
            for fields, include in HOME_CHUNKS
        )
        requests.extend(
            FetchOptions(fields=[field_name], include=list(media_include(field_name)))
            for field_name in OPTIONAL_IMAGE_FIELDS
            if field_name in relationships
        )
        return requests

    async def load(self, client: Any) -> JSONAPIDocument:
        _, relationships = await client.discover_fields(self.Meta.endpoint)
        return await client.fetch_merged(
            self.Meta.endpoint,
            self.chunk_options(client, relationships),
            resource_type=self.Meta.type_,
        )

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> HomePageContent:
        attributes = entity.attributes
        return HomePageContent(
            title=self.title(entity),
            body=self.body(entity),
            hero_image_url=self.hero_image(entity, index, base_url),
            article_image_url=home_image(entity, index, "field_article_image", base_url),
            map_image_url=home_image(entity, index, "field_rcr_map_image", base_url),
            logo_url=resolve_image_url(entity, index, "field_rcr_logo", base_url),
            card_title=normalize_text(attributes.get("field_rcr_card_title"), "plain")
            or "Explore Our Resources",
            cards=self.cards(entity, index, base_url),
            partners=self.partners(entity, index, base_url),
            map_locations_left=map_locations(entity, "field_map_text_left"),
            map_locations_right=map_locations(entity, "field_map_text_right"),
            why_content=self.why_content(entity),
        )

    def cards(
        self, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> list[CardContent]:
        titles = entity.attributes.get("field_rcr_card_title") or []
        descriptions = entity.attributes.get("field_rcr_card_description") or []

        cards = []
        for position, reference in enumerate(
            relationship_references(entity, "field_rcr_card_images")
        ):
            media = find_included(index, reference, MEDIA_IMAGE_TYPE)
            cards.append(
                CardContent(
                    title=normalize_text(pick_by_index(titles, position), "plain"),
                    description=normalize_text(pick_by_index(descriptions, position), "html"),
                    image_url=resolve_media_entity_image(media, index, base_url) if media else None,
                    link=to_safe_link_href(get_field(media, "attributes.field_link.uri", "#")),
                    name=normalize_text(get_field(media, "attributes.name", "Resource"), "plain"),
                )
            )
        return cards

    def partners(
        self, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> list[PartnerContent]:
        partners = []
        for reference in relationship_references(entity, "field_partner_logo"):
            media = find_included(index, reference, MEDIA_IMAGE_TYPE)
            partners.append(
                PartnerContent(
                    id=reference.id,
                    name=normalize_text(get_field(media, "attributes.name", "Partner"), "plain"),
                    logo_url=resolve_media_entity_image(media, index, base_url) if media else None,
                    link=to_safe_link_href(get_field(media, "attributes.field_link.uri", "#")),
                )
            )
        return partners

    def why_content(self, entity: JSONAPIResource) -> str:
        """Return the "Why RCR?" copy from the first field that has it."""
        for field_name in WHY_FIELDS:
            content = normalize_text(entity.attributes.get(field_name), "html")
            if content:
                return content
        sections = entity.attributes.get("field_section_content")
        if sections:
            return _why_section_text(sections)
        return ""
