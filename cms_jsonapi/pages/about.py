"""About page processor."""

from __future__ import annotations

from typing import Any

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.normalizer import first_paragraph, normalize_text
from cms_jsonapi.core.resolver import (
    MEDIA_IMAGE_TYPE,
    find_included,
    relationship_references,
    resolve_media_entity_image,
)
from cms_jsonapi.pages.base import PageProcessor, media_include
from cms_jsonapi.schemas.pages import AboutPageContent, ImpactStat, TeamMember
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource
from cms_jsonapi.utils.query_params import FetchOptions

IMPACT_LABELS = (
    "Rural Communities Served",
    "Research Participants",
    "Clinical Trials Supported",
    "Research Phlebotomy Sites",
)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return list(value) if isinstance(value, (list, tuple)) else [value]


class AboutPageProcessor(PageProcessor):
    """Aggregate impact statistics and team member cards for the about page."""

    class Meta(PageProcessor.Meta):
        type_ = "node--page"
        endpoint = "node/page"
        fields = (
            "title",
            "body",
            "field_hero_image",
            "field_impact_text",
            "field_rcr_card_title",
            "field_rcr_card_description",
            "field_rcr_card_images",
        )
        include = media_include("field_hero_image") + media_include("field_rcr_card_images")
        content_model = AboutPageContent

    def fetch_options(self, client: Any) -> FetchOptions:
        options = super().fetch_options(client)
        options.filter["drupal_internal__nid"] = client.settings.about_page_nid
        return options

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> AboutPageContent:
        return AboutPageContent(
            title=self.title(entity),
            body=self.body(entity),
            hero_image_url=self.hero_image(entity, index, base_url),
            impact_stats=self.impact_stats(entity),
            team_members=self.team_members(entity, index, base_url),
        )

    def impact_stats(self, entity: JSONAPIResource) -> list[ImpactStat]:
        stats = []
        for position, stat in enumerate(_as_list(entity.attributes.get("field_impact_text"))):
            label = IMPACT_LABELS[position] if position < len(IMPACT_LABELS) else f"Stat {position + 1}"
            stats.append(
                ImpactStat(
                    id=f"impact-{position}",
                    number=normalize_text(stat, "plain").strip() or "0",
                    label=label,
                )
            )
        return stats

    def team_members(
        self, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> list[TeamMember]:
        # Each card image is one team member; names and bios line up by position.
        names = [
            normalize_text(title, "plain").strip()
            for title in _as_list(entity.attributes.get("field_rcr_card_title"))
        ]
        bios = [
            normalize_text(description, "html")
            for description in _as_list(entity.attributes.get("field_rcr_card_description"))
        ]

        members = []
        for position, reference in enumerate(
            relationship_references(entity, "field_rcr_card_images")
        ):
            media = find_included(index, reference, MEDIA_IMAGE_TYPE)
            image = resolve_media_entity_image(media, index, base_url) if media else None
            bio = bios[position] if position < len(bios) else ""
            members.append(
                TeamMember(
                    id=f"team-{position}",
                    name=names[position] if position < len(names) else f"Team Member {position + 1}",
                    role=first_paragraph(bio),
                    bio=bio,
                    image=image or "",
                )
            )
        return members
