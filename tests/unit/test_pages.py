"""Tests for page processors built on fixture documents."""

from __future__ import annotations

from typing import Any

import pytest

from cms_jsonapi.pages import (
    AboutPageProcessor,
    HomePageProcessor,
    LocationsPageProcessor,
    ServicesPageProcessor,
    ToolboxPageProcessor,
)
from cms_jsonapi.pages.base import pick_by_index
from cms_jsonapi.pages.services import parse_staggered_text
from cms_jsonapi.pages.toolbox import collect_categories
from cms_jsonapi.pagination import StandardPagination
from cms_jsonapi.schemas.pages import HomePageContent, ToolboxPageContent
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource
from tests.factories import BASE_URL, file, media, ref


def document(data: Any, included: list[dict[str, Any]] | None = None) -> JSONAPIDocument:
    return JSONAPIDocument.model_validate({"data": data, "included": included or []})


def test_home_page_content(home_document: JSONAPIDocument) -> None:
    content = HomePageProcessor().process(home_document, base_url=BASE_URL)

    assert content.title == "Rural Connections"
    assert content.body == "<p>Welcome</p>"
    assert content.hero_image_url == "https://cms.example.com/sites/default/files/hero.jpg"
    assert content.map_image_url == "https://cms.example.com/sites/default/files/map.png"
    # No article image relationship: the first included media stands in.
    assert content.article_image_url == "https://cms.example.com/sites/default/files/hero.jpg"
    assert content.logo_url is None
    assert content.map_locations_left == "Ada\nBoise"
    assert content.map_locations_right == "Casper"
    assert content.why_content == "<p>Because</p>"


def test_home_page_cards(home_document: JSONAPIDocument) -> None:
    cards = HomePageProcessor().process(home_document, base_url=BASE_URL).cards

    assert [card.title for card in cards] == ["Toolbox", "Locations"]
    assert cards[0].description == "<p>Guides</p>"
    assert cards[0].image_url == "https://cms.example.com/sites/default/files/card1.jpg"
    assert cards[0].link == "https://example.org/toolbox"
    assert cards[0].name == "Media m-card-1"
    # The second card's file is missing from included.
    assert cards[1].image_url is None
    assert cards[1].link == "/"


def test_home_page_partners_keep_unresolved_entries(home_document: JSONAPIDocument) -> None:
    partners = HomePageProcessor().process(home_document, base_url=BASE_URL).partners

    assert [partner.id for partner in partners] == ["m-partner", "m-gone"]
    assert partners[0].name == "Partner Clinic"
    assert partners[0].logo_url == "https://cms.example.com/sites/default/files/partner.svg"
    assert partners[1].name == "Partner"
    assert partners[1].logo_url is None


def test_home_page_defaults_for_empty_document() -> None:
    content = HomePageProcessor().process(JSONAPIDocument.empty(), base_url=BASE_URL)

    assert content == HomePageContent()
    assert content.card_title == "Explore Our Resources"


def test_home_page_images_fall_back_to_first_included_media() -> None:
    doc = document(
        [{"type": "node--home_page", "id": "h", "attributes": {"title": "Home"}}],
        [media("m1", "f1"), file("f1", "/fallback.jpg")],
    )

    content = HomePageProcessor().process(doc, base_url=BASE_URL)

    assert content.hero_image_url == "https://cms.example.com/fallback.jpg"
    assert content.article_image_url == "https://cms.example.com/fallback.jpg"
    assert content.map_image_url == "https://cms.example.com/fallback.jpg"
    assert content.logo_url is None


def test_home_page_why_content_from_sections() -> None:
    doc = document(
        {
            "type": "node--home_page",
            "id": "h",
            "attributes": {
                "field_section_content": [
                    {"field_section_title": "About", "field_section_text": "<p>No</p>"},
                    {"field_section_title": "Why RCR?", "field_section_text": "<p>Yes</p>"},
                ]
            },
        }
    )

    assert HomePageProcessor().process(doc, base_url=BASE_URL).why_content == "<p>Yes</p>"


def test_about_page_stats_and_team() -> None:
    doc = document(
        [
            {
                "type": "node--page",
                "id": "about",
                "attributes": {
                    "title": "About",
                    "field_impact_text": ["42", {"value": "<b>1,200</b>"}, "", "7", "3"],
                    "field_rcr_card_title": ["Dr. Ada"],
                    "field_rcr_card_description": [{"processed": "<p>Director</p><p>Leads</p>"}],
                },
                "relationships": {
                    "field_rcr_card_images": {
                        "data": [ref("media--image", "m1"), ref("media--image", "m2")]
                    }
                },
            }
        ],
        [media("m1", "f1"), file("f1", "/ada.jpg")],
    )

    content = AboutPageProcessor().process(doc, base_url=BASE_URL)

    assert [(stat.number, stat.label) for stat in content.impact_stats] == [
        ("42", "Rural Communities Served"),
        ("1,200", "Research Participants"),
        ("0", "Clinical Trials Supported"),
        ("7", "Research Phlebotomy Sites"),
        ("3", "Stat 5"),
    ]
    first, second = content.team_members
    assert first.name == "Dr. Ada"
    assert first.role == "Director"
    assert first.bio == "<p>Director</p><p>Leads</p>"
    assert first.image == "https://cms.example.com/ada.jpg"
    assert second.name == "Team Member 2"
    assert second.bio == ""
    assert second.image == ""


def test_services_page() -> None:
    doc = document(
        [
            {
                "type": "node--page",
                "id": "services",
                "attributes": {
                    "title": "Services",
                    "field_staggered_text": '[{"title": "Draws", "description": "<p>Blood</p>"}]',
                },
                "relationships": {
                    "field_article_image": {"data": ref("media--image", "m-article")},
                    "field_staggered_images": {
                        "data": [ref("media--image", "m2"), ref("media--image", "m1")]
                    },
                },
            }
        ],
        [
            media("m-article", "f-article"),
            file("f-article", "/article.jpg"),
            media("m1", "f1"),
            file("f1", "/one.jpg"),
            media("m2", "f2"),
            file("f2", "/two.jpg"),
        ],
    )

    content = ServicesPageProcessor().process(doc, base_url=BASE_URL)

    assert content.title == "Services"
    assert content.hero_image_url == "https://cms.example.com/article.jpg"
    assert content.staggered_images == [
        "https://cms.example.com/two.jpg",
        "https://cms.example.com/one.jpg",
    ]
    assert content.staggered_text == [{"title": "Draws", "description": "<p>Blood</p>"}]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("Plain words", [{"description": "Plain words"}]),
        ('"quoted"', [{"description": "quoted"}]),
        ({"title": "One"}, [{"title": "One"}]),
        ([{"title": "A"}, {"value": "<p>B</p>"}], [{"title": "A"}, {"value": "<p>B</p>"}]),
        (["<p>C</p>"], [{"description": "<p>C</p>"}]),
    ],
)
def test_parse_staggered_text(value: Any, expected: list[dict[str, Any]]) -> None:
    assert parse_staggered_text(value) == expected


def test_locations_page(home_document: JSONAPIDocument) -> None:
    content = LocationsPageProcessor().process(home_document, base_url=BASE_URL)

    assert content.map_image_url == "https://cms.example.com/sites/default/files/map.png"
    assert content.locations_left == "Ada\nBoise"
    assert content.locations_right == "Casper"


def toolbox_document() -> JSONAPIDocument:
    return document(
        [
            {
                "type": "node--toolbox_resource",
                "id": "r1",
                "attributes": {
                    "title": "Consent Guide",
                    "field_resource_description": {"processed": "<p>How to consent</p>"},
                    "field_resource_category": "Guides",
                    "changed": "2024-03-05T10:00:00+00:00",
                },
                "relationships": {"field_resource_file": {"data": ref("file--file", "f1")}},
            },
            {
                "type": "node--toolbox_resource",
                "id": "r2",
                "attributes": {"title": "Intake Form", "field_resource_category": ["Forms"]},
                "relationships": {"field_resource_file": {"data": ref("file--file", "missing")}},
            },
            {
                "type": "node--toolbox_resource",
                "id": "r3",
                "attributes": {"title": None},
            },
        ],
        [
            file(
                "f1",
                "/sites/default/files/consent.docx",
                filemime="application/msword",
                filesize=1536,
            )
        ],
    )


def test_toolbox_resources() -> None:
    content = ToolboxPageProcessor().process(toolbox_document(), base_url=BASE_URL)

    assert content.title == "Consent Guide"
    assert content.categories == ["Guides", "Forms"]
    first, second, third = content.resources
    assert first.file_url == "https://cms.example.com/sites/default/files/consent.docx"
    assert first.file_type == "msword"
    assert first.file_size == "1.5 KB"
    assert first.category == "Guides"
    assert first.description == "<p>How to consent</p>"
    assert first.last_updated == "March 5, 2024"
    assert second.file_url == "#"
    assert second.file_type == "pdf"
    assert second.file_size == "Unknown size"
    assert second.category == "Forms"
    assert second.description == "Download this resource file."
    # No relationship at all: the first included file stands in.
    assert third.title == "Untitled Resource"
    assert third.category == "Guides"
    assert third.file_url == "https://cms.example.com/sites/default/files/consent.docx"


def test_toolbox_defaults_for_empty_document() -> None:
    content = ToolboxPageProcessor().process(JSONAPIDocument.empty(), base_url=BASE_URL)

    assert content == ToolboxPageContent()
    assert content.categories == ["General"]
    assert content.page_content == (
        "<p>Access these resources to support your rural clinical research efforts.</p>"
    )


def test_toolbox_render_filters_and_paginates() -> None:
    processor = ToolboxPageProcessor(StandardPagination(default_limit=1))
    content = processor.process(toolbox_document(), base_url=BASE_URL)

    payload = processor.render(
        content,
        {
            "page": {"offset": 0},
            "filter": {"category": "Guides"},
            "base_url": "http://testserver/pages/toolbox",
        },
    )

    assert [resource["id"] for resource in payload["resources"]] == ["r1"]
    assert payload["meta"] == {"total": 2, "limit": 1, "offset": 0}
    assert payload["links"]["next"] == (
        "http://testserver/pages/toolbox?filter%5Bcategory%5D=Guides"
        "&page%5Boffset%5D=1&page%5Blimit%5D=1"
    )
    assert "prev" not in payload["links"]


def test_collect_categories() -> None:
    resources = [
        JSONAPIResource(type="node--toolbox_resource", id="1", attributes={}),
        JSONAPIResource(
            type="node--toolbox_resource",
            id="2",
            attributes={"field_resource_category": ["B", "A", "B"]},
        ),
    ]

    assert collect_categories(resources) == ["B", "A"]
    assert collect_categories(resources[:1]) == ["General"]


def test_pick_by_index() -> None:
    assert pick_by_index(["a", "b"], 1) == "b"
    assert pick_by_index(["a", ""], 1) == "a"
    assert pick_by_index(["a"], 5) == "a"
    assert pick_by_index([], 0) is None
    assert pick_by_index("only", 3) == "only"


def test_home_page_card_with_non_string_link() -> None:
    doc = document(
        {
            "type": "node--home_page",
            "id": "h",
            "attributes": {"field_rcr_card_title": ["Card"]},
            "relationships": {"field_rcr_card_images": {"data": [ref("media--image", "m1")]}},
        },
        [media("m1", "f1", field_link={"uri": 12345}), file("f1", "/card.jpg")],
    )

    cards = HomePageProcessor().process(doc, base_url=BASE_URL).cards

    assert cards[0].link == "/"
