"""Shared JSON:API fixtures shaped like CMS responses."""

from __future__ import annotations

from typing import Any

import pytest

from cms_jsonapi.schemas.resource import JSONAPIDocument
from tests.factories import file, media, ref


@pytest.fixture
def home_raw() -> dict[str, Any]:
    return {
        "data": [
            {
                "type": "node--home_page",
                "id": "home-1",
                "attributes": {
                    "title": "Rural Connections",
                    "body": {"value": "<p>Welcome</p>", "processed": "<p>Welcome</p>"},
                    "field_rcr_card_title": ["Toolbox", "Locations"],
                    "field_rcr_card_description": [
                        {"value": "<p>Guides</p>", "processed": "<p>Guides</p>"},
                    ],
                    "field_map_text_left": {"processed": "<p>Ada</p><p> </p><p>Boise</p>"},
                    "field_map_text_right": {"processed": "<p>Casper</p>"},
                    "field_why_rcr_description": {"value": "<p>Because</p>"},
                },
                "relationships": {
                    "field_hero_image": {"data": ref("media--image", "m-hero")},
                    "field_rcr_map_image": {"data": ref("media--image", "m-map")},
                    "field_rcr_card_images": {
                        "data": [ref("media--image", "m-card-1"), ref("media--image", "m-card-2")]
                    },
                    "field_partner_logo": {
                        "data": [ref("media--image", "m-partner"), ref("media--image", "m-gone")]
                    },
                },
            }
        ],
        "included": [
            media("m-hero", "f-hero"),
            file("f-hero", "/sites/default/files/hero.jpg"),
            media("m-map", "f-map"),
            file("f-map", "/sites/default/files/map.png"),
            media("m-card-1", "f-card-1", field_link={"uri": "https://example.org/toolbox"}),
            file("f-card-1", "/sites/default/files/card1.jpg"),
            media("m-card-2", "f-card-2"),
            media("m-partner", "f-partner", name="Partner Clinic"),
            file("f-partner", "/sites/default/files/partner.svg"),
        ],
    }


@pytest.fixture
def home_document(home_raw: dict[str, Any]) -> JSONAPIDocument:
    return JSONAPIDocument.model_validate(home_raw)
