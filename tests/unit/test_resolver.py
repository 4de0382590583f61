"""Tests for relationship chain resolution through ``included``."""

from typing import Any

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.core.resolver import (
    FILE_PLACEHOLDER,
    FILE_TYPE,
    MEDIA_IMAGE_TYPE,
    find_included,
    media_image_chain,
    resolve_entity,
    resolve_file_url,
    resolve_image_url,
    resolve_image_urls,
    resolve_media_url,
    resolve_media_urls,
)
from cms_jsonapi.schemas.resource import (
    JSONAPIDocument,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)
from tests.factories import BASE_URL, file, media, ref

HERO_CHAIN = media_image_chain("field_hero_image")


def node(**relationships: Any) -> JSONAPIResource:
    return JSONAPIResource.model_validate(
        {
            "type": "node--page",
            "id": "n-1",
            "attributes": {"title": "Page"},
            "relationships": {name: {"data": data} for name, data in relationships.items()},
        }
    )


def included(*raw: dict[str, Any]) -> list[JSONAPIResource]:
    return [JSONAPIResource.model_validate(item) for item in raw]


def test_full_chain_resolves_to_absolute_file_url() -> None:
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    side = included(media("m1", "f1"), file("f1", "/sites/default/files/hero.jpg"))

    url = resolve_media_url(root, side, HERO_CHAIN, BASE_URL)

    assert url == "https://cms.example.com/sites/default/files/hero.jpg"


def test_absolute_file_url_is_kept() -> None:
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    side = included(media("m1", "f1"), file("f1", "https://cdn.example.com/hero.jpg"))

    assert resolve_media_url(root, side, HERO_CHAIN, BASE_URL) == "https://cdn.example.com/hero.jpg"


def test_missing_relationship_resolves_to_none() -> None:
    root = node()
    side = included(media("m1", "f1"), file("f1", "/x.jpg"))

    assert resolve_media_url(root, side, HERO_CHAIN, BASE_URL) is None


def test_dangling_reference_resolves_to_none() -> None:
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    side = included(media("m1", "missing-file"))

    assert resolve_media_url(root, side, HERO_CHAIN, BASE_URL) is None


def test_type_mismatch_counts_as_not_found() -> None:
    root = node(field_hero_image=ref("media--document", "m1"))
    side = included(
        {"type": "media--document", "id": "m1", "relationships": {}},
        media("m1", "f1"),
        file("f1", "/x.jpg"),
    )

    assert resolve_media_url(root, side, HERO_CHAIN, BASE_URL) is None


def test_identity_is_type_and_id() -> None:
    # Same id under another type must not satisfy the lookup.
    side = IncludedIndex(included(file("shared", "/a.pdf"), media("shared", "f")))
    reference = JSONAPIResourceIdentifier(type=FILE_TYPE, id="shared")

    found = find_included(side, reference, FILE_TYPE)

    assert found is not None
    assert found.type == FILE_TYPE


def test_file_without_uri_resolves_to_none() -> None:
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    side = included(media("m1", "f1"), {"type": FILE_TYPE, "id": "f1", "attributes": {}})

    assert resolve_media_url(root, side, HERO_CHAIN, BASE_URL) is None


def test_bare_url_attribute_is_accepted() -> None:
    root = node(field_file=ref(FILE_TYPE, "f1"))
    side = included({"type": FILE_TYPE, "id": "f1", "attributes": {"url": "/files/doc.pdf"}})

    assert resolve_media_url(root, side, [("field_file", FILE_TYPE)], BASE_URL) == (
        "https://cms.example.com/files/doc.pdf"
    )


def test_first_reference_wins() -> None:
    root = node(field_hero_image=[ref(MEDIA_IMAGE_TYPE, "m1"), ref(MEDIA_IMAGE_TYPE, "m2")])
    side = included(
        media("m1", "f1"),
        file("f1", "/first.jpg"),
        media("m2", "f2"),
        file("f2", "/second.jpg"),
    )

    assert resolve_image_url(root, side, "field_hero_image", BASE_URL) == (
        "https://cms.example.com/first.jpg"
    )


def test_self_referencing_entity_terminates() -> None:
    looping = {
        "type": MEDIA_IMAGE_TYPE,
        "id": "m1",
        "relationships": {"field_media_image": {"data": ref(MEDIA_IMAGE_TYPE, "m1")}},
    }
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    chain = [("field_hero_image", MEDIA_IMAGE_TYPE)] + [("field_media_image", None)] * 5

    assert resolve_media_url(root, included(looping), chain, BASE_URL) is None


def test_resolve_entity_returns_last_hop() -> None:
    root = node(field_hero_image=ref(MEDIA_IMAGE_TYPE, "m1"))
    side = included(media("m1", "f1"), file("f1", "/x.jpg"))

    entity = resolve_entity(root, side, HERO_CHAIN)

    assert entity is not None
    assert entity.key == (FILE_TYPE, "f1")


def test_fallback_to_first_included_when_relationship_absent() -> None:
    root = node()
    side = included(media("m9", "f9"), file("f9", "/fallback.jpg"))

    assert resolve_image_url(root, side, "field_hero_image", BASE_URL) is None
    assert resolve_image_url(
        root, side, "field_hero_image", BASE_URL, fallback_to_first_included=True
    ) == "https://cms.example.com/fallback.jpg"


def test_resolve_media_urls_preserves_order_and_drops_failures() -> None:
    root = node(
        field_staggered_images=[
            ref(MEDIA_IMAGE_TYPE, "m2"),
            ref(MEDIA_IMAGE_TYPE, "gone"),
            ref(MEDIA_IMAGE_TYPE, "m1"),
            ref(MEDIA_IMAGE_TYPE, "m3"),
        ]
    )
    side = included(
        media("m1", "f1"),
        file("f1", "/one.jpg"),
        media("m2", "f2"),
        file("f2", "/two.jpg"),
        media("m3", "f-missing"),
    )

    urls = resolve_media_urls(root, side, media_image_chain("field_staggered_images"), BASE_URL)

    assert urls == ["https://cms.example.com/two.jpg", "https://cms.example.com/one.jpg"]


def test_resolve_image_urls_empty_relationship() -> None:
    root = node(field_staggered_images=[])

    assert resolve_image_urls(root, [], "field_staggered_images", BASE_URL) == []


def test_resolve_file_url_placeholder() -> None:
    root = node(field_resource_file=ref(FILE_TYPE, "nope"))

    assert resolve_file_url(root, [], "field_resource_file", BASE_URL) == FILE_PLACEHOLDER


def test_resolves_against_fixture_document(home_document: JSONAPIDocument) -> None:
    home = home_document.primary()
    index = IncludedIndex.from_document(home_document)

    assert resolve_image_url(home, index, "field_hero_image", BASE_URL) == (
        "https://cms.example.com/sites/default/files/hero.jpg"
    )
    assert resolve_image_urls(home, index, "field_rcr_card_images", BASE_URL) == [
        "https://cms.example.com/sites/default/files/card1.jpg"
    ]
