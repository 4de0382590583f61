"""Resolve relationship chains through a document's ``included`` side-table.

A chain is an ordered list of ``(field_name, expected_type)`` hops, e.g.::

    [("field_hero_image", "media--image"), ("field_media_image", "file--file")]

walks node -> media entity -> file entity and yields the file's URL. Every
failure (missing relationship, dangling reference, type mismatch, missing
``uri``) resolves to ``None``; nothing here raises on bad content.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.schemas.resource import JSONAPIResource, JSONAPIResourceIdentifier
from cms_jsonapi.utils.urls import to_absolute_url

logger = logging.getLogger(__name__)

MEDIA_IMAGE_TYPE = "media--image"
FILE_TYPE = "file--file"
MEDIA_FILE_FIELD = "field_media_image"

# Inline SVG reading "No Image Available" for callers that need a placeholder.
FALLBACK_IMAGE = (
    "data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iNDAwIiBoZWlnaHQ9IjMwMCIgeG1sbnM9Imh0dHA6"
    "Ly93d3cudzMub3JnLzIwMDAvc3ZnIj48cmVjdCB3aWR0aD0iNDAwIiBoZWlnaHQ9IjMwMCIgZmlsbD0iI2Yz"
    "ZjRmNiIvPjx0ZXh0IHg9IjUwJSIgeT0iNTAlIiBmb250LWZhbWlseT0iQXJpYWwiIGZvbnQtc2l6ZT0iMzIi"
    "IGZpbGw9IiM5Y2EzYWYiIHRleHQtYW5jaG9yPSJtaWRkbGUiIGR5PSIuM2VtIj5ObyBJbWFnZSBBdmFpbGFi"
    "bGU8L3RleHQ+PC9zdmc+"
)
FILE_PLACEHOLDER = "#"

ChainStep = Tuple[str, Optional[str]]
RelationshipChain = Sequence[ChainStep]
IncludedLike = Union[IncludedIndex, Iterable[JSONAPIResource]]


def media_image_chain(field_name: str) -> list[ChainStep]:
    """Return the node -> media image -> file chain for ``field_name``."""
    return [(field_name, MEDIA_IMAGE_TYPE), (MEDIA_FILE_FIELD, FILE_TYPE)]


def _as_index(included: IncludedLike) -> IncludedIndex:
    if isinstance(included, IncludedIndex):
        return included
    return IncludedIndex(included or ())


def relationship_references(
    entity: JSONAPIResource | None, field_name: str
) -> list[JSONAPIResourceIdentifier]:
    """Return the references stored under ``field_name`` as a list."""
    if entity is None:
        return []
    relationship = entity.relationship(field_name)
    if relationship is None:
        return []
    return relationship.references()


def find_included(
    included: IncludedLike,
    reference: JSONAPIResourceIdentifier,
    expected_type: str | None = None,
) -> JSONAPIResource | None:
    """Look up ``reference`` by identity, rejecting unexpected types."""
    if expected_type is not None and reference.type != expected_type:
        logger.debug(
            "Reference type mismatch",
            extra={"reference": reference.key, "expected_type": expected_type},
        )
        return None
    return _as_index(included).get(reference)


def entity_file_url(entity: JSONAPIResource | None) -> str | None:
    """Return the raw ``uri.url`` (or bare ``url``) attribute of a file entity."""
    if entity is None:
        return None
    uri = entity.attributes.get("uri")
    if isinstance(uri, dict) and isinstance(uri.get("url"), str) and uri["url"]:
        return uri["url"]
    url = entity.attributes.get("url")
    if isinstance(url, str) and url:
        return url
    return None


def _follow(
    current: JSONAPIResource,
    index: IncludedIndex,
    chain: RelationshipChain,
) -> JSONAPIResource | None:
    # Bounded by len(chain), so self-referencing entities cannot loop.
    for field_name, expected_type in chain:
        references = relationship_references(current, field_name)
        if not references:
            logger.debug(
                "Relationship missing during chain resolution",
                extra={"entity": current.key, "field": field_name},
            )
            return None
        target = find_included(index, references[0], expected_type)
        if target is None:
            logger.debug(
                "Referenced entity not found in included",
                extra={"reference": references[0].key, "field": field_name},
            )
            return None
        current = target
    return current


def _terminal_url(entity: JSONAPIResource | None, base_url: str) -> str | None:
    raw_url = entity_file_url(entity)
    if raw_url is None:
        return None
    return to_absolute_url(raw_url, base_url) or None


def resolve_entity(
    root: JSONAPIResource,
    included: IncludedLike,
    relationship_chain: RelationshipChain,
) -> JSONAPIResource | None:
    """Walk ``relationship_chain`` from ``root`` and return the last entity."""
    return _follow(root, _as_index(included), relationship_chain)


def resolve_media_url(
    root: JSONAPIResource,
    included: IncludedLike,
    relationship_chain: RelationshipChain,
    base_url: str,
    *,
    fallback_to_first_included: bool = False,
) -> str | None:
    """Resolve a relationship chain to an absolute file URL, or ``None``.

    The first reference of each hop wins. With ``fallback_to_first_included``
    a root lacking the first relationship falls back to the first included
    entity of that hop's expected type.
    """
    index = _as_index(included)
    chain = list(relationship_chain)
    if not chain:
        return _terminal_url(root, base_url)

    first_field, first_type = chain[0]
    start: JSONAPIResource | None = None
    references = relationship_references(root, first_field)
    if references:
        start = find_included(index, references[0], first_type)
    elif fallback_to_first_included and first_type is not None:
        start = index.first_of_type(first_type)
        if start is not None:
            logger.debug(
                "Using first included entity as fallback",
                extra={"field": first_field, "entity": start.key},
            )
    if start is None:
        return None

    return _terminal_url(_follow(start, index, chain[1:]), base_url)


def resolve_media_urls(
    root: JSONAPIResource,
    included: IncludedLike,
    relationship_chain: RelationshipChain,
    base_url: str,
) -> list[str]:
    """Resolve every reference of the first hop, dropping failures.

    Output order follows the order of the resolving references.
    """
    index = _as_index(included)
    chain = list(relationship_chain)
    if not chain:
        url = _terminal_url(root, base_url)
        return [url] if url else []

    first_field, first_type = chain[0]
    urls: list[str] = []
    for reference in relationship_references(root, first_field):
        start = find_included(index, reference, first_type)
        if start is None:
            continue
        url = _terminal_url(_follow(start, index, chain[1:]), base_url)
        if url:
            urls.append(url)
    return urls


def resolve_image_url(
    root: JSONAPIResource,
    included: IncludedLike,
    field_name: str,
    base_url: str,
    *,
    fallback_to_first_included: bool = False,
) -> str | None:
    """Resolve a media image field (node -> media -> file) to a URL."""
    return resolve_media_url(
        root,
        included,
        media_image_chain(field_name),
        base_url,
        fallback_to_first_included=fallback_to_first_included,
    )


def resolve_image_urls(
    root: JSONAPIResource,
    included: IncludedLike,
    field_name: str,
    base_url: str,
) -> list[str]:
    return resolve_media_urls(root, included, media_image_chain(field_name), base_url)


def resolve_media_entity_image(
    media: JSONAPIResource,
    included: IncludedLike,
    base_url: str,
) -> str | None:
    """Resolve the file URL of a media entity that is already in hand."""
    return resolve_media_url(media, included, [(MEDIA_FILE_FIELD, FILE_TYPE)], base_url)


def resolve_file_url(
    entity: JSONAPIResource,
    included: IncludedLike,
    field_name: str,
    base_url: str,
    *,
    fallback_to_first_included: bool = False,
) -> str:
    """Resolve a direct file reference, returning ``"#"`` when unresolved."""
    url = resolve_media_url(
        entity,
        included,
        [(field_name, FILE_TYPE)],
        base_url,
        fallback_to_first_included=fallback_to_first_included,
    )
    return url or FILE_PLACEHOLDER
