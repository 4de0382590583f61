"""JSON:API document construction, indexing and merging."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from cms_jsonapi.schemas.resource import (
    JSONAPIDocument,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

logger = logging.getLogger(__name__)


class IncludedIndex:
    """Lookup table over an ``included`` array keyed by ``(type, id)``."""

    def __init__(self, included: Iterable[JSONAPIResource] = ()) -> None:
        self._entities: dict[tuple[str, str], JSONAPIResource] = {}
        self._order: list[JSONAPIResource] = []
        for entity in included:
            if entity.id is None:
                continue
            # First occurrence wins, matching a linear find() over the array.
            self._entities.setdefault(entity.key, entity)
            self._order.append(entity)

    @classmethod
    def from_document(cls, document: JSONAPIDocument) -> "IncludedIndex":
        return cls(document.included)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def get(
        self,
        reference: JSONAPIResourceIdentifier | tuple[str, str],
    ) -> JSONAPIResource | None:
        """Return the entity for a reference or a ``(type, id)`` pair."""
        key = reference.key if isinstance(reference, JSONAPIResourceIdentifier) else reference
        return self._entities.get(key)

    def first_of_type(self, type_: str) -> JSONAPIResource | None:
        for entity in self._order:
            if entity.type == type_:
                return entity
        return None

    def of_type(self, type_: str) -> list[JSONAPIResource]:
        return [entity for entity in self._order if entity.type == type_]


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from serialized data."""

    def build_single(
        self,
        resource: Mapping[str, Any],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a single resource object."""
        document: dict[str, Any] = {"data": dict(resource)}
        return self._decorate(document, included=included, links=links, meta=meta)

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        included: Iterable[Mapping[str, Any]] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a collection of resources."""
        document: dict[str, Any] = {"data": [dict(item) for item in resources]}
        return self._decorate(document, included=included, links=links, meta=meta)

    def build_error(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API error document from error objects."""
        return {"errors": [dict(error) for error in errors]}

    def _decorate(
        self,
        document: dict[str, Any],
        *,
        included: Iterable[Mapping[str, Any]] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        included_items = [dict(item) for item in included] if included else []
        if included_items:
            document["included"] = included_items
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document


def _dump(resource: JSONAPIResource) -> dict[str, Any]:
    return resource.model_dump(exclude_none=True)


def _merge_resource(target: dict[str, Any], source: JSONAPIResource) -> dict[str, Any]:
    merged = dict(target)
    merged["attributes"] = {**target.get("attributes", {}), **source.attributes}
    relationships = dict(target.get("relationships", {}))
    for name, relationship in source.relationships.items():
        relationships[name] = relationship.model_dump(exclude_none=True)
    merged["relationships"] = relationships
    return merged


def merge_documents(*documents: JSONAPIDocument) -> JSONAPIDocument:
    """Merge partial responses for the same resource(s) into one document.

    Empty documents are skipped and the first remaining one supplies
    ``links`` and ``meta``. Included entities are de-duplicated by
    ``(type, id)`` with later documents winning; primary entities sharing an
    id get their attributes and relationships merged key by key. The inputs
    are left untouched.
    """
    valid = [document for document in documents if not document.is_empty()]
    if not valid:
        return JSONAPIDocument.empty()

    base = valid[0]
    builder = JSONAPIDocumentBuilder()
    single = base.data is not None and not isinstance(base.data, list)

    primary: dict[str, dict[str, Any]] = {}
    order: list[str] = []
    for entity in base.entities():
        key = entity.id or ""
        if key not in primary:
            order.append(key)
        primary[key] = _dump(entity)

    included: dict[tuple[str, str], dict[str, Any]] = {}
    for document in valid:
        for entity in document.included:
            included[entity.key] = _dump(entity)

    for document in valid[1:]:
        source_single = document.data is not None and not isinstance(document.data, list)
        if source_single != single:
            logger.debug("Skipping primary data with mismatched cardinality during merge")
            continue
        for entity in document.entities():
            key = entity.id or ""
            if single:
                key = order[0]
            if key in primary:
                primary[key] = _merge_resource(primary[key], entity)

    meta_kwargs = {"links": base.links, "meta": base.meta}
    if single:
        raw = builder.build_single(primary[order[0]], included=included.values(), **meta_kwargs)
    else:
        raw = builder.build_collection(
            (primary[key] for key in order), included=included.values(), **meta_kwargs
        )
    return JSONAPIDocument.model_validate(raw)
