"""Helpers for JSON:API query parameters.

``build_query_params`` produces the outgoing query for CMS requests;
``parse_query_params`` normalizes the ``page``/``filter`` families our own
HTTP surface accepts.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Union
from urllib.parse import quote

from pydantic import BaseModel, Field

# Legacy field names still used by page code, mapped to the CMS's names.
FIELD_NAME_ALIASES: dict[str, str] = {
    "field_map_image": "field_rcr_map_image",
}

MEDIA_FIELDSET = "fields[media--image]=name,field_media_image"
FILE_FIELDSET = "fields[file--file]=uri,url"

FilterScalar = Union[str, int, float, bool]


class FilterCondition(BaseModel):
    value: FilterScalar | None = None
    operator: str | None = None


class FetchOptions(BaseModel):
    """Sparse fieldset, include and filter options for one CMS request."""

    fields: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)
    filter: dict[str, Union[FilterCondition, FilterScalar]] = Field(default_factory=dict)


def correct_field_name(field_name: str) -> str:
    return FIELD_NAME_ALIASES.get(field_name, field_name)


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "1" if value else "0"
    return quote(str(value), safe="")


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def build_query_params(options: FetchOptions, resource_type: str) -> list[str]:
    """Return ordered ``key=value`` pairs for a CMS JSON:API request."""
    query: list[str] = []

    if options.fields:
        fields = ",".join(correct_field_name(field) for field in options.fields)
        query.append(f"fields[{resource_type}]={fields}")

    if options.include:
        includes: list[str] = []
        for include in options.include:
            corrected = ".".join(correct_field_name(part) for part in include.split("."))
            if corrected not in includes:
                includes.append(corrected)
        query.append(f"include={_encode(','.join(includes))}")

        if any("field_" in include for include in includes):
            if not any(param.startswith("fields[media--image]") for param in query):
                query.append(MEDIA_FIELDSET)
            if not any(param.startswith("fields[file--file]") for param in query):
                query.append(FILE_FIELDSET)

    for key, condition in options.filter.items():
        if isinstance(condition, FilterCondition):
            if condition.value is not None:
                query.append(f"filter[{key}][value]={_encode(condition.value)}")
            if condition.operator is not None:
                query.append(f"filter[{key}][operator]={_encode(condition.operator)}")
        else:
            query.append(f"filter[{key}][value]={_encode(condition)}")

    # Only published content unless the caller filters on status itself.
    if "status" not in options.filter:
        query.append("filter[status][value]=1")

    return query


_FILTER_KEY_RE = re.compile(r"^filter\[([^\]]+)\]$")
_PAGE_KEY_RE = re.compile(r"^page\[([^\]]+)\]$")


def parse_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize incoming ``page[...]`` and ``filter[...]`` parameters."""
    normalized: dict[str, Any] = {"page": {}, "filter": {}}

    for key, value in params.items():
        if value is None:
            continue
        raw_value = str(value)
        page_match = _PAGE_KEY_RE.match(key)
        if page_match:
            try:
                normalized["page"][page_match.group(1)] = int(raw_value)
            except ValueError:
                normalized["page"][page_match.group(1)] = raw_value
            continue
        filter_match = _FILTER_KEY_RE.match(key)
        if filter_match:
            values = _split_csv(raw_value)
            normalized["filter"][filter_match.group(1)] = values[0] if len(values) == 1 else values

    return normalized
