"""Pydantic schemas for JSON:API documents returned by the CMS."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_identifier(value: Any) -> Any:
    # Some CMS endpoints emit numeric ids; identity comparisons need strings.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str
    id: str
    meta: Optional[Dict[str, Any]] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @property
    def key(self) -> tuple[str, str]:
        return (self.type, self.id)


class JSONAPIRelationship(BaseModel):
    """Relationship object; ``data`` may be one identifier, many, or null."""

    model_config = ConfigDict(frozen=True, extra="allow")

    data: Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier], None] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    def references(self) -> list[JSONAPIResourceIdentifier]:
        """Return the linkage as a list regardless of cardinality."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str
    id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Dict[str, JSONAPIRelationship] = Field(default_factory=dict)
    links: Optional[Dict[str, Any]] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("attributes", "relationships", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def key(self) -> tuple[str, str]:
        return (self.type, self.id or "")

    def relationship(self, field_name: str) -> Optional[JSONAPIRelationship]:
        return self.relationships.get(field_name)


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(frozen=True, extra="allow")

    data: Union[JSONAPIResource, List[JSONAPIResource], None] = None
    included: List[JSONAPIResource] = Field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None

    @field_validator("included", mode="before")
    @classmethod
    def none_as_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def empty(cls) -> "JSONAPIDocument":
        """Return the fallback document used when a fetch yields nothing."""
        return cls(data=[])

    def entities(self) -> list[JSONAPIResource]:
        """Return primary data as a list, preserving response order."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]

    def primary(self) -> Optional[JSONAPIResource]:
        entities = self.entities()
        return entities[0] if entities else None

    def is_empty(self) -> bool:
        return not self.entities()


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    errors: List[Dict[str, Any]]
