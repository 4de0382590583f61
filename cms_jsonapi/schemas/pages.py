"""Pydantic schemas for page-level content handed to the presentation layer."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CardContent(BaseModel):
    title: str = ""
    description: str = ""
    image_url: Optional[str] = None
    link: str = "/"
    name: str = "Resource"


class PartnerContent(BaseModel):
    id: str
    name: str = "Partner"
    logo_url: Optional[str] = None
    link: str = "/"


class HomePageContent(BaseModel):
    """Home page content; every field has a renderable default."""

    title: str = ""
    body: str = ""
    hero_image_url: Optional[str] = None
    article_image_url: Optional[str] = None
    map_image_url: Optional[str] = None
    logo_url: Optional[str] = None
    card_title: str = "Explore Our Resources"
    cards: List[CardContent] = Field(default_factory=list)
    partners: List[PartnerContent] = Field(default_factory=list)
    # One location per line.
    map_locations_left: str = ""
    map_locations_right: str = ""
    why_content: str = ""


class ImpactStat(BaseModel):
    id: str
    number: str
    label: str


class TeamMember(BaseModel):
    id: str
    name: str
    role: str = ""
    bio: str = ""
    image: str = ""


class AboutPageContent(BaseModel):
    title: str = ""
    body: str = ""
    hero_image_url: Optional[str] = None
    impact_stats: List[ImpactStat] = Field(default_factory=list)
    team_members: List[TeamMember] = Field(default_factory=list)


class ServicesPageContent(BaseModel):
    title: str = ""
    body: str = ""
    hero_image_url: Optional[str] = None
    staggered_images: List[str] = Field(default_factory=list)
    staggered_text: List[Dict[str, Any]] = Field(default_factory=list)


class LocationsPageContent(BaseModel):
    map_image_url: Optional[str] = None
    locations_left: str = ""
    locations_right: str = ""


class ToolboxResource(BaseModel):
    id: str
    title: str = "Untitled Resource"
    description: str = "Download this resource file."
    file_url: str = "#"
    file_type: str = "pdf"
    file_size: str = "Unknown size"
    category: str = "General"
    last_updated: str = ""


FALLBACK_TOOLBOX_CONTENT = (
    "<p>Access these resources to support your rural clinical research efforts.</p>"
)


class ToolboxPageContent(BaseModel):
    title: str = "RCR Toolbox"
    page_content: str = FALLBACK_TOOLBOX_CONTENT
    hero_image_url: Optional[str] = None
    categories: List[str] = Field(default_factory=lambda: ["General"])
    resources: List[ToolboxResource] = Field(default_factory=list)
