"""Locations page processor, built from the home page document."""

from __future__ import annotations

from cms_jsonapi.core.document import IncludedIndex
from cms_jsonapi.pages.home import HomePageProcessor, home_image, map_locations
from cms_jsonapi.schemas.pages import LocationsPageContent
from cms_jsonapi.schemas.resource import JSONAPIDocument, JSONAPIResource


class LocationsPageProcessor(HomePageProcessor):
    """Expose the site map image and location lists.

    Loads exactly what the home page loads.
    """

    class Meta(HomePageProcessor.Meta):
        content_model = LocationsPageContent

    def build(
        self, document: JSONAPIDocument, entity: JSONAPIResource, index: IncludedIndex, base_url: str
    ) -> LocationsPageContent:
        return LocationsPageContent(
            map_image_url=home_image(entity, index, "field_rcr_map_image", base_url),
            locations_left=map_locations(entity, "field_map_text_left"),
            locations_right=map_locations(entity, "field_map_text_right"),
        )
