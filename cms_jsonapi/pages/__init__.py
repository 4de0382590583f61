"""Page processors that aggregate CMS documents into page content."""

from .about import AboutPageProcessor
from .base import PageProcessor
from .home import HomePageProcessor
from .locations import LocationsPageProcessor
from .services import ServicesPageProcessor
from .toolbox import ToolboxPageProcessor

__all__ = [
    "AboutPageProcessor",
    "HomePageProcessor",
    "LocationsPageProcessor",
    "PageProcessor",
    "ServicesPageProcessor",
    "ToolboxPageProcessor",
]
