"""Example: serve processed CMS page content.

Run with:
    CMS_API_URL=https://cms.example.com/jsonapi CMS_AUTH_TOKEN=... \
        uvicorn examples.content_site_app:app --reload

Then request /pages/home, /pages/about, /pages/services, /pages/locations or
/pages/toolbox?filter[category]=Protocol%20Packets&page[limit]=5.
"""
from __future__ import annotations

from cms_jsonapi.app import create_app
from cms_jsonapi.config import Settings

settings = Settings()
app = create_app(settings)
