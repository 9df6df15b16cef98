"""Fetchers for regulator news sources.

Reads the CQC news RSS feed and the GOV.UK search API. Both return raw
items; relevance scoring and storage happen in the regulatory feed service.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List

import httpx

logger = logging.getLogger(__name__)


class RegulatorySourceClient:
    """HTTP client for the regulatory news sources.

    Attributes:
        rss_url: CQC news releases RSS feed
        govuk_search_url: GOV.UK search API endpoint
        timeout: Request timeout in seconds
    """

    def __init__(self, rss_url: str, govuk_search_url: str, timeout: float = 30.0):
        self.rss_url = rss_url
        self.govuk_search_url = govuk_search_url
        self.timeout = timeout

    async def fetch_rss_items(self) -> List[Dict[str, str]]:
        """Fetch the RSS feed and return its items in document order.

        Each item has ``title``, ``link``, ``description`` and ``pub_date``.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            xml.etree.ElementTree.ParseError: If the feed is not valid XML
        """
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.rss_url)
            response.raise_for_status()

        return parse_rss_items(response.text)

    async def search_govuk(
        self, organisation: str, count: int = 20, order: str = "-public_timestamp"
    ) -> List[Dict[str, Any]]:
        """Return GOV.UK search results published by an organisation.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
        """
        params = {
            "filter_organisations": organisation,
            "count": str(count),
            "order": order,
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.govuk_search_url, params=params)
            response.raise_for_status()

        return response.json().get("results") or []


def parse_rss_items(xml_text: str) -> List[Dict[str, str]]:
    """Extract ``<item>`` elements from an RSS 2.0 document."""
    root = ET.fromstring(xml_text)
    items = []
    for item in root.iter("item"):
        items.append(
            {
                "title": (item.findtext("title") or "").strip(),
                "link": (item.findtext("link") or "").strip(),
                "description": (item.findtext("description") or "").strip(),
                "pub_date": (item.findtext("pubDate") or "").strip(),
            }
        )
    return items
