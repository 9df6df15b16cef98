"""Regulatory news collection and relevance scoring.

Pulls CQC news and GOV.UK publications from the Home Office and DHSC, scores
each item against care-sector keywords and stores the relevant ones.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError

from complyflow.constants import (
    FEED_ITEM_LIMIT,
    FEED_SUMMARY_MAX_CHARS,
    RELEVANCE_BASE_SCORE,
    RELEVANCE_KEYWORDS,
    RELEVANCE_MAX_SCORE,
    RELEVANCE_STORE_THRESHOLD,
)
from complyflow.infrastructure.feeds import RegulatorySourceClient
from complyflow.repository.regulatory_update_repository import (
    RegulatoryUpdateRepository,
)

logger = logging.getLogger(__name__)

GOVUK_BASE_URL = "https://www.gov.uk"
HOME_OFFICE = "home-office"
DHSC = "department-of-health-and-social-care"


def calculate_relevance(title: str, summary: str) -> int:
    """Score an item from 30 upward by the care-sector keywords it mentions.

    Args:
        title: Item title
        summary: Item summary or description

    Returns:
        Relevance score capped at 100
    """
    text = f"{title} {summary}".lower()
    score = RELEVANCE_BASE_SCORE
    for term, weight in RELEVANCE_KEYWORDS.items():
        if term in text:
            score += weight
    return min(RELEVANCE_MAX_SCORE, score)


def _parse_rss_date(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def _parse_iso_date(value: Optional[str]) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return datetime.now(timezone.utc)


class RegulatoryFeedService:
    """Fetches, scores and stores regulatory updates."""

    def __init__(
        self, sources: RegulatorySourceClient, update_repo: RegulatoryUpdateRepository
    ):
        self.sources = sources
        self.update_repo = update_repo

    async def fetch_cqc_updates(self) -> List[Dict[str, Any]]:
        """The 20 newest CQC news items, or an empty list if the feed fails."""
        try:
            items = await self.sources.fetch_rss_items()
        except (httpx.HTTPError, ET.ParseError) as e:
            logger.error(f"Error fetching CQC updates: {e}")
            return []

        updates = []
        for item in items[:FEED_ITEM_LIMIT]:
            description = item["description"]
            updates.append(
                {
                    "source": "cqc",
                    "title": item["title"],
                    "summary": description[:FEED_SUMMARY_MAX_CHARS],
                    "url": item["link"],
                    "published_at": _parse_rss_date(item["pub_date"]),
                    "category": "News",
                    "relevance_score": calculate_relevance(item["title"], description),
                }
            )
        return updates

    async def fetch_govuk_updates(self, organisation: str) -> List[Dict[str, Any]]:
        """Recent GOV.UK publications for an organisation, or an empty list on failure."""
        try:
            results = await self.sources.search_govuk(
                organisation, count=FEED_ITEM_LIMIT, order="-public_timestamp"
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching {organisation} updates: {e}")
            return []

        source = "home_office" if HOME_OFFICE in organisation else "dhsc"
        updates = []
        for result in results:
            title = result.get("title") or ""
            description = result.get("description") or ""
            updates.append(
                {
                    "source": source,
                    "title": title,
                    "summary": description,
                    "url": f"{GOVUK_BASE_URL}{result.get('link') or ''}",
                    "published_at": _parse_iso_date(result.get("public_timestamp")),
                    "category": result.get("format") or "Policy",
                    "relevance_score": calculate_relevance(title, description),
                }
            )
        return updates

    async def refresh(self) -> Dict[str, Any]:
        """Fetch every source and store the relevant updates.

        Returns:
            ``{success, fetched, stored, sources: {cqc, home_office, dhsc}}``
        """
        cqc, home_office, dhsc = await asyncio.gather(
            self.fetch_cqc_updates(),
            self.fetch_govuk_updates(HOME_OFFICE),
            self.fetch_govuk_updates(DHSC),
        )
        all_updates = [*cqc, *home_office, *dhsc]
        relevant = [
            u for u in all_updates if u["relevance_score"] >= RELEVANCE_STORE_THRESHOLD
        ]

        for update in relevant:
            try:
                await self.update_repo.upsert(update)
            except SQLAlchemyError as e:
                logger.error(f"Error upserting update {update['url']}: {e}")

        logger.info(
            f"Regulatory feed fetched {len(all_updates)} updates, stored {len(relevant)}"
        )
        return {
            "success": True,
            "fetched": len(all_updates),
            "stored": len(relevant),
            "sources": {
                "cqc": len(cqc),
                "home_office": len(home_office),
                "dhsc": len(dhsc),
            },
        }
