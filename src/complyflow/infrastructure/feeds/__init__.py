"""Regulatory news source integrations."""

from .regulatory_sources import RegulatorySourceClient, parse_rss_items

__all__ = ["RegulatorySourceClient", "parse_rss_items"]
