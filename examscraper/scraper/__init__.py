"""
Scraping stages for FreeCram exam pages.

This package contains the browser-driven stages: the link extractor for
listing pages and the deep content fetcher for question pages.
"""

from .base import BaseScraper
from .link_extractor import LinkExtractor
from .deep_fetcher import DeepContentFetcher

__all__ = [
    'BaseScraper',
    'LinkExtractor',
    'DeepContentFetcher'
]
