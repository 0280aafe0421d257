"""
FreeCram Exam Questions Scraper Package

A two-stage scraper for FreeCram exam listings: collect the question links
from a listing page, then visit each question page for its text, answer
options and correct answer.
"""

__version__ = "1.0.0"

from .scraper.link_extractor import LinkExtractor
from .scraper.deep_fetcher import DeepContentFetcher
from .scraper.models import LinkRecord, QaRecord
from .utils.text_processor import TextProcessor

__all__ = [
    'LinkExtractor',
    'DeepContentFetcher',
    'LinkRecord',
    'QaRecord',
    'TextProcessor'
]
