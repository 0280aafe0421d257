"""
Utility modules for the FreeCram scraper.

This package contains utility classes and functions for:
- Host-side parsing of listing and question pages
- Text cleaning and answer extraction
- Writing link lists, JSON and CSV output
- Validating scraped batches
"""

from .page_parser import ContentNotFoundError, parse_listing_page, parse_qa_page
from .text_processor import TextProcessor, clean_title_text, parse_correct_answer
from .csv_handler import CSVHandler

__all__ = [
    'ContentNotFoundError',
    'parse_listing_page',
    'parse_qa_page',
    'TextProcessor',
    'clean_title_text',
    'parse_correct_answer',
    'CSVHandler'
]
