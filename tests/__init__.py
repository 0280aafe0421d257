"""
Test suite for the FreeCram scraper.

This package contains tests for all components of the scraper:
- Container detection and page parsing
- Text processing and answer extraction
- Link extraction and deep scraping stages
- Output files, validation and the CLI
"""
