"""
Shared fixtures for the scraper test suite.

The Playwright objects are replaced by small in-memory fakes that serve
canned HTML, so the stages can run without a real browser.
"""

from typing import List

import pytest

from examscraper.scraper.config import ScraperConfig
from examscraper.scraper.models import LinkRecord
from tests.pages import ORIGIN


@pytest.fixture
def config() -> ScraperConfig:
    return ScraperConfig({'scraper': {'delay_ms': 0}})


@pytest.fixture
def link_records() -> List[LinkRecord]:
    return [
        LinkRecord(url=f"{ORIGIN}/question/e10{n}.html", title_text=f"Question text {n}", question_number=n)
        for n in (1, 2, 3)
    ]
