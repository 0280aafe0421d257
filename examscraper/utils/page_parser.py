"""
Host-side page parsing for FreeCram listing and question pages.

The browser only renders pages; everything here works on the HTML returned by
``page.content()`` parsed with BeautifulSoup, so it can be exercised with
plain HTML strings.
"""

import logging
from typing import Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from examscraper.constants import (
    LISTING_SELECTORS, LISTING_TEXT_MARKER, QA_SELECTORS, QUESTION_MISSING
)
from examscraper.scraper.models import LinkRecord
from examscraper.utils.text_processor import TextProcessor

logger = logging.getLogger(__name__)

HTML_PARSER = 'html.parser'

ContainerStrategy = Callable[[BeautifulSoup], Optional[Tag]]


class ContentNotFoundError(Exception):
    """Raised when a question page does not contain the QA container."""


def parse_html(html: Union[str, bytes]) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def find_canonical_container(soup: BeautifulSoup) -> Optional[Tag]:
    """The site's own listing container."""
    return soup.select_one(LISTING_SELECTORS['container'])


def find_container_by_text_marker(soup: BeautifulSoup) -> Optional[Tag]:
    """First dl/div/section (document order) whose text mentions the first question."""
    for element in soup.find_all(LISTING_SELECTORS['text_marker_candidates']):
        if LISTING_TEXT_MARKER in element.get_text():
            return element
    return None


def find_container_by_question_links(soup: BeautifulSoup) -> Optional[Tag]:
    """First dl holding at least one link to a question detail page."""
    for element in soup.select(LISTING_SELECTORS['structural_candidates']):
        if element.select(LISTING_SELECTORS['question_link']):
            return element
    return None


CONTAINER_STRATEGIES: List[ContainerStrategy] = [
    find_canonical_container,
    find_container_by_text_marker,
    find_container_by_question_links
]


def find_questions_container(soup: BeautifulSoup,
                             strategies: Optional[List[ContainerStrategy]] = None) -> Optional[Tag]:
    """
    Locate the question index container.

    Strategies are tried in order and the first one that returns an element
    wins.

    Args:
        soup: Parsed listing page
        strategies: Ordered strategies, defaults to CONTAINER_STRATEGIES

    Returns:
        The container element, or None when no strategy matches
    """
    for strategy in strategies or CONTAINER_STRATEGIES:
        container = strategy(soup)
        if container is not None:
            logger.debug(f"Questions container located by {strategy.__name__}")
            return container
    logger.debug("No questions container matched any strategy")
    return None


def parse_listing_entries(container: Tag, page_url: str) -> List[LinkRecord]:
    """Build one LinkRecord per dd entry that carries an anchor."""
    records = []
    for entry in container.select(LISTING_SELECTORS['entry']):
        link = entry.select_one(LISTING_SELECTORS['entry_link'])
        if link is None:
            continue

        href = link.get('href') or ''
        raw_text = link.get_text().strip()

        records.append(LinkRecord(
            url=TextProcessor.resolve_link(href, page_url),
            title_text=TextProcessor.clean_title_text(raw_text),
            question_number=TextProcessor.parse_question_number(raw_text)
        ))
    return records


def parse_listing_page(html: Union[str, bytes], page_url: str) -> List[LinkRecord]:
    """
    Extract question links from a listing page.

    Args:
        html: Rendered listing page HTML
        page_url: Final URL of the page, used to resolve relative links

    Returns:
        List[LinkRecord]: Records in DOM order, empty if no container is found
    """
    container = find_questions_container(parse_html(html))
    if container is None:
        return []
    return parse_listing_entries(container, page_url)


def parse_qa_page(html: Union[str, bytes]) -> Dict[str, object]:
    """
    Extract question text, options and answer from a question page.

    Returns:
        Dict with 'question', 'options' and 'answer' keys

    Raises:
        ContentNotFoundError: If the page has no QA container
    """
    soup = parse_html(html)
    qa_container = soup.select_one(QA_SELECTORS['content_marker'])
    if qa_container is None:
        raise ContentNotFoundError('QA container not found.')

    question_el = qa_container.select_one(QA_SELECTORS['question'])
    options_el = qa_container.select_one(QA_SELECTORS['options'])
    answer_el = qa_container.select_one(QA_SELECTORS['answer_explanation'])

    options = []
    if options_el is not None:
        options = [label.get_text().strip() for label in options_el.select(QA_SELECTORS['option_label'])]

    explanation_text = answer_el.get_text().strip() if answer_el is not None else ''

    return {
        'question': question_el.get_text().strip() if question_el is not None else QUESTION_MISSING,
        'options': options,
        'answer': TextProcessor.parse_correct_answer(explanation_text)
    }
