"""
Text Processing Utilities

This module provides centralized text processing functions for cleaning
listing titles, resolving links and extracting answers from scraped content.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from examscraper.constants import TEXT_PATTERNS, NOT_AVAILABLE

_QUESTION_NUMBER_RE = re.compile(TEXT_PATTERNS['question_number'], re.IGNORECASE)
_QUESTION_PREFIX_RE = re.compile(TEXT_PATTERNS['question_prefix'], re.IGNORECASE)
_INLINE_SPAN_RE = re.compile(TEXT_PATTERNS['inline_span'], re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(TEXT_PATTERNS['whitespace'])
_CORRECT_ANSWER_RE = re.compile(TEXT_PATTERNS['correct_answer'], re.IGNORECASE)
_TRAILING_SEPARATOR_RE = re.compile(TEXT_PATTERNS['trailing_separator'])


class TextProcessor:
    """
    Handles text processing operations for scraped content.

    Provides methods for parsing question numbers, cleaning listing titles,
    resolving listing hrefs and pulling the correct answer out of the
    explanation block of a detail page.
    """

    @staticmethod
    def parse_question_number(text: str) -> Optional[int]:
        """
        Parse the leading "Question N:" marker of a listing entry.

        Args:
            text: Raw anchor text

        Returns:
            Optional[int]: The question number, or None when no marker leads the text
        """
        if not text:
            return None

        match = _QUESTION_NUMBER_RE.match(text)
        return int(match.group(1)) if match else None

    @staticmethod
    def clean_title_text(text: str) -> str:
        """
        Clean a listing title by removing the question marker, inline span
        markup and runs of whitespace.

        Cleaning is repeated until the text stops changing, so applying it to
        an already cleaned title returns the title unchanged.

        Args:
            text: Raw anchor text

        Returns:
            str: Cleaned title text
        """
        if not text:
            return ""

        cleaned = text
        while True:
            previous = cleaned
            cleaned = _QUESTION_PREFIX_RE.sub('', cleaned, count=1)
            cleaned = _INLINE_SPAN_RE.sub('', cleaned)
            cleaned = _WHITESPACE_RE.sub(' ', cleaned).strip()
            if cleaned == previous:
                return cleaned

    @staticmethod
    def page_origin(page_url: str) -> str:
        """Return the scheme://host[:port] origin of a page URL."""
        parts = urlsplit(page_url)
        if not parts.scheme or not parts.netloc:
            return ""
        return f"{parts.scheme}://{parts.netloc}"

    @staticmethod
    def resolve_link(href: str, page_url: str) -> str:
        """
        Resolve a listing href to an absolute URL.

        Hrefs starting with "/" are appended to the page origin; every other
        href is returned unchanged.

        Args:
            href: The anchor's href attribute
            page_url: URL of the page the anchor was found on

        Returns:
            str: Absolute URL
        """
        if href.startswith('/') and not href.startswith('//'):
            return TextProcessor.page_origin(page_url) + href
        return href

    @staticmethod
    def parse_correct_answer(explanation_text: str) -> str:
        """
        Extract the answer letters following "Correct Answer:".

        Args:
            explanation_text: Text of the answer/explanation block

        Returns:
            str: Answer letters such as "B, D", or "N/A" when not found
        """
        if not explanation_text:
            return NOT_AVAILABLE

        match = _CORRECT_ANSWER_RE.search(explanation_text)
        if not match:
            return NOT_AVAILABLE

        answer = _TRAILING_SEPARATOR_RE.sub('', match.group(1)).strip()
        return answer or NOT_AVAILABLE

    @staticmethod
    def truncate_text(text: str, max_length: int) -> str:
        """Cut text down to max_length characters."""
        if not text or len(text) <= max_length:
            return text
        return text[:max_length]


# Convenience functions
def clean_title_text(text: str) -> str:
    """Clean listing title text."""
    return TextProcessor.clean_title_text(text)


def parse_correct_answer(explanation_text: str) -> str:
    """Extract the correct answer letters."""
    return TextProcessor.parse_correct_answer(explanation_text)
