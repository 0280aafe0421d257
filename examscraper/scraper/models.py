"""Record types passed between the link extraction and deep scraping stages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from examscraper.constants import ERROR_QUESTION_TEXT, NOT_AVAILABLE


@dataclass(frozen=True)
class LinkRecord:
    """One entry of the listing page, in DOM order."""

    url: str
    title_text: str
    question_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fullUrl': self.url,
            'fullQuestionText': self.title_text,
            'questionNumber': self.question_number
        }


@dataclass
class QaRecord:
    """Question, options and answer scraped from a single detail page."""

    question_number: Optional[int]
    question_text: str
    options: List[str] = field(default_factory=list)
    answer: str = NOT_AVAILABLE
    source_url: Optional[str] = None

    @classmethod
    def error_placeholder(cls, link: LinkRecord) -> 'QaRecord':
        """Build the record that stands in for a detail page that failed to load."""
        return cls(
            question_number=link.question_number,
            question_text=ERROR_QUESTION_TEXT,
            options=[],
            answer=NOT_AVAILABLE,
            source_url=link.url
        )

    @property
    def is_error(self) -> bool:
        return self.question_text == ERROR_QUESTION_TEXT

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'questionNumber': self.question_number,
            'question': self.question_text,
            'options': list(self.options),
            'answer': self.answer
        }
        if self.source_url is not None:
            data['url'] = self.source_url
        return data
