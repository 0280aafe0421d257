"""Writers for the link list and the structured QA JSON document."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from examscraper.constants import MESSAGES
from examscraper.scraper.models import LinkRecord, QaRecord

logger = logging.getLogger(__name__)


def format_links_file(links: Sequence[LinkRecord], scraped_at: Optional[datetime] = None) -> str:
    """Render the link list as a `links = [...]` block with a short header."""
    scraped_at = scraped_at or datetime.now()
    link_list = ',\n'.join(f'  "{link.url}"' for link in links)

    content = f"// Scraped on: {scraped_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
    content += f"// Total links found: {len(links)}\n\n"
    content += f"links = [\n{link_list}\n];\n"
    return content


def save_links_to_file(links: Sequence[LinkRecord], filename: Union[str, Path]) -> bool:
    """
    Save the list of question links to a file.

    Returns:
        bool: True if the file was written
    """
    try:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_links_file(links), encoding='utf-8')
        logger.info(f"Simplified link list saved successfully to: {path}")
        return True
    except OSError as e:
        logger.error(MESSAGES['error_file_save'].format(error=e))
        return False


def save_qa_to_file(qa_records: Sequence[QaRecord], filename: Union[str, Path]) -> bool:
    """
    Save the structured question/answer data in JSON format.

    Returns:
        bool: True if the file was written
    """
    try:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([record.to_dict() for record in qa_records], f, indent=2, ensure_ascii=False)
        logger.info(f"Structured QA data saved successfully to: {path}")
        return True
    except OSError as e:
        logger.error(MESSAGES['error_file_save'].format(error=e))
        return False
