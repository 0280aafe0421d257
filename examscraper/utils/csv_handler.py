import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd  # type: ignore

from examscraper.constants import CSV_COLUMNS, MESSAGES
from examscraper.scraper.models import QaRecord


class CSVHandler:
    """Exports scraped QA records to a flat CSV file."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def csv_path_for(json_filename: Union[str, Path]) -> Path:
        """The CSV sits next to the JSON document, sharing its stem."""
        return Path(json_filename).with_suffix('.csv')

    def get_csv_columns(self, option_count: int) -> List[str]:
        """Column order for a batch whose widest record has option_count options."""
        options = [f"{CSV_COLUMNS['option_prefix']}{i}" for i in range(1, max(option_count, 1) + 1)]
        return CSV_COLUMNS['leading'] + options + CSV_COLUMNS['trailing']

    def format_row(self, record: QaRecord) -> Dict[str, Any]:
        row = {
            'QuestionNumber': record.question_number if record.question_number is not None else '',
            'Question': record.question_text,
            'Answer': record.answer,
            'URL': record.source_url or ''
        }
        for i, option in enumerate(record.options, 1):
            row[f"{CSV_COLUMNS['option_prefix']}{i}"] = option
        return row

    def build_dataframe(self, qa_records: Sequence[QaRecord]) -> pd.DataFrame:
        """One row per record; records with fewer options leave the extra columns blank."""
        option_count = max((len(record.options) for record in qa_records), default=0)
        columns = self.get_csv_columns(option_count)

        df = pd.DataFrame([self.format_row(record) for record in qa_records], columns=columns)
        return df.fillna('')

    def write_qa_csv(self, qa_records: Sequence[QaRecord], csv_file: Union[str, Path]) -> bool:
        """Write the QA batch to csv_file, one row per record."""
        if not qa_records:
            self.logger.info(f"No QA records to write to {csv_file}")
            return False

        csv_path = Path(csv_file)

        try:
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            df = self.build_dataframe(qa_records)
            df.to_csv(csv_path, index=False)
            self.logger.info(f"CSV export saved successfully to: {csv_path} ({len(df)} rows)")
            return True
        except OSError as e:
            self.logger.error(MESSAGES['error_file_save'].format(error=e))
            return False
