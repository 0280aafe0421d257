from typing import Any, Dict, List, Sequence

from examscraper.constants import NOT_AVAILABLE, QUESTION_MISSING
from examscraper.scraper.models import QaRecord


def validate_qa_record(record: QaRecord) -> List[str]:
    """Return the issues found on a single scraped record."""
    if record.is_error:
        return [f"Page failed to load: {record.source_url}"]

    issues = []
    if record.question_text == QUESTION_MISSING or not record.question_text:
        issues.append("Missing question text")
    if not record.options:
        issues.append("No answer options")
    if record.answer == NOT_AVAILABLE:
        issues.append("Correct answer not found")
    return issues


def validate_qa_records(qa_records: Sequence[QaRecord]) -> Dict[str, Any]:
    """Validate a batch of scraped QA records and return summary."""
    summary = {
        'total_records': len(qa_records),
        'complete_records': 0,
        'error_placeholders': 0,
        'missing_question': 0,
        'missing_options': 0,
        'missing_answer': 0,
        'issues': []
    }

    for i, record in enumerate(qa_records, 1):
        issues = validate_qa_record(record)
        if not issues:
            summary['complete_records'] += 1
            continue

        label = record.question_number if record.question_number is not None else f"#{i}"
        summary['issues'].extend([f"Question {label}: {issue}" for issue in issues])

        if record.is_error:
            summary['error_placeholders'] += 1
            continue
        if "Missing question text" in issues:
            summary['missing_question'] += 1
        if "No answer options" in issues:
            summary['missing_options'] += 1
        if "Correct answer not found" in issues:
            summary['missing_answer'] += 1

    return summary


def print_validation_report(summary: Dict[str, Any]) -> None:
    """Print a formatted validation report."""
    print("\n📊 Data Validation Report")
    print("=" * 50)
    print(f"Total Records: {summary['total_records']}")
    print(f"Complete Records: {summary['complete_records']}")
    print(f"Error Placeholders: {summary['error_placeholders']}")
    print(f"Missing Question Text: {summary['missing_question']}")
    print(f"Missing Options: {summary['missing_options']}")
    print(f"Missing Answer: {summary['missing_answer']}")

    if summary['issues']:
        print("\n⚠️ First 5 Issues:")
        for issue in summary['issues'][:5]:
            print(f"  {issue}")
