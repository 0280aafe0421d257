import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, List, Optional

from examscraper.constants import MESSAGES, SEPARATOR_WIDTH
from examscraper.scraper.config import ConfigError, ScraperConfig
from examscraper.scraper.deep_fetcher import DeepContentFetcher
from examscraper.scraper.link_extractor import LinkExtractor
from examscraper.scraper.models import LinkRecord, QaRecord
from examscraper.utils.csv_handler import CSVHandler
from examscraper.utils.file_writer import save_links_to_file, save_qa_to_file
from examscraper.utils.validation import print_validation_report, validate_qa_records

Prompt = Callable[[str], str]

logger = logging.getLogger(__name__)


@dataclass
class RunOptions:
    """
    Decisions for one scraping run.

    A field left as None is asked for through the prompt passed to run();
    without a prompt it falls back to the default (yes, or the configured
    filename).
    """

    url: str
    save_links: Optional[bool] = None
    links_filename: Optional[str] = None
    deep_scrape: Optional[bool] = None
    save_qa: Optional[bool] = None
    qa_filename: Optional[str] = None
    export_csv: bool = True


@dataclass
class RunResult:
    links: List[LinkRecord] = field(default_factory=list)
    qa_records: List[QaRecord] = field(default_factory=list)
    files_written: List[Path] = field(default_factory=list)


FILE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'
CONSOLE_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(config: ScraperConfig) -> None:
    """
    Route every logger through the root logger to a rotating log file and the console.

    Raises:
        OSError: If the log directory or file cannot be created
    """
    log_settings = config.logging_settings
    log_path = Path(log_settings['file'])
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, str(log_settings['level']).upper(), logging.INFO)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=log_settings.get('max_size', 10485760),
        backupCount=log_settings.get('backup_count', 5),
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT, datefmt='%H:%M:%S'))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    for handler in (file_handler, console_handler):
        handler.setLevel(level)
        root_logger.addHandler(handler)

    logger.debug(f"Logging to {log_path} at {logging.getLevelName(level)}")


def print_separator(newline_before: bool = False) -> None:
    if newline_before:
        print()
    print("=" * SEPARATOR_WIDTH)


def print_banner(message: str) -> None:
    print_separator(newline_before=True)
    print(message)
    print_separator()


def is_yes(answer: str) -> bool:
    """Y/n prompt semantics: Enter or 'y'/'Y' means yes, anything else means no."""
    return answer == '' or answer.lower() == 'y'


def _confirm(value: Optional[bool], prompt: Optional[Prompt], message: str) -> bool:
    if value is not None:
        return value
    if prompt is None:
        return True
    return is_yes(prompt(message))


def _filename(value: Optional[str], prompt: Optional[Prompt], message: str, default: str) -> str:
    if value:
        return value
    if prompt is None:
        return default
    return prompt(message).strip() or default


async def run(options: RunOptions, config: ScraperConfig, prompt: Optional[Prompt] = None,
              link_extractor: Optional[LinkExtractor] = None,
              fetcher: Optional[DeepContentFetcher] = None) -> RunResult:
    """
    Run link extraction and, if chosen, deep scraping, saving the results.

    Args:
        options: Decisions for this run
        config: Loaded settings
        prompt: Asks the user for undecided options; None accepts defaults
        link_extractor: Stage 1 scraper, built from config when omitted
        fetcher: Stage 2 scraper, built from config when omitted

    Returns:
        RunResult with the records produced and the files written
    """
    result = RunResult()
    link_extractor = link_extractor or LinkExtractor(config)
    fetcher = fetcher or DeepContentFetcher(config)

    print_banner(f"🚀 {MESSAGES['stage_1_start']}")
    logger.info(f"Listing URL: {options.url}")
    result.links = await link_extractor.extract_links(options.url)

    if not result.links:
        logger.error(MESSAGES['no_links_found'])
        print(f"\n⚠️  {MESSAGES['no_links_found']}")
        return result

    if _confirm(options.save_links, prompt, MESSAGES['prompt_save_links']):
        filename = _filename(
            options.links_filename, prompt,
            MESSAGES['prompt_links_filename'].format(default=config.storage['links_file']),
            config.storage['links_file']
        )
        path = config.output_path(filename)
        if save_links_to_file(result.links, path):
            result.files_written.append(path)

    if not _confirm(options.deep_scrape, prompt, MESSAGES['prompt_deep_scrape'].format(count=len(result.links))):
        logger.info("Deep scraping skipped")
        return result

    print_banner(f"🚀 {MESSAGES['stage_2_start']}")
    result.qa_records = await fetcher.fetch_all(result.links)

    if not result.qa_records:
        logger.error(MESSAGES['deep_fail_empty'])
        print(f"\n⚠️  {MESSAGES['deep_fail_empty']}")
        return result

    print_validation_report(validate_qa_records(result.qa_records))

    if _confirm(options.save_qa, prompt, MESSAGES['prompt_save_qa'].format(count=len(result.qa_records))):
        filename = _filename(
            options.qa_filename, prompt,
            MESSAGES['prompt_qa_filename'].format(default=config.storage['qa_file']),
            config.storage['qa_file']
        )
        path = config.output_path(filename)
        if save_qa_to_file(result.qa_records, path):
            result.files_written.append(path)

        if options.export_csv:
            csv_path = CSVHandler.csv_path_for(path)
            if CSVHandler().write_qa_csv(result.qa_records, csv_path):
                result.files_written.append(csv_path)

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='FreeCram Exam Questions Scraper')
    parser.add_argument('--url', type=str, help='Listing page URL (prompted for when omitted)')
    parser.add_argument('--config', type=str, help='Path to configuration file (default: config/settings.json if present)')
    parser.add_argument('--links-file', type=str, help='Filename for the scraped link list')
    parser.add_argument('--qa-file', type=str, help='Filename for the structured Q/A JSON')
    parser.add_argument('--delay-ms', type=int, help='Pause between question pages in milliseconds')
    parser.add_argument('--no-csv', action='store_true', help='Do not export the Q/A data as CSV')
    parser.add_argument('--non-interactive', action='store_true',
                        help='Never prompt; save everything and run deep scraping')
    parser.add_argument('--headed', action='store_true', help='Show the browser window')
    parser.add_argument('--log-level', type=str, help='Override the configured log level')
    return parser


def apply_overrides(config: ScraperConfig, args: argparse.Namespace) -> None:
    """Update config with command line arguments."""
    if args.delay_ms is not None:
        config.scraper['delay_ms'] = args.delay_ms
    if args.headed:
        config.scraper['headless'] = False
    if args.log_level:
        config.logging_settings['level'] = args.log_level.upper()
    if args.no_csv:
        config.storage['export_csv'] = False


def build_run_options(args: argparse.Namespace, config: ScraperConfig, prompt: Optional[Prompt]) -> RunOptions:
    """Collect the URL and any decisions already fixed on the command line."""
    url = args.url
    if not url and prompt is not None:
        url = prompt(MESSAGES['prompt_url'].format(url=config.default_url)).strip()

    return RunOptions(
        url=url or config.default_url,
        links_filename=args.links_file,
        qa_filename=args.qa_file,
        export_csv=bool(config.storage.get('export_csv', True))
    )


def _ask(message: str) -> str:
    return input(f"\n{message}")


def main(argv: Optional[List[str]] = None, prompt: Optional[Prompt] = _ask) -> int:
    args = build_parser().parse_args(argv)
    if args.non_interactive:
        prompt = None

    try:
        config = ScraperConfig.load(args.config)
    except ConfigError as e:
        print(f"❌ {e}")
        return 1

    apply_overrides(config, args)
    problems = config.validate()
    if problems:
        for problem in problems:
            print(f"❌ Error: {problem}")
        return 1

    try:
        setup_logging(config)
    except OSError as e:
        print(f"❌ Could not open log file {config.logging_settings['file']}: {e}")
        return 1

    try:
        print_separator()
        print(MESSAGES['cli_header'])
        print_separator()

        options = build_run_options(args, config, prompt)
        result = asyncio.run(run(options, config, prompt=prompt))

        print_banner(f"✅ {MESSAGES['process_completed']}")
        for path in result.files_written:
            print(f"📁 {path}")
        return 0

    except KeyboardInterrupt:
        logger.info("Scraping interrupted by user")
        print("\nScraping interrupted by user.")
        return 130
    except Exception as e:
        logger.critical(MESSAGES['error_critical'].format(error=e), exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
