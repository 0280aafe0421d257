import json
import logging

import pytest

from examscraper import main as cli
from examscraper.main import RunOptions, is_yes, run
from examscraper.scraper.config import ScraperConfig
from examscraper.scraper.models import LinkRecord, QaRecord


class StubExtractor:
    def __init__(self, links):
        self.links = links
        self.urls = []

    async def extract_links(self, url):
        self.urls.append(url)
        return list(self.links)


class StubFetcher:
    def __init__(self, records=None):
        self.records = records
        self.calls = []

    async def fetch_all(self, links):
        self.calls.append(list(links))
        if self.records is not None:
            return list(self.records)
        return [
            QaRecord(question_number=link.question_number, question_text="Q?", options=["A. x"], answer="A")
            for link in links
        ]


class ScriptedPrompt:
    """Answers prompts in order and records what was asked."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked = []

    def __call__(self, message):
        self.asked.append(message)
        return self.answers.pop(0)


@pytest.fixture
def output_config(tmp_path):
    return ScraperConfig({'scraper': {'delay_ms': 0}, 'storage': {'output_dir': str(tmp_path / "out")}})


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize("answer, expected", [
    ("", True), ("y", True), ("Y", True), ("n", False), ("yes", False), ("N", False)
])
def test_is_yes(answer, expected):
    assert is_yes(answer) is expected


async def test_run_without_prompt_saves_everything(output_config, link_records, tmp_path):
    fetcher = StubFetcher()

    result = await run(RunOptions(url="https://www.freecram.net/list"), output_config,
                       link_extractor=StubExtractor(link_records), fetcher=fetcher)

    out = tmp_path / "out"
    assert result.files_written == [
        out / "scraped_links.txt",
        out / "scraped_questions_answers.json",
        out / "scraped_questions_answers.csv",
    ]
    assert fetcher.calls == [link_records]
    assert len(json.loads((out / "scraped_questions_answers.json").read_text(encoding="utf-8"))) == 3


async def test_declining_deep_scrape_stops_after_links(output_config, link_records, tmp_path):
    prompt = ScriptedPrompt("", "my_links.txt", "n")
    fetcher = StubFetcher()

    result = await run(RunOptions(url="https://www.freecram.net/list"), output_config, prompt=prompt,
                       link_extractor=StubExtractor(link_records), fetcher=fetcher)

    assert result.files_written == [tmp_path / "out" / "my_links.txt"]
    assert fetcher.calls == []
    assert result.qa_records == []
    assert "3 links" in prompt.asked[2]


async def test_declining_link_save_still_deep_scrapes(output_config, link_records, tmp_path):
    prompt = ScriptedPrompt("n", "Y", "y", "")

    result = await run(RunOptions(url="https://www.freecram.net/list", export_csv=False), output_config,
                       prompt=prompt, link_extractor=StubExtractor(link_records), fetcher=StubFetcher())

    assert result.files_written == [tmp_path / "out" / "scraped_questions_answers.json"]
    assert len(result.qa_records) == 3


async def test_no_links_skips_everything(output_config):
    fetcher = StubFetcher()
    prompt = ScriptedPrompt()

    result = await run(RunOptions(url="https://www.freecram.net/list"), output_config, prompt=prompt,
                       link_extractor=StubExtractor([]), fetcher=fetcher)

    assert result.files_written == []
    assert prompt.asked == []
    assert fetcher.calls == []


async def test_empty_deep_scrape_result_saves_no_qa(output_config, link_records, tmp_path):
    result = await run(RunOptions(url="https://www.freecram.net/list"), output_config,
                       link_extractor=StubExtractor(link_records), fetcher=StubFetcher(records=[]))

    assert result.files_written == [tmp_path / "out" / "scraped_links.txt"]


def test_main_non_interactive(monkeypatch, tmp_path, link_records, restore_root_logger):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({
        'storage': {'output_dir': str(tmp_path / "out")},
        'logging': {'file': str(tmp_path / "logs" / "scraper.log")}
    }), encoding="utf-8")
    extractor = StubExtractor(link_records)
    monkeypatch.setattr(cli, "LinkExtractor", lambda config: extractor)
    monkeypatch.setattr(cli, "DeepContentFetcher", lambda config: StubFetcher())

    code = cli.main(["--config", str(settings), "--non-interactive", "--no-csv", "--delay-ms", "0",
                     "--url", "https://www.freecram.net/list"])

    assert code == 0
    assert extractor.urls == ["https://www.freecram.net/list"]
    assert (tmp_path / "out" / "scraped_links.txt").exists()
    assert (tmp_path / "out" / "scraped_questions_answers.json").exists()
    assert not (tmp_path / "out" / "scraped_questions_answers.csv").exists()
    assert (tmp_path / "logs" / "scraper.log").exists()


def test_main_prompts_for_url(monkeypatch, tmp_path, restore_root_logger):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({'logging': {'file': str(tmp_path / "scraper.log")}}), encoding="utf-8")
    extractor = StubExtractor([])
    monkeypatch.setattr(cli, "LinkExtractor", lambda config: extractor)
    monkeypatch.setattr(cli, "DeepContentFetcher", lambda config: StubFetcher())

    code = cli.main(["--config", str(settings)], prompt=ScriptedPrompt(""))

    assert code == 0
    assert extractor.urls == [ScraperConfig().default_url]


def test_main_missing_config_file(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "nope.json"), "--non-interactive"]) == 1
    assert "not found" in capsys.readouterr().out


def test_main_unwritable_log_file(tmp_path, capsys, restore_root_logger):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({'logging': {'file': str(blocker / "scraper.log")}}), encoding="utf-8")

    assert cli.main(["--config", str(settings), "--non-interactive"]) == 1
    assert "Could not open log file" in capsys.readouterr().out


def test_main_rejects_negative_delay(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{}", encoding="utf-8")
    assert cli.main(["--config", str(settings), "--non-interactive", "--delay-ms", "-1"]) == 1


def test_build_run_options_from_flags():
    args = cli.build_parser().parse_args(["--url", "https://example.com/list", "--qa-file", "qa.json", "--no-csv"])
    config = ScraperConfig()
    cli.apply_overrides(config, args)

    options = cli.build_run_options(args, config, prompt=None)

    assert options.url == "https://example.com/list"
    assert options.qa_filename == "qa.json"
    assert options.links_filename is None
    assert options.export_csv is False
    assert options.deep_scrape is None


def test_apply_overrides_headed_and_log_level():
    args = cli.build_parser().parse_args(["--headed", "--log-level", "debug"])
    config = ScraperConfig()

    cli.apply_overrides(config, args)

    assert config.headless is False
    assert config.logging_settings['level'] == "DEBUG"
