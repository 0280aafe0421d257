from types import SimpleNamespace

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from examscraper.scraper import base
from examscraper.scraper.config import ScraperConfig
from examscraper.scraper.deep_fetcher import DeepContentFetcher
from tests.fakes import FakeLauncher, FakePage
from tests.pages import qa_html


def pages_for(link_records, overrides=None):
    responses = {
        link.url: qa_html(question=f"Question body {link.question_number}", answer="A, C")
        for link in link_records
    }
    responses.update(overrides or {})
    return FakePage(responses)


async def test_all_pages_load(config, link_records):
    page = pages_for(link_records)
    launcher = FakeLauncher(page)

    records = await DeepContentFetcher(config, browser_launcher=launcher).fetch_all(link_records)

    assert len(records) == 3
    assert [r.question_number for r in records] == [1, 2, 3]
    assert [r.question_text for r in records] == ["Question body 1", "Question body 2", "Question body 3"]
    assert all(r.options == ["A. Prompt Builder", "B. Einstein Trust Layer", "C. Data Cloud"] for r in records)
    assert all(r.answer == "A, C" for r in records)
    assert all(r.source_url is None for r in records)
    assert page.visited == [link.url for link in link_records]
    assert launcher.launches == 1
    assert launcher.browser.closed


async def test_timeout_on_one_page_yields_placeholder(config, link_records):
    second = link_records[1]
    page = pages_for(link_records, {second.url: PlaywrightTimeoutError("Timeout 30000ms exceeded.")})

    records = await DeepContentFetcher(config, browser_launcher=FakeLauncher(page)).fetch_all(link_records)

    assert len(records) == 3
    assert records[0].question_text == "Question body 1"
    assert records[2].question_text == "Question body 3"

    placeholder = records[1]
    assert placeholder.question_number == 2
    assert placeholder.question_text == "ERROR: Could not load or find content."
    assert placeholder.options == []
    assert placeholder.answer == "N/A"
    assert placeholder.source_url == second.url


async def test_missing_content_marker_yields_placeholder(config, link_records):
    page = pages_for(link_records, {link_records[0].url: "<html><body>Access denied</body></html>"})

    records = await DeepContentFetcher(config, browser_launcher=FakeLauncher(page)).fetch_all(link_records)

    assert records[0].is_error
    assert records[0].answer == "N/A"
    assert not records[1].is_error
    assert page.selector_waits == [".qa", ".qa", ".qa"]


async def test_hidden_content_marker_still_counts(config, link_records):
    hidden = qa_html(question="Hidden until revealed", answer="B").replace(
        '<div class="qa">', '<div class="qa" style="display: none">'
    )
    page = pages_for(link_records[:1], {link_records[0].url: hidden})

    records = await DeepContentFetcher(config, browser_launcher=FakeLauncher(page)).fetch_all(link_records[:1])

    assert not records[0].is_error
    assert records[0].question_text == "Hidden until revealed"
    assert records[0].answer == "B"


async def test_page_without_answer_marker(config, link_records):
    page = pages_for(link_records[:1], {
        link_records[0].url: '<div class="qa"><div class="qa-question">Q?</div>'
                             '<div class="qa-answerexp">See explanation</div></div>'
    })

    records = await DeepContentFetcher(config, browser_launcher=FakeLauncher(page)).fetch_all(link_records[:1])

    assert records[0].question_text == "Q?"
    assert records[0].options == []
    assert records[0].answer == "N/A"
    assert not records[0].is_error


async def test_empty_input_skips_browser(config):
    launcher = FakeLauncher()

    assert await DeepContentFetcher(config, browser_launcher=launcher).fetch_all([]) == []
    assert launcher.launches == 0
    assert launcher.browser.page.visited == []


async def test_launch_failure_aborts_batch(config, link_records):
    launcher = FakeLauncher(error=RuntimeError("browser crashed"))

    assert await DeepContentFetcher(config, browser_launcher=launcher).fetch_all(link_records) == []


async def test_pause_follows_every_item(monkeypatch, link_records):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(base, "asyncio", SimpleNamespace(sleep=fake_sleep))
    config = ScraperConfig({'scraper': {'delay_ms': 350}})
    page = pages_for(link_records, {link_records[1].url: RuntimeError("net::ERR_CONNECTION_RESET")})

    records = await DeepContentFetcher(config, browser_launcher=FakeLauncher(page)).fetch_all(link_records)

    assert len(records) == 3
    assert sleeps == [pytest.approx(0.35)] * 3


async def test_detail_viewport(config, link_records):
    launcher = FakeLauncher(pages_for(link_records))

    await DeepContentFetcher(config, browser_launcher=launcher).fetch_all(link_records)

    assert launcher.browser.context_options["viewport"] == {"width": 1200, "height": 800}
