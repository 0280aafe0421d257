from typing import List, Sequence

from examscraper.constants import ERROR_MESSAGE_MAX_LENGTH, MESSAGES, NOT_AVAILABLE, QA_SELECTORS
from examscraper.scraper.base import BaseScraper
from examscraper.scraper.models import LinkRecord, QaRecord
from examscraper.utils.page_parser import parse_qa_page
from examscraper.utils.text_processor import TextProcessor


class DeepContentFetcher(BaseScraper):
    """
    Stage 2: visit every extracted link and scrape its question content.

    Links are processed one at a time on a single page. A page that fails to
    load or render is replaced by an error placeholder, so the result always
    has one QaRecord per input link.
    """

    window = 'detail'

    async def scrape(self, target: Sequence[LinkRecord]) -> List[QaRecord]:
        return await self.fetch_all(target)

    async def fetch_all(self, links: Sequence[LinkRecord]) -> List[QaRecord]:
        """
        Scrape question, options and answer for each link, in order.

        Returns an empty list without opening a browser when links is empty,
        and an empty list when the browser session itself cannot be run.
        """
        if not links:
            self.logger.warning(MESSAGES['no_deep_links'])
            return []

        scraped_data: List[QaRecord] = []
        total = len(links)

        try:
            self.logger.info(MESSAGES['deep_start'].format(count=total))
            await self.initialize()

            for index, link in enumerate(links, 1):
                progress = round(index / total * 100)
                self.logger.info(MESSAGES['deep_progress'].format(
                    progress=progress, index=index, total=total,
                    number=link.question_number or NOT_AVAILABLE
                ))

                try:
                    record = await self.fetch_one(link)
                except Exception as page_error:
                    self.logger.warning(MESSAGES['error_scrape_fail'].format(
                        index=index,
                        number=link.question_number,
                        error=TextProcessor.truncate_text(str(page_error), ERROR_MESSAGE_MAX_LENGTH)
                    ))
                    self.logger.debug("Question page error details:", exc_info=True)
                    record = QaRecord.error_placeholder(link)

                scraped_data.append(record)
                await self._pause()

            self.logger.info(MESSAGES['deep_success'].format(count=len(scraped_data)))
            return scraped_data

        except Exception as e:
            self.logger.error(MESSAGES['error_deep_critical'].format(error=e))
            self.logger.debug("Deep scraping error details:", exc_info=True)
            return []
        finally:
            await self.close()

    async def fetch_one(self, link: LinkRecord) -> QaRecord:
        """
        Load a single question page and extract its content.

        Raises:
            playwright.async_api.TimeoutError: If navigation or the content marker wait times out
            ContentNotFoundError: If the rendered page has no QA container
        """
        await self.page.goto(link.url, wait_until='domcontentloaded', timeout=self.config.timeout('detail_page'))
        await self.page.wait_for_selector(
            QA_SELECTORS['content_marker'],
            state='attached',
            timeout=self.config.timeout('content_marker')
        )

        content = parse_qa_page(await self.page.content())

        return QaRecord(
            question_number=link.question_number,
            question_text=content['question'],
            options=content['options'],
            answer=content['answer']
        )
