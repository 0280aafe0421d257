from typing import List

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from examscraper.constants import LISTING_SELECTORS, MESSAGES
from examscraper.scraper.base import BaseScraper
from examscraper.scraper.models import LinkRecord
from examscraper.utils.page_parser import parse_listing_page


class LinkExtractor(BaseScraper):
    """
    Stage 1: collect question links from an exam listing page.

    Loads the listing page in a headless browser, then hands the rendered
    HTML to the host-side parser which finds the question index container
    and turns each entry into a LinkRecord.
    """

    window = 'listing'

    async def scrape(self, target: str) -> List[LinkRecord]:
        return await self.extract_links(target)

    async def extract_links(self, url: str) -> List[LinkRecord]:
        """
        Extract question links from the listing page at url.

        Any failure is logged and reported as an empty list; the browser is
        closed either way.
        """
        try:
            self.logger.info(MESSAGES['init_browser'])
            await self.initialize()

            await self._load_listing_page(url)

            self.logger.info(MESSAGES['extract_links'])
            html = await self.page.content()
            records = parse_listing_page(html, self.page.url or url)

            self.logger.info(MESSAGES['links_found'].format(count=len(records)))
            return records

        except Exception as e:
            self.logger.error(MESSAGES['error_link_extract'].format(error=e))
            self.logger.debug("Link extraction error details:", exc_info=True)
            return []
        finally:
            await self.close()

    async def _load_listing_page(self, url: str) -> None:
        """
        Navigate to the listing page and wait for it to settle.

        The network-idle and container waits are best effort: when they time
        out the page is parsed as it stands.
        """
        self.logger.debug(f"Navigating to listing page: {url}")
        await self.page.goto(url, wait_until='domcontentloaded', timeout=self.config.timeout('listing_page'))

        try:
            await self.page.wait_for_load_state('networkidle', timeout=self.config.timeout('network_idle'))
        except PlaywrightTimeoutError:
            self.logger.warning("Network did not go idle in time, continuing with current content")

        try:
            await self.page.wait_for_selector(
                LISTING_SELECTORS['container'],
                state='attached',
                timeout=self.config.timeout('listing_selector')
            )
            self.logger.debug("Listing container found")
        except PlaywrightTimeoutError:
            self.logger.warning("Listing container selector not found, waiting fixed time...")
            await self.page.wait_for_timeout(self.config.timeout('listing_fallback_wait'))
