import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from examscraper.scraper.config import ScraperConfig

BrowserLauncher = Callable[[], Awaitable[Browser]]


class BaseScraper(ABC):
    """
    Shared browser session handling for the scraping stages.

    Each stage owns one browser, one context and one page for the lifetime of
    a single invocation. ``browser_launcher`` replaces the Playwright launch,
    which is how tests hand in a fake browser.
    """

    # Which configured viewport the stage uses ('listing' or 'detail')
    window = 'listing'

    def __init__(self, config: Optional[ScraperConfig] = None,
                 browser_launcher: Optional[BrowserLauncher] = None):
        self.config = config or ScraperConfig()
        self.logger = logging.getLogger(self.__class__.__name__)
        self._browser_launcher = browser_launcher or self._launch_chromium
        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def _launch_chromium(self) -> Browser:
        self._playwright = await async_playwright().start()
        return await self._playwright.chromium.launch(
            headless=self.config.headless,
            args=self.config.browser_args
        )

    async def initialize(self) -> None:
        """Launch the browser and open the page used by this stage."""
        try:
            self.browser = await self._browser_launcher()
            self.context = await self.browser.new_context(
                user_agent=self.config.user_agent,
                viewport=self.config.window(self.window),
                ignore_https_errors=True
            )
            self.page = await self.context.new_page()
            self.logger.debug(f"Browser session opened (headless={self.config.headless})")
        except Exception as e:
            self.logger.error(f"Failed to initialize browser: {e}")
            raise

    async def close(self) -> None:
        """Close the browser instance."""
        if self.browser:
            try:
                await self.browser.close()
                self.logger.debug("Browser closed successfully")
            except Exception as e:
                self.logger.error(f"Error closing browser: {e}")
        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                self.logger.error(f"Error stopping Playwright: {e}")

        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None

    async def __aenter__(self) -> 'BaseScraper':
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @abstractmethod
    async def scrape(self, target: Any) -> Any:
        """Run the stage against its input and return its records."""
        pass

    async def _pause(self) -> None:
        """Fixed courtesy delay between page loads."""
        delay = self.config.delay_seconds
        if delay > 0:
            self.logger.debug(f"Pausing for {delay:.2f} seconds...")
            await asyncio.sleep(delay)
