"""Browser lifecycle management for DVSA automation."""

from typing import Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from ...constants import Timeouts


class BrowserManager:
    """Owns one Playwright driver, browser and context."""

    def __init__(
        self,
        headless: bool = False,
        engine: str = "firefox",
        navigation_timeout: int = Timeouts.NAVIGATION,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Launch without a visible window
            engine: Playwright browser type name (firefox, chromium, webkit)
            navigation_timeout: Default navigation timeout for new pages (ms)
        """
        self.headless = headless
        self.engine = engine
        self.navigation_timeout = navigation_timeout
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self._page_count: int = 0

    @property
    def is_started(self) -> bool:
        return self.context is not None

    @property
    def page_count(self) -> int:
        """Number of pages opened since start()."""
        return self._page_count

    async def start(self) -> None:
        """Launch browser and create a context."""
        if self.browser is not None:
            logger.warning("Browser already started")
            return

        try:
            self.playwright = await async_playwright().start()
            browser_type = getattr(self.playwright, self.engine)
            self.browser = await browser_type.launch(headless=self.headless)
            self.context = await self.browser.new_context()
            self.context.set_default_navigation_timeout(self.navigation_timeout)
            logger.info(f"Browser started ({self.engine}, headless={self.headless})")
        except Exception:
            # Clean up partial resources on error
            await self.close()
            raise

    async def new_page(self) -> Page:
        """
        Open a new page (tab) in the shared context.

        Raises:
            RuntimeError: If browser context is not initialized
        """
        if self.context is None:
            raise RuntimeError("Browser context is not initialized. Call start() first.")

        page = await self.context.new_page()
        self._page_count += 1
        return page

    async def close(self) -> None:
        """Clean up browser resources; each step runs even if an earlier one fails."""
        if self.context:
            try:
                await self.context.close()
                logger.debug("Browser context closed")
            except Exception as e:
                logger.warning(f"Failed to close browser context: {e}")
            finally:
                self.context = None

        if self.browser:
            try:
                await self.browser.close()
                logger.debug("Browser closed")
            except Exception as e:
                logger.warning(f"Failed to close browser: {e}")
            finally:
                self.browser = None

        if self.playwright:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning(f"Failed to stop Playwright: {e}")
            finally:
                self.playwright = None

        logger.debug("Browser resources cleaned up")
