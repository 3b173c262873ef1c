"""Thin page automation layer over a Playwright page."""

from typing import List, Optional, Pattern, Union

from loguru import logger
from playwright.async_api import ElementHandle, Page

from ...constants import Delays, Timeouts

__all__ = ["PageDriver"]


def _clean(text: Optional[str]) -> Optional[str]:
    return text.strip() if text is not None else None


class PageDriver:
    """Page automation capability used by the session controller."""

    def __init__(self, page: Page, navigation_timeout: int = Timeouts.NAVIGATION):
        """
        Initialize page driver.

        Args:
            page: Playwright page object
            navigation_timeout: Default navigation timeout in milliseconds
        """
        self.page = page
        self.navigation_timeout = navigation_timeout

    def current_url(self) -> str:
        """URL of the page as last committed by the browser."""
        return self.page.url

    async def navigate(self, url: str, wait_until: str = "load") -> None:
        """
        Navigate to a URL.

        Args:
            url: Absolute URL
            wait_until: Playwright load state to wait for ("load", "domcontentloaded", ...)
        """
        logger.debug(f"Navigating to {url} (wait_until={wait_until})")
        await self.page.goto(url, wait_until=wait_until, timeout=self.navigation_timeout)

    async def click(self, selector: str) -> None:
        await self.page.click(selector)

    async def type_with_delay(
        self, selector: str, text: str, delay_ms: int = Delays.TYPING_PER_CHAR_MS
    ) -> None:
        """Type text one key press at a time, ``delay_ms`` apart."""
        await self.page.type(selector, text, delay=delay_ms)

    async def query(self, selector: str) -> Optional[ElementHandle]:
        """First element matching selector, or None (does not wait)."""
        return await self.page.query_selector(selector)

    async def query_all(self, selector: str) -> List[ElementHandle]:
        return await self.page.query_selector_all(selector)

    async def read_text(self, selector: str) -> Optional[str]:
        """
        Read the text content of the first element matching selector.

        Returns:
            Stripped text, or None if no element matches
        """
        element = await self.query(selector)
        if element is None:
            return None
        return _clean(await element.text_content())

    async def query_child(self, element: ElementHandle, selector: str) -> Optional[ElementHandle]:
        return await element.query_selector(selector)

    async def read_child_text(self, element: ElementHandle, selector: str) -> Optional[str]:
        """Stripped text of the first descendant of element matching selector."""
        child = await self.query_child(element, selector)
        if child is None:
            return None
        return _clean(await child.text_content())

    async def read_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        return await element.get_attribute(name)

    async def wait_for_url_matching(
        self, pattern: Union[str, Pattern[str]], timeout: int = Timeouts.QUEUE_UNBOUNDED
    ) -> None:
        """
        Block until the page URL matches pattern.

        Args:
            pattern: Glob string or compiled regex
            timeout: Milliseconds; 0 waits indefinitely
        """
        await self.page.wait_for_url(pattern, timeout=timeout)

    async def close(self) -> None:
        if not self.page.is_closed():
            await self.page.close()
