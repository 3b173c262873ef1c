"""Session controller for the DVSA practical test booking site."""

import asyncio
from datetime import date
from typing import List, Optional
from urllib.parse import urljoin

from loguru import logger
from playwright.async_api import ElementHandle
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ...constants import PageTitles, SearchResults, Selectors, URLs
from ...core.config.settings import DVSASettings, get_settings
from ...core.exceptions import (
    NoResultsError,
    NotLoggedInError,
    QueueTimeoutError,
    SessionError,
    UnexpectedPageStateError,
)
from ...core.logger import mask_licence
from ..browser.browser_manager import BrowserManager
from ..browser.pacing import PacingPolicy
from ..browser.page_driver import PageDriver
from .models import TimeSlot, discard_empty, epoch_millis_to_datetime, fetch_more_clicks
from .page_state import (
    PageAction,
    PageIdentity,
    PageStateDetector,
    ProbeOutcome,
    VerificationPolicy,
    transition,
)


class DVSASession:
    """
    One automated browsing session against the DVSA booking site.

    The session owns its browser and page exclusively: both are created by
    ``login()`` and released by ``close()``.

    Example:
        ```python
        async with DVSASession(driving_licence="MORGA657054SM9IJ") as session:
            if await session.login():
                slots = await session.check_availability("SW1A1AA", 8)
        ```
    """

    def __init__(
        self,
        driving_licence: str,
        headless: Optional[bool] = None,
        settings: Optional[DVSASettings] = None,
        pacing: Optional[PacingPolicy] = None,
        browser_manager: Optional[BrowserManager] = None,
        detector: Optional[PageStateDetector] = None,
    ):
        """
        Initialize session.

        Args:
            driving_licence: Driving licence number used as the credential
            headless: Run the browser without a window (defaults to settings)
            settings: Runtime settings (defaults to the global settings)
            pacing: Pause policy between actions (defaults to settings)
            browser_manager: Browser engine to use instead of a fresh one
            detector: Page state detector (defaults to the settings' policy)
        """
        self.settings = settings or get_settings()
        self.driving_licence = driving_licence
        self.headless = self.settings.headless if headless is None else headless
        self.pacing = pacing or PacingPolicy.from_settings(self.settings)
        self.detector = detector or PageStateDetector(
            VerificationPolicy(self.settings.verification)
        )
        self._browser_manager = browser_manager

        self.browser: Optional[BrowserManager] = None
        self.driver: Optional[PageDriver] = None
        self.state: Optional[PageIdentity] = None

    async def __aenter__(self) -> "DVSASession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self.browser is not None and self.driver is not None

    def _new_browser(self) -> BrowserManager:
        if self._browser_manager is not None:
            return self._browser_manager
        return BrowserManager(
            headless=self.headless,
            engine=self.settings.browser,
            navigation_timeout=self.settings.navigation_timeout_ms,
        )

    def _require_open(self) -> PageDriver:
        if not self.is_open:
            raise NotLoggedInError("Session not started, call login() first")
        return self.driver

    async def _open(self) -> None:
        self.browser = self._new_browser()
        try:
            await self.browser.start()
            page = await self.browser.new_page()
        except Exception:
            await self.close()
            raise
        self.driver = PageDriver(page, navigation_timeout=self.settings.navigation_timeout_ms)
        self.state = PageIdentity.BLANK

    async def login(self) -> bool:
        """
        Walk from a blank page to the test date page with the licence number.

        Returns:
            True if the site accepted the licence number, False otherwise

        Raises:
            SessionError: If this session was already started
            UnexpectedPageStateError: If a page on the way is not the expected one
            QueueTimeoutError: If a queue ceiling is configured and exceeded
        """
        if self.browser is not None:
            raise SessionError("Session already started, create a new session to log in again")

        await self._open()
        driver = self.driver
        logger.info(f"Logging in with licence {mask_licence(self.driving_licence)}")

        # At page: Blank
        await self.pacing.pause()

        # At page: Cloudflare
        # The page sometimes hangs on secondary resources, only its cookie is needed
        await driver.navigate(URLs.CLOUDFLARE, wait_until="domcontentloaded")
        self.state = transition(self.state, PageAction.WARM_UP)
        await self.pacing.pause()

        # At page: DVSA application, possibly behind the queue
        await driver.navigate(URLs.APPLICATION)
        await self.pacing.pause()
        await self._pass_queue(driver)

        # At page: Choose type of test
        await self.detector.verify(driver, PageIdentity.CHOOSE_TEST_TYPE)
        await driver.click(Selectors.TEST_TYPE_CAR)
        self.state = transition(self.state, PageAction.CHOOSE_CAR_TEST)
        await self.pacing.pause()

        # At page: Licence details - Car test
        await self.detector.verify(driver, PageIdentity.LICENCE_DETAILS)
        await driver.type_with_delay(
            Selectors.DRIVING_LICENCE, self.driving_licence, self.settings.typing_delay_ms
        )
        await driver.click(Selectors.EXTENDED_TEST_NO)
        await driver.click(Selectors.SPECIAL_NEEDS_NONE)
        await driver.click(Selectors.LICENCE_SUBMIT)
        self.state = transition(self.state, PageAction.SUBMIT_LICENCE)
        await self.pacing.pause()

        # At page: Test date - Car test
        await self.detector.verify(driver, PageIdentity.TEST_DATE)
        error_message = await driver.query(Selectors.LICENCE_INVALID)
        is_logged_in = error_message is None

        if is_logged_in:
            logger.info("Licence accepted")
        else:
            logger.info(f"Licence rejected: {mask_licence(self.driving_licence)}")
        return is_logged_in

    async def _pass_queue(self, driver: PageDriver) -> None:
        """Wait out the queue interstitial, which the site shows non-deterministically."""
        if URLs.QUEUE_HOST not in driver.current_url():
            self.state = transition(
                self.state, PageAction.OPEN_APPLICATION, PageIdentity.CHOOSE_TEST_TYPE
            )
            return

        self.state = transition(self.state, PageAction.OPEN_APPLICATION, PageIdentity.QUEUE)
        timeout = self.settings.queue_timeout_ms
        logger.info(f"Queued at {driver.current_url()}, waiting (timeout={timeout or 'none'} ms)")
        try:
            await driver.wait_for_url_matching(URLs.APPLICATION_PATTERN, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise QueueTimeoutError(self.settings.queue_timeout, driver.current_url()) from e
        self.state = transition(self.state, PageAction.LEAVE_QUEUE)
        logger.info("Left the queue")

    async def check_availability(
        self,
        postcode: str,
        check_num_nearest_test_centres: int = SearchResults.DEFAULT_NEAREST_CENTRES,
    ) -> List[TimeSlot]:
        """
        Search test centres near a postcode and collect their bookable slots.

        Args:
            postcode: Postcode to search around
            check_num_nearest_test_centres: How many of the nearest centres to list

        Returns:
            Centres with at least one slot, in search result order

        Raises:
            NotLoggedInError: If the session is not past the test date page
            NoResultsError: If the search did not produce a results list
        """
        driver = self._require_open()
        await self._reach_test_centre(driver)

        # At page: Test centre - Car test
        await driver.type_with_delay(
            Selectors.TEST_CENTRES_INPUT, postcode, self.settings.typing_delay_ms
        )
        await driver.click(Selectors.TEST_CENTRES_SUBMIT)
        self.state = transition(self.state, PageAction.SEARCH_CENTRES)
        await self.pacing.pause()

        # At search results
        heading = await driver.read_text(Selectors.SEARCH_RESULTS_HEADING)
        if heading != PageTitles.SEARCH_RESULTS:
            raise NoResultsError(postcode, heading)

        for _ in range(fetch_more_clicks(check_num_nearest_test_centres)):
            await driver.click(Selectors.FETCH_MORE_CENTRES)

        results = await driver.query_all(Selectors.CENTRE_RESULT)
        statuses = await asyncio.gather(
            *(driver.read_child_text(result, Selectors.CENTRE_STATUS) for result in results)
        )
        available = [
            result
            for result, status in zip(results, statuses)
            if status and SearchResults.AVAILABLE_MARKER in status
        ]
        logger.info(f"{len(available)} of {len(results)} centres near {postcode} report tests")

        # One tab at a time: tabs share the browser context
        time_slots = []
        for result in available:
            time_slots.append(await self._read_centre(driver, result))

        # discard invalid results with empty slots
        return discard_empty(time_slots)

    async def _reach_test_centre(self, driver: PageDriver) -> None:
        outcome, observed = await self.detector.probe(
            driver, PageIdentity.TEST_DATE, PageIdentity.TEST_CENTRE
        )

        if outcome is ProbeOutcome.AT_NEXT:
            self.state = PageIdentity.TEST_CENTRE
            return
        if outcome is ProbeOutcome.UNEXPECTED:
            raise NotLoggedInError(actual=observed.description)

        # At page: Test date - Car test
        # Enter a dummy date to continue
        dummy_date = date.today().strftime(SearchResults.DUMMY_DATE_FORMAT)
        await driver.type_with_delay(
            Selectors.TEST_CHOICE_CALENDAR, dummy_date, self.settings.typing_delay_ms
        )
        await driver.click(Selectors.LICENCE_SUBMIT)
        await self.pacing.pause()

        observed = await self.detector.detect(driver)
        if observed.identity is not PageIdentity.TEST_CENTRE:
            raise NotLoggedInError(actual=observed.description)
        self.state = transition(
            PageIdentity.TEST_DATE, PageAction.SUBMIT_DUMMY_DATE, observed.identity
        )

    async def _read_centre(self, driver: PageDriver, result: ElementHandle) -> TimeSlot:
        """Read a centre entry and scrape its slots from the detail page in a new tab."""
        name = await driver.read_child_text(result, Selectors.CENTRE_NAME)
        if name is None:
            raise UnexpectedPageStateError("test centre entry with a name")
        address = await driver.read_child_text(result, Selectors.CENTRE_ADDRESS)
        if address is None:
            raise UnexpectedPageStateError("test centre entry with an address", name)

        link = await driver.query_child(result, Selectors.CENTRE_LINK)
        href = await driver.read_attribute(link, "href") if link is not None else None
        if not href:
            raise UnexpectedPageStateError("test centre entry with a detail link", name)

        url = urljoin(URLs.DVSA_ORIGIN, href)
        tab = PageDriver(
            await self.browser.new_page(), navigation_timeout=self.settings.navigation_timeout_ms
        )
        try:
            await tab.navigate(url)
            await self.pacing.pause()

            dates = []
            for cell in await tab.query_all(Selectors.SLOT_LABEL):
                slot = await tab.query_child(cell, Selectors.SLOT_INPUT)
                if slot is None:
                    raise UnexpectedPageStateError("slot label with a slot input", url)
                value = await tab.read_attribute(slot, Selectors.SLOT_VALUE_ATTRIBUTE)
                if value is None:
                    raise UnexpectedPageStateError("slot input with a value attribute", url)
                dates.append(epoch_millis_to_datetime(value))
        finally:
            await tab.close()

        logger.info(f"{name}: {len(dates)} slots")
        return TimeSlot(name=name, address=address, dates=dates)

    async def close(self) -> None:
        """Release the page and browser. Safe to call repeatedly or before login()."""
        if self.driver is not None:
            try:
                await self.driver.close()
            except Exception as e:
                logger.warning(f"Failed to close page: {e}")
            finally:
                self.driver = None

        if self.browser is not None:
            await self.browser.close()
            self.browser = None

        self.state = None
