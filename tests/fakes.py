"""Scripted stand-ins for the DVSA site used by session tests."""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

from dvsa_bot.constants import PageTitles, Selectors, URLs

QUEUE_URL = "https://queue.driverpracticaltest.dvsa.gov.uk/?c=dvsa&e=practicaltest"

# Heading shown on each step of the fake site
HEADINGS: Dict[str, Optional[str]] = {
    "choose": PageTitles.CHOOSE_TEST_TYPE,
    "licence": PageTitles.LICENCE_DETAILS,
    "date": PageTitles.TEST_DATE,
    "centre": PageTitles.TEST_CENTRE,
}


def make_element(
    text: Optional[str] = None,
    children: Optional[Dict[str, MagicMock]] = None,
    attrs: Optional[Dict[str, str]] = None,
) -> MagicMock:
    """Mock ElementHandle with text, child elements and attributes."""
    children = children or {}
    attrs = attrs or {}
    element = MagicMock()
    element.text_content = AsyncMock(return_value=text)
    element.query_selector = AsyncMock(side_effect=lambda selector: children.get(selector))
    element.get_attribute = AsyncMock(side_effect=lambda name: attrs.get(name))
    return element


def make_centre(name: str, status: str, href: str, address: str = "1 High Street") -> MagicMock:
    """Mock search result entry for one test centre."""
    return make_element(
        children={
            Selectors.CENTRE_NAME: make_element(f"\n  {name}\n"),
            Selectors.CENTRE_STATUS: make_element(status),
            Selectors.CENTRE_ADDRESS: make_element(address),
            Selectors.CENTRE_LINK: make_element(attrs={"href": href}),
        }
    )


def make_slot_cell(millis: Optional[str]) -> MagicMock:
    slot = make_element(attrs={"value": millis} if millis is not None else {})
    return make_element(children={Selectors.SLOT_INPUT: slot})


class FakeDVSAPage:
    """Main tab that moves between pages the way the site does."""

    def __init__(
        self,
        licence_valid: bool = True,
        queued: bool = False,
        centres: Optional[List[MagicMock]] = None,
        results_heading: Optional[str] = PageTitles.SEARCH_RESULTS,
    ):
        self.licence_valid = licence_valid
        self.queued = queued
        self.centres = centres or []
        self.results_heading = results_heading
        self.headings: Dict[str, Optional[str]] = dict(HEADINGS)
        self.step = "blank"
        self.url = "about:blank"
        self.searched = False
        self.closed = False
        self.typed: Dict[str, str] = {}
        self.type_delays: Dict[str, Optional[int]] = {}
        self.clicks: List[str] = []
        self.visited: List[str] = []
        self.url_waits: List[tuple] = []

    @property
    def heading(self) -> Optional[str]:
        return self.headings.get(self.step)

    def fetch_more_clicks(self) -> int:
        return self.clicks.count(Selectors.FETCH_MORE_CENTRES)

    async def goto(self, url, wait_until="load", timeout=None):
        self.visited.append(url)
        if url == URLs.APPLICATION:
            self.url, self.step = (QUEUE_URL, "queue") if self.queued else (url, "choose")
        else:
            self.url, self.step = url, "cloudflare"

    async def wait_for_url(self, pattern, timeout=None):
        self.url_waits.append((pattern, timeout))
        self.url, self.step = URLs.APPLICATION, "choose"

    async def type(self, selector, text, delay=None):
        self.typed[selector] = text
        self.type_delays[selector] = delay

    async def click(self, selector):
        self.clicks.append(selector)
        if selector == Selectors.TEST_TYPE_CAR and self.step == "choose":
            self.step = "licence"
        elif selector == Selectors.LICENCE_SUBMIT and self.step == "licence":
            self.step = "date"
        elif selector == Selectors.LICENCE_SUBMIT and self.step == "date":
            # An invalid licence keeps the session on the date page
            if self.licence_valid and Selectors.TEST_CHOICE_CALENDAR in self.typed:
                self.step = "centre"
        elif selector == Selectors.TEST_CENTRES_SUBMIT and self.step == "centre":
            self.searched = True

    async def query_selector(self, selector):
        if selector == Selectors.PAGE_HEADING:
            return make_element(self.heading) if self.heading is not None else None
        if selector == Selectors.LICENCE_INVALID:
            if self.step == "date" and not self.licence_valid:
                return make_element("Enter a valid driving licence number")
            return None
        if selector == Selectors.SEARCH_RESULTS_HEADING:
            if self.searched and self.results_heading is not None:
                return make_element(self.results_heading)
            return None
        return None

    async def query_selector_all(self, selector):
        if selector == Selectors.CENTRE_RESULT and self.searched:
            return list(self.centres)
        return []

    def is_closed(self):
        return self.closed

    async def close(self):
        self.closed = True


class FakeDetailPage:
    """Detail tab listing slot cells for whichever centre URL it is sent to."""

    def __init__(self, slots_by_url: Dict[str, List[Optional[str]]]):
        self.slots_by_url = slots_by_url
        self.url = "about:blank"
        self.closed = False

    async def goto(self, url, wait_until="load", timeout=None):
        self.url = url

    async def query_selector_all(self, selector):
        if selector != Selectors.SLOT_LABEL:
            return []
        return [make_slot_cell(millis) for millis in self.slots_by_url.get(self.url, [])]

    async def query_selector(self, selector):
        return None

    def is_closed(self):
        return self.closed

    async def close(self):
        self.closed = True


class FakeBrowserManager:
    """BrowserManager double: first page is the main tab, later ones are detail tabs."""

    def __init__(self, main_page: FakeDVSAPage, slots_by_url=None, fail_start: bool = False):
        self.main_page = main_page
        self.slots_by_url = slots_by_url or {}
        self.fail_start = fail_start
        self.started = False
        self.closed = 0
        self.detail_pages: List[FakeDetailPage] = []
        self._opened_main = False

    async def start(self):
        if self.fail_start:
            raise RuntimeError("browser failed to launch")
        self.started = True

    async def new_page(self):
        if not self._opened_main:
            self._opened_main = True
            return self.main_page
        page = FakeDetailPage(self.slots_by_url)
        self.detail_pages.append(page)
        return page

    async def close(self):
        self.closed += 1
        self.started = False
