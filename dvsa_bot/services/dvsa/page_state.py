"""Explicit page identity model for the DVSA booking flow.

The remote site keeps the real state; this module only names the pages we
can observe, the transitions the controller may drive between them, and how
an observed page is compared with the page the next step needs.

Flow:
    BLANK -> CLOUDFLARE -> [QUEUE ->] CHOOSE_TEST_TYPE -> LICENCE_DETAILS
          -> TEST_DATE -> TEST_CENTRE -> SEARCH_RESULTS
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, Optional, Tuple

from loguru import logger

from ...constants import PageTitles, Selectors, URLs
from ...core.exceptions import UnexpectedPageStateError
from ..browser.page_driver import PageDriver


class PageIdentity(Enum):
    """Pages the session can be observed on."""

    BLANK = auto()
    CLOUDFLARE = auto()
    QUEUE = auto()
    CHOOSE_TEST_TYPE = auto()
    LICENCE_DETAILS = auto()
    TEST_DATE = auto()
    TEST_CENTRE = auto()
    SEARCH_RESULTS = auto()
    UNKNOWN = auto()


class PageAction(Enum):
    """Actions that move the session from one page to another."""

    WARM_UP = auto()
    OPEN_APPLICATION = auto()
    LEAVE_QUEUE = auto()
    CHOOSE_CAR_TEST = auto()
    SUBMIT_LICENCE = auto()
    SUBMIT_DUMMY_DATE = auto()
    SEARCH_CENTRES = auto()


class ProbeOutcome(Enum):
    """Where the session was found relative to an expected step."""

    AT_EXPECTED = auto()
    AT_NEXT = auto()
    UNEXPECTED = auto()


class VerificationPolicy(Enum):
    """How a heading mismatch before a step is treated."""

    STRICT = "strict"
    LENIENT = "lenient"


# (state, action) -> pages the action may land on
_TRANSITIONS: Dict[Tuple[PageIdentity, PageAction], FrozenSet[PageIdentity]] = {
    (PageIdentity.BLANK, PageAction.WARM_UP): frozenset({PageIdentity.CLOUDFLARE}),
    (PageIdentity.CLOUDFLARE, PageAction.OPEN_APPLICATION): frozenset(
        {PageIdentity.QUEUE, PageIdentity.CHOOSE_TEST_TYPE}
    ),
    (PageIdentity.QUEUE, PageAction.LEAVE_QUEUE): frozenset({PageIdentity.CHOOSE_TEST_TYPE}),
    (PageIdentity.CHOOSE_TEST_TYPE, PageAction.CHOOSE_CAR_TEST): frozenset(
        {PageIdentity.LICENCE_DETAILS}
    ),
    # An invalid licence still lands on the test date page, with an inline error
    (PageIdentity.LICENCE_DETAILS, PageAction.SUBMIT_LICENCE): frozenset({PageIdentity.TEST_DATE}),
    (PageIdentity.TEST_DATE, PageAction.SUBMIT_DUMMY_DATE): frozenset({PageIdentity.TEST_CENTRE}),
    (PageIdentity.TEST_CENTRE, PageAction.SEARCH_CENTRES): frozenset({PageIdentity.SEARCH_RESULTS}),
}

_HEADINGS: Dict[str, PageIdentity] = {
    PageTitles.CHOOSE_TEST_TYPE: PageIdentity.CHOOSE_TEST_TYPE,
    PageTitles.LICENCE_DETAILS: PageIdentity.LICENCE_DETAILS,
    PageTitles.TEST_DATE: PageIdentity.TEST_DATE,
    PageTitles.TEST_CENTRE: PageIdentity.TEST_CENTRE,
}

_TITLES: Dict[PageIdentity, str] = {identity: title for title, identity in _HEADINGS.items()}


def next_states(state: PageIdentity, action: PageAction) -> FrozenSet[PageIdentity]:
    """Pages ``action`` may lead to from ``state`` (empty if not allowed)."""
    return _TRANSITIONS.get((state, action), frozenset())


def transition(
    state: PageIdentity, action: PageAction, observed: Optional[PageIdentity] = None
) -> PageIdentity:
    """
    Apply an action to a page state.

    Args:
        state: Page the action is performed on
        action: Action performed
        observed: Page seen after the action; required when the action has
            more than one possible outcome

    Returns:
        The resulting page

    Raises:
        UnexpectedPageStateError: If the action is not valid from ``state``
            or ``observed`` is not one of its outcomes
    """
    targets = next_states(state, action)
    if not targets:
        raise UnexpectedPageStateError(
            expected=f"a page accepting {action.name}", actual=state.name, action=action.name
        )

    if observed is None:
        if len(targets) != 1:
            raise UnexpectedPageStateError(
                expected=" or ".join(sorted(t.name for t in targets)),
                actual=None,
                action=action.name,
            )
        return next(iter(targets))

    if observed not in targets:
        raise UnexpectedPageStateError(
            expected=" or ".join(sorted(t.name for t in targets)),
            actual=observed.name,
            action=action.name,
        )
    return observed


def title_for(identity: PageIdentity) -> str:
    """Displayed heading of a page, or its identity name when it has none."""
    return _TITLES.get(identity, identity.name)


def identify_heading(heading: Optional[str]) -> PageIdentity:
    if heading is None:
        return PageIdentity.UNKNOWN
    return _HEADINGS.get(heading.strip(), PageIdentity.UNKNOWN)


def identify_url(url: Optional[str]) -> PageIdentity:
    """Identify pages that are recognised by address rather than heading."""
    if not url or url == "about:blank":
        return PageIdentity.BLANK
    if URLs.QUEUE_HOST in url:
        return PageIdentity.QUEUE
    if "cloudflare.com" in url:
        return PageIdentity.CLOUDFLARE
    return PageIdentity.UNKNOWN


@dataclass
class PageStateResult:
    """One observation of the remote page."""

    identity: PageIdentity
    heading: Optional[str]
    url: str

    @property
    def description(self) -> str:
        """What was seen, for error messages."""
        return self.heading if self.heading is not None else self.url


class PageStateDetector:
    """Reads back which page the session is on before state-dependent steps."""

    def __init__(self, policy: VerificationPolicy = VerificationPolicy.STRICT):
        self.policy = policy
        self._last_state: Optional[PageStateResult] = None

    @property
    def last_state(self) -> Optional[PageStateResult]:
        """Get the last detected state without re-scanning."""
        return self._last_state

    async def detect(self, driver: PageDriver) -> PageStateResult:
        """
        Observe the current page.

        The page heading wins; the URL is consulted only when the heading is
        missing or unrecognised.
        """
        url = driver.current_url()
        heading = await driver.read_text(Selectors.PAGE_HEADING)

        identity = identify_heading(heading)
        if identity is PageIdentity.UNKNOWN:
            identity = identify_url(url)

        result = PageStateResult(identity=identity, heading=heading, url=url)
        self._last_state = result
        logger.debug(f"Detected page {identity.name} (heading={heading!r}, url={url})")
        return result

    async def probe(
        self, driver: PageDriver, expected: PageIdentity, following: PageIdentity
    ) -> Tuple[ProbeOutcome, PageStateResult]:
        """
        Compare the current page with an expected page and the one after it.

        Returns:
            (outcome, observation)
        """
        state = await self.detect(driver)
        if state.identity is expected:
            outcome = ProbeOutcome.AT_EXPECTED
        elif state.identity is following:
            outcome = ProbeOutcome.AT_NEXT
        else:
            outcome = ProbeOutcome.UNEXPECTED
        return outcome, state

    async def verify(self, driver: PageDriver, expected: PageIdentity) -> PageStateResult:
        """
        Check the session is on ``expected`` before acting on it.

        Raises:
            UnexpectedPageStateError: On mismatch under the STRICT policy
        """
        state = await self.detect(driver)
        if state.identity is not expected:
            if self.policy is VerificationPolicy.STRICT:
                raise UnexpectedPageStateError(title_for(expected), state.description)
            logger.warning(
                f"Expected page [{title_for(expected)}], saw [{state.description}]; continuing"
            )
        return state
