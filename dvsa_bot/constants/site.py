"""DVSA site addresses, selectors and page headings."""

import re
from typing import Final, Pattern


class URLs:
    """Remote origins visited during a session."""

    CLOUDFLARE: Final[str] = "https://www.cloudflare.com/"
    DVSA_ORIGIN: Final[str] = "https://driverpracticaltest.dvsa.gov.uk"
    APPLICATION: Final[str] = "https://driverpracticaltest.dvsa.gov.uk/application"
    QUEUE_HOST: Final[str] = "queue.driverpracticaltest.dvsa.gov.uk"
    APPLICATION_PATTERN: Final[Pattern[str]] = re.compile(
        r"^https://driverpracticaltest\.dvsa\.gov\.uk/application.*"
    )


class PageTitles:
    """Headings rendered in `.page-header h1` for each step of the flow."""

    CHOOSE_TEST_TYPE: Final[str] = "Choose type of test"
    LICENCE_DETAILS: Final[str] = "Licence details - Car test"
    TEST_DATE: Final[str] = "Test date - Car test"
    TEST_CENTRE: Final[str] = "Test centre - Car test"
    SEARCH_RESULTS: Final[str] = "Your search results"


class Selectors:
    """CSS selectors used by the session controller."""

    PAGE_HEADING: Final[str] = ".page-header h1"

    # Choose type of test
    TEST_TYPE_CAR: Final[str] = "#test-type-car"

    # Licence details
    DRIVING_LICENCE: Final[str] = "#driving-licence"
    EXTENDED_TEST_NO: Final[str] = "#extended-test-no"
    SPECIAL_NEEDS_NONE: Final[str] = "#special-needs-none"
    LICENCE_SUBMIT: Final[str] = "#driving-licence-submit"

    # Test date
    LICENCE_INVALID: Final[str] = "#driverLicenceNumber-invalid"
    TEST_CHOICE_CALENDAR: Final[str] = "#test-choice-calendar"

    # Test centre search
    TEST_CENTRES_INPUT: Final[str] = "#test-centres-input"
    TEST_CENTRES_SUBMIT: Final[str] = "#test-centres-submit"
    SEARCH_RESULTS_HEADING: Final[str] = "#search-results > hgroup > h2"
    FETCH_MORE_CENTRES: Final[str] = "#fetch-more-centres"

    # Search result entries
    CENTRE_RESULT: Final[str] = ".test-centre-details-link"
    CENTRE_NAME: Final[str] = "h4"
    CENTRE_STATUS: Final[str] = "h5"
    CENTRE_ADDRESS: Final[str] = "address"
    CENTRE_LINK: Final[str] = "a"

    # Detail page
    SLOT_LABEL: Final[str] = ".SlotPicker-slot-label"
    SLOT_INPUT: Final[str] = ".SlotPicker-slot"
    SLOT_VALUE_ATTRIBUTE: Final[str] = "value"


class SearchResults:
    """Search result page behaviour."""

    # Centres revealed by each click on "fetch more centres"
    CENTRES_PER_FETCH: Final[int] = 4
    DEFAULT_NEAREST_CENTRES: Final[int] = 80
    AVAILABLE_MARKER: Final[str] = "available tests around"
    # Placeholder date submitted to get past the test date page
    DUMMY_DATE_FORMAT: Final[str] = "%d/%m/%y"
