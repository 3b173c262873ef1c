"""Command line entry point: log in and list available test slots."""

import argparse
import asyncio
import json
from typing import List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from .constants import SearchResults
from .core.config.properties import Properties
from .core.config.settings import get_settings
from .core.exceptions import DVSABotError
from .core.logger import setup_logging
from .services.dvsa.models import TimeSlot
from .services.dvsa.session import DVSASession

EXIT_OK = 0
EXIT_LOGIN_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dvsa-bot", description="Check DVSA practical driving test availability"
    )
    parser.add_argument(
        "--licence", help="Driving licence number (default: property dvsa.test.license)"
    )
    parser.add_argument("--postcode", help="Postcode to search (default: property dvsa.test.postcode)")
    parser.add_argument(
        "--depth",
        type=int,
        default=SearchResults.DEFAULT_NEAREST_CENTRES,
        help="Number of nearest test centres to check",
    )
    parser.add_argument(
        "--headless", action="store_true", default=None, help="Run the browser without a window"
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: DVSA_LOG_LEVEL)",
    )
    return parser


def format_slots(slots: List[TimeSlot], as_json: bool = False) -> str:
    """Render results for the terminal."""
    if as_json:
        return json.dumps([slot.to_dict() for slot in slots], indent=2)
    if not slots:
        return "No available tests found"

    lines = []
    for slot in slots:
        lines.append(f"{slot.name} ({len(slot.dates)} slots)")
        lines.append(f"  {' '.join(slot.address.split())}")
        for when in slot.dates:
            lines.append(f"  - {when:%a %d %b %Y %H:%M}")
    return "\n".join(lines)


async def run(
    licence: str, postcode: str, depth: int, headless: Optional[bool] = None
) -> Optional[List[TimeSlot]]:
    """
    Log in and check availability.

    Returns:
        Available slots, or None if the licence was rejected
    """
    async with DVSASession(driving_licence=licence, headless=headless) as session:
        if not await session.login():
            return None
        return await session.check_availability(postcode, depth)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
        log_dir=settings.log_dir,
    )

    try:
        licence = args.licence or Properties.get("dvsa.test.license")
        postcode = args.postcode or Properties.get("dvsa.test.postcode")
        if not licence or not postcode:
            logger.error("A licence number and postcode are required")
            return EXIT_ERROR

        slots = asyncio.run(run(str(licence), str(postcode), args.depth, args.headless))
    except DVSABotError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return EXIT_ERROR
    except PlaywrightError as e:
        logger.error(f"Browser error: {e}")
        return EXIT_ERROR

    if slots is None:
        logger.error("Login failed, the licence number was not accepted")
        return EXIT_LOGIN_FAILED

    print(format_slots(slots, as_json=args.json))
    return EXIT_OK
