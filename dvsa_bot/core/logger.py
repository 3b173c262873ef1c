"""Logging with Loguru."""

import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Optional, Union

from loguru import logger

__all__ = ["InterceptHandler", "mask_licence", "setup_logging"]


class InterceptHandler(logging.Handler):
    """Redirect standard logging records (Playwright, asyncio) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def mask_licence(licence: Optional[str]) -> str:
    """
    Mask a driving licence number for log output.

    Args:
        licence: Licence number

    Returns:
        First and last two characters with the middle starred out
    """
    if not licence:
        return ""
    if len(licence) <= 4:
        return "*" * len(licence)
    return f"{licence[:2]}{'*' * (len(licence) - 4)}{licence[-2:]}"


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """
    Setup Loguru logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Serialize the file sink as JSON lines
        log_dir: Directory for rotating log files; None logs to console only
    """
    # Remove default handler
    logger.remove()

    # Console handler - human readable, on stderr so stdout stays clean for results
    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stderr, format=console_format, level=level, colorize=True)

    if log_dir is not None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        if json_format:
            logger.add(
                logs_dir / "dvsa_bot.jsonl",
                format="{message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
                serialize=True,
            )
        else:
            logger.add(
                logs_dir / "dvsa_bot.log",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
            )

    # Intercept all standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(getattr(logging, level.upper()))

    logger.info(f"Logging initialized (level={level}, json={json_format}, dir={log_dir})")
