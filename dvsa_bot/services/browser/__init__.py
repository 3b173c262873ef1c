"""Browser engine, page automation and pacing."""

from .browser_manager import BrowserManager
from .pacing import PacingPolicy
from .page_driver import PageDriver

__all__ = ["BrowserManager", "PacingPolicy", "PageDriver"]
