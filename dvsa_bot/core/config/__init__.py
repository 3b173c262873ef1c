"""Configuration: runtime settings and property lookup."""

from .paths import get_project_root
from .properties import OVERRIDE_ME, Properties
from .settings import DVSASettings, get_settings, reset_settings

__all__ = [
    "DVSASettings",
    "OVERRIDE_ME",
    "Properties",
    "get_project_root",
    "get_settings",
    "reset_settings",
]
