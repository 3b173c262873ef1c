"""Property lookup for test credentials and local overrides.

Values are resolved from the environment first (exact key, then the key with
dots replaced by underscores), then from the ``app.properties`` key-value file
at the project root. Values that parse as JSON are returned decoded.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values
from loguru import logger

from ..exceptions import PropertyOverrideError
from .paths import get_project_root

PROPERTIES_FILE = "app.properties"

# magic string reminder to override property via environmental variables
OVERRIDE_ME = "override_me"


class Properties:
    """Environment-first property resolver backed by ``app.properties``."""

    _file_values: Optional[Dict[str, Optional[str]]] = None
    _path: Optional[Path] = None

    @classmethod
    def get(cls, key: str) -> Any:
        """
        Resolve a property.

        Args:
            key: Dotted property key, e.g. ``dvsa.test.license``

        Returns:
            Decoded value, or None when the property is not defined

        Raises:
            PropertyOverrideError: If the value is the override placeholder
        """
        raw = cls._get_from_environment(key)
        if raw is None:
            raw = cls._get_from_file(key)
        return cls._try_parse(key, raw)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> None:
        """(Re)load the properties file, defaulting to the project root copy."""
        if path is None:
            path = get_project_root() / PROPERTIES_FILE
        cls._path = Path(path)
        if cls._path.exists():
            cls._file_values = dict(dotenv_values(cls._path))
            logger.debug(f"Loaded {len(cls._file_values)} properties from {cls._path}")
        else:
            cls._file_values = {}
            logger.debug(f"Properties file not found: {cls._path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded file (useful for testing)."""
        cls._file_values = None
        cls._path = None

    @staticmethod
    def _get_from_environment(key: str) -> Optional[str]:
        return os.environ.get(key) or os.environ.get(key.replace(".", "_")) or None

    @classmethod
    def _get_from_file(cls, key: str) -> Optional[str]:
        if cls._file_values is None:
            cls.load()
        return cls._file_values.get(key)

    @staticmethod
    def _try_parse(key: str, value: Optional[str]) -> Any:
        if value is None:
            return None

        try:
            value = json.loads(value)
        except (TypeError, ValueError):
            pass

        if value == OVERRIDE_ME:
            raise PropertyOverrideError(key)

        return value
