"""Project root resolution."""

from pathlib import Path
from typing import Optional, Union

from ..exceptions import ProjectRootNotFoundError

PROJECT_MARKER = "pyproject.toml"


def get_project_root(start: Optional[Union[str, Path]] = None, marker: str = PROJECT_MARKER) -> Path:
    """
    Find the nearest ancestor directory holding the project marker file.

    Args:
        start: Directory to start from (defaults to this module's directory)
        marker: File name identifying the project root

    Returns:
        Resolved project root directory

    Raises:
        ProjectRootNotFoundError: If no ancestor holds the marker
    """
    origin = Path(start) if start is not None else Path(__file__).parent
    origin = origin.resolve()

    for directory in (origin, *origin.parents):
        if (directory / marker).exists():
            return directory

    raise ProjectRootNotFoundError(str(origin), marker)
