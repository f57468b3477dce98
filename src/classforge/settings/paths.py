"""
Path-related settings for classforge.
"""

from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

MAX_RECENT_PROJECTS = 10


class PathSettings:
    """Manages project paths: the last opened project and the recent list."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Type-safe list retrieval from settings."""
        if default is None:
            default = []
        value = self.settings.value(key, default)
        # INI storage returns a single-item list as a plain string
        if isinstance(value, str):
            return [value] if value else default
        if isinstance(value, list):
            return [
                str(item) if item is not None else ""
                for item in cast(list[object], value)
            ]
        return default

    @property
    def last_project(self) -> Optional[Path]:
        """Get path of the most recently saved or opened project."""
        path_str = self._get_str("paths/last_project", "")
        return Path(path_str) if path_str else None

    @last_project.setter
    def last_project(self, value: Optional[Path]) -> None:
        """Set path of the most recently saved or opened project."""
        self.settings.setValue("paths/last_project", str(value) if value else "")
        self.settings.sync()

    @property
    def recent_projects(self) -> List[str]:
        """Get list of recently used projects, most recent first."""
        return self._get_list("paths/recent_projects", [])

    def add_recent_project(self, file_path: Union[str, Path]) -> None:
        """Add project to the recent list (max 10 items)."""
        recent = self.recent_projects
        file_str = str(file_path)

        if file_str in recent:
            recent.remove(file_str)

        recent.insert(0, file_str)
        recent = recent[:MAX_RECENT_PROJECTS]

        self.settings.setValue("paths/recent_projects", recent)
        self.settings.sync()

    def remove_recent_project(self, file_path: Union[str, Path]) -> bool:
        """Remove project from the recent list. Returns True if it was present."""
        recent = self.recent_projects
        file_str = str(file_path)
        if file_str not in recent:
            return False

        recent.remove(file_str)
        self.settings.setValue("paths/recent_projects", recent)
        self.settings.sync()
        return True

    def clear_recent_projects(self) -> None:
        """Clear recent projects list."""
        self.settings.setValue("paths/recent_projects", [])
        self.settings.sync()
