"""
Settings validation system for classforge.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        result = ValidationResult()

        if self.settings.console_log_level.upper() not in VALID_LEVELS:
            result.error(f"Invalid console log level: {self.settings.console_log_level}")

        if self.settings.file_logging:
            log_dir = self.settings.log_file_absolute_path.parent
            if log_dir.exists() and not log_dir.is_dir():
                result.error(f"Log directory is not a directory: {log_dir}")

        # Validate recent projects
        recent = self.settings.recent_projects
        valid_recent: List[str] = []
        for file_path in recent:
            if Path(file_path).exists():
                valid_recent.append(file_path)
            else:
                result.warn(f"Recent project no longer exists: {file_path}")

        # Clean up missing recent projects
        if len(valid_recent) != len(recent):
            self.settings.settings.setValue("paths/recent_projects", valid_recent)
            self.settings.settings.sync()

        return result
