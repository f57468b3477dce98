"""
Core settings management for classforge.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .editor import EditorSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Explicit INI file to use instead of the platform store

        Raises:
            ConfigError: If the settings storage cannot be accessed
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("classforge", "classforge")
        self.profile = profile

        if self.settings.status() == QSettings.Status.AccessError:
            raise ConfigError(f"Cannot access settings at {self.settings.fileName()}")
        if self.settings.status() == QSettings.Status.FormatError:
            logger.warning(f"Settings file is malformed, using defaults: {self.settings.fileName()}")

        # Use profile as a group: classforge/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._editor = EditorSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def editor(self) -> EditorSettings:
        """Access editor settings subsystem."""
        return self._editor

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        return self._get_bool("app/first_run", True)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", ConfigVersion.CURRENT.value)

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def last_project(self) -> Optional[Path]:
        """Get path of the most recently used project."""
        return self._paths.last_project

    @last_project.setter
    def last_project(self, value: Optional[Path]) -> None:
        """Set path of the most recently used project."""
        self._paths.last_project = value

    @property
    def recent_projects(self) -> List[str]:
        """Get list of recently used projects."""
        return self._paths.recent_projects

    def add_recent_project(self, file_path: Union[str, Path]) -> None:
        """Add project to recent list (max 10 items)."""
        self._paths.add_recent_project(file_path)

    def remove_recent_project(self, file_path: Union[str, Path]) -> bool:
        """Remove project from recent list."""
        return self._paths.remove_recent_project(file_path)

    def clear_recent_projects(self) -> None:
        """Clear recent projects list."""
        self._paths.clear_recent_projects()

    # === EDITOR SETTINGS (DELEGATED) ===

    @property
    def default_class_name(self) -> str:
        """Get base name for new classes."""
        return self._editor.default_class_name

    @default_class_name.setter
    def default_class_name(self, value: str) -> None:
        """Set base name for new classes."""
        self._editor.default_class_name = value

    @property
    def default_add_bytes(self) -> int:
        """Get number of bytes a new class starts with."""
        return self._editor.default_add_bytes

    @default_add_bytes.setter
    def default_add_bytes(self, value: int) -> None:
        """Set number of bytes a new class starts with."""
        self._editor.default_add_bytes = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        """Set log file path."""
        self._logging.log_file_path = value

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return self._logging.log_file_absolute_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
