"""
Settings version bookkeeping for classforge.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Stamps the settings store with the current format version.

    Every released format so far is `1.0`, so a different stored version
    needs no key changes. It is replaced by the current version and kept in
    `app/migrated_from`.
    """

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Write the current version, on first run or over another version."""
        stored_version = str(self.settings.value("app/version", ""))

        if not stored_version:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif stored_version != ConfigVersion.CURRENT.value:
            self._restamp(stored_version)

    def _restamp(self, stored_version: str) -> None:
        current = ConfigVersion.CURRENT.value
        logger.warning(f"Settings version {stored_version} is not {current}, rewriting version")

        self.settings.setValue("app/version", current)
        self.settings.setValue("app/migrated_from", stored_version)
        self.settings.sync()
