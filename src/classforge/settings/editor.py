"""
Editor-related settings for classforge.
"""

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ADD_BYTES_CHOICES = (8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096)
"""Byte counts offered by the "add bytes" command."""


class EditorSettings:
    """Manages class editing defaults."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    @property
    def default_class_name(self) -> str:
        """Get base name used for newly created classes."""
        return self._get_str("editor/default_class_name", "NewClass").strip() or "NewClass"

    @default_class_name.setter
    def default_class_name(self, value: str) -> None:
        """Set base name used for newly created classes."""
        self.settings.setValue("editor/default_class_name", value)
        self.settings.sync()

    @property
    def default_add_bytes(self) -> int:
        """Get number of bytes a new class starts with."""
        value = self._get_int("editor/default_add_bytes", 64)
        return value if value in ADD_BYTES_CHOICES else 64

    @default_add_bytes.setter
    def default_add_bytes(self, value: int) -> None:
        """Set number of bytes a new class starts with."""
        if value in ADD_BYTES_CHOICES:
            self.settings.setValue("editor/default_add_bytes", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid default byte count: {value}, keeping current: {self.default_add_bytes}"
            )
