"""
Shared settings types: the stored format version, the settings error and
the result of a validation pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ConfigVersion(Enum):
    """Format version written to `app/version`."""
    V1_0 = "1.0"
    CURRENT = V1_0


class ConfigError(Exception):
    """Raised when the settings store cannot be opened."""


@dataclass
class ValidationResult:
    """Problems found by `SettingsValidator`.

    Errors make the configuration unusable; warnings are reported and the
    offending values are repaired.
    """
    errors: List[str] = field(default_factory=lambda: [])
    warnings: List[str] = field(default_factory=lambda: [])

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
