"""Shared state values."""

from enum import Enum


class AutoSyncState(str, Enum):
    """Whether keyboard changes may overwrite the selected language."""

    DISABLED = "disabled"
    ENABLED = "enabled"


class LocaleAvailability(str, Enum):
    """Where a backend locale stands against the backend's capabilities."""

    INSTALLED = "installed"
    SUPPORTED_NOT_INSTALLED = "supported_not_installed"
    UNSUPPORTED = "unsupported"


AVAILABILITY_DESCRIPTIONS = {
    LocaleAvailability.INSTALLED: "Installed",
    LocaleAvailability.SUPPORTED_NOT_INSTALLED: "Not Installed (Available for download)",
    LocaleAvailability.UNSUPPORTED: "Not Supported",
}
