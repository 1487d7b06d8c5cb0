"""Automatic language switching driven by the keyboard input source."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from langsync.core.catalog import LanguageSupportCatalog
from langsync.core.config import AUTO_SWITCH_KEY, SELECTED_LANGUAGE_KEY
from langsync.core.events import APP_SETTINGS_DID_CHANGE, LANGUAGE_DID_CHANGE, NotificationBus
from langsync.core.language import DEFAULT_LANGUAGE, to_canonical
from langsync.core.state import AutoSyncState

LOG = logging.getLogger("langsync")


class Settings(Protocol):
    def get(self, key, default=None): ...

    def set(self, key, value) -> None: ...


class KeyboardLanguageSource(Protocol):
    @property
    def current_language(self) -> str: ...


class AutoSyncPolicy:
    """Overwrites the selected language when the keyboard language changes.

    The enabled flag is read from settings on every call so toggling it
    takes effect immediately.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: LanguageSupportCatalog,
        bus: NotificationBus,
        source: KeyboardLanguageSource,
    ):
        self.settings = settings
        self.catalog = catalog
        self.bus = bus
        self.source = source
        self._lock = threading.RLock()

    @property
    def state(self) -> AutoSyncState:
        if self.settings.get(AUTO_SWITCH_KEY, False):
            return AutoSyncState.ENABLED
        return AutoSyncState.DISABLED

    def sync_language_if_enabled(self) -> str | None:
        """Apply the keyboard language. Returns the new code, or None if nothing changed."""
        if self.state is AutoSyncState.DISABLED:
            LOG.debug("Keyboard language auto-switch is off")
            return None

        with self._lock:
            keyboard_language = self.source.current_language
            mapped = to_canonical(keyboard_language)

            if not self.catalog.is_supported(mapped):
                LOG.info(
                    f"Keyboard language '{keyboard_language}' maps to '{mapped}' "
                    "which is not supported by current model"
                )
                return None

            current = self.settings.get(SELECTED_LANGUAGE_KEY) or DEFAULT_LANGUAGE
            if mapped == current:
                LOG.debug(f"Language '{mapped}' already selected")
                return None

            self.settings.set(SELECTED_LANGUAGE_KEY, mapped)
            LOG.info(f"Auto-switched language from '{current}' to '{mapped}' based on keyboard")

            self.bus.post(LANGUAGE_DID_CHANGE)
            self.bus.post(APP_SETTINGS_DID_CHANGE)
            return mapped

    def on_input_source_changed(self, snapshot=None) -> None:
        """Watcher listener."""
        self.sync_language_if_enabled()
