"""Core platform-agnostic language sync logic."""

from langsync.core.autosync import AutoSyncPolicy
from langsync.core.catalog import LanguageSupportCatalog
from langsync.core.config import (
    AUTO_SWITCH_KEY,
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_CONFIG,
    SELECTED_LANGUAGE_KEY,
    SettingsStore,
    load_config,
    normalize_config,
    save_config,
)
from langsync.core.events import APP_SETTINGS_DID_CHANGE, LANGUAGE_DID_CHANGE, NotificationBus
from langsync.core.language import APPLE_LOCALES, DEFAULT_LANGUAGE, DEFAULT_LOCALE, to_backend_locale, to_canonical
from langsync.core.models import PREDEFINED_MODELS, ModelRegistry, TranscriptionModel
from langsync.core.state import AutoSyncState, LocaleAvailability
from langsync.core.transcription import TranscriptionEngine
from langsync.core.watcher import InputSourceWatcher, SerialDispatcher

__all__ = [
    "AutoSyncPolicy",
    "AutoSyncState",
    "LanguageSupportCatalog",
    "LocaleAvailability",
    "InputSourceWatcher",
    "SerialDispatcher",
    "NotificationBus",
    "ModelRegistry",
    "TranscriptionModel",
    "TranscriptionEngine",
    "PREDEFINED_MODELS",
    "APPLE_LOCALES",
    "DEFAULT_LANGUAGE",
    "DEFAULT_LOCALE",
    "LANGUAGE_DID_CHANGE",
    "APP_SETTINGS_DID_CHANGE",
    "AUTO_SWITCH_KEY",
    "SELECTED_LANGUAGE_KEY",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "SettingsStore",
    "load_config",
    "normalize_config",
    "save_config",
    "to_canonical",
    "to_backend_locale",
]
