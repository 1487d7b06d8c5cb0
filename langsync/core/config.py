"""Application configuration management."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from langsync.core.language import DEFAULT_LANGUAGE
from langsync.core.models import DEFAULT_MODEL, PREDEFINED_MODELS

CONFIG_DIR = Path.home() / ".config" / "langsync"
CONFIG_FILE = CONFIG_DIR / "config.json"

AUTO_SWITCH_KEY = "auto_switch_language_by_keyboard"
SELECTED_LANGUAGE_KEY = "selected_language"

DEFAULT_CONFIG = {
    # Language picked by the user or by keyboard auto-switch
    "selected_language": DEFAULT_LANGUAGE,
    "auto_switch_language_by_keyboard": False,
    # Model - "native" uses Apple Speech, whisper names use MLX
    "model": DEFAULT_MODEL,
    "whisper_batch_size": 12,
}

VALID_MODELS = {model.name for model in PREDEFINED_MODELS}

_LOG = logging.getLogger("langsync")


def normalize_config(config):
    """Normalize config data, falling back to defaults for bad values."""
    normalized = DEFAULT_CONFIG.copy()
    if isinstance(config, dict):
        normalized.update(config)

    language = normalized.get(SELECTED_LANGUAGE_KEY)
    if isinstance(language, str) and language.strip():
        normalized[SELECTED_LANGUAGE_KEY] = language.strip().lower()
    else:
        normalized[SELECTED_LANGUAGE_KEY] = DEFAULT_LANGUAGE

    normalized[AUTO_SWITCH_KEY] = bool(normalized.get(AUTO_SWITCH_KEY))

    if normalized.get("model") not in VALID_MODELS:
        normalized["model"] = DEFAULT_MODEL
    return normalized


def load_config():
    """Load config from file or create default."""
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if CONFIG_FILE.exists():
            with open(CONFIG_FILE, encoding="utf-8") as f:
                saved = json.load(f)
                return normalize_config(saved)
    except Exception as exc:
        _LOG.warning(f"Failed to load config from {CONFIG_FILE}: {exc}")
    return normalize_config({})


def save_config(config):
    """Save config to file."""
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        normalized = normalize_config(config)
        tmp_path = CONFIG_FILE.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(normalized, f, indent=2)
        tmp_path.replace(CONFIG_FILE)
    except Exception as exc:
        _LOG.warning(f"Failed to save config to {CONFIG_FILE}: {exc}")


class SettingsStore:
    """Key/value view over the config dict.

    Writes go to the in-memory dict and, when ``persist`` is set, straight
    through to the config file so the value survives restarts.
    """

    def __init__(self, config=None, persist=False):
        self._config = normalize_config(config) if config is not None else load_config()
        self._persist = persist
        self._lock = threading.Lock()

    def get(self, key, default=None):
        with self._lock:
            return self._config.get(key, default)

    def set(self, key, value):
        with self._lock:
            self._config[key] = value
            snapshot = dict(self._config)
        if self._persist:
            save_config(snapshot)

    def as_dict(self):
        with self._lock:
            return dict(self._config)
