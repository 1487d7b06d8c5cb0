"""Keyboard input source to application language code mapping."""

from __future__ import annotations

DEFAULT_LANGUAGE = "en"
DEFAULT_LOCALE = "en-US"

# Script-qualified prefixes folded onto a single application code.
SCRIPT_PREFIXES = (
    ("zh-hans", "zh"),
    ("zh-hant", "zh"),
    ("yue-hans", "yue"),
    ("yue-hant", "yue"),
)

# Base codes the language catalog does not distinguish.
BASE_CODE_ALIASES = {
    "nb": "no",  # Norwegian Bokmål
    "cmn": "zh",  # Mandarin (ISO 639-3)
}

# Application code -> Apple speech locale (BCP-47).
APPLE_LOCALES = {
    "en": "en-US",
    "es": "es-ES",
    "fr": "fr-FR",
    "de": "de-DE",
    "ar": "ar-SA",
    "it": "it-IT",
    "ja": "ja-JP",
    "ko": "ko-KR",
    "pt": "pt-BR",
    "yue": "yue-CN",
    "zh": "zh-CN",
}


def to_canonical(raw: str | None) -> str:
    """Map a keyboard input source language to the app's language code.

    Never fails: unknown base codes pass through lower-cased, and an empty
    identifier falls back to ``DEFAULT_LANGUAGE``.
    """
    lowered = (raw or "").lower()

    for prefix, code in SCRIPT_PREFIXES:
        if lowered.startswith(prefix):
            return code

    base_code = lowered.split("-", 1)[0]
    if not base_code:
        return DEFAULT_LANGUAGE
    return BASE_CODE_ALIASES.get(base_code, base_code)


def to_backend_locale(code: str, table=APPLE_LOCALES, default: str = DEFAULT_LOCALE) -> str:
    """Map an app language code to a speech backend locale.

    Codes missing from the backend's table get the backend default
    (en-US for Apple speech) instead of an error.
    """
    return table.get(code, default)


def locale_language(locale: str) -> str:
    """Return the language part of a BCP-47 locale ("zh-CN" -> "zh")."""
    return locale.replace("_", "-").split("-", 1)[0].lower()
