"""Predefined transcription models and the active-model registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

LOG = logging.getLogger("langsync")

NATIVE_PROVIDER = "native"
WHISPER_PROVIDER = "whisper"

# Languages understood by the native Apple speech model.
NATIVE_LANGUAGES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "ar": "Arabic",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "pt": "Portuguese",
    "yue": "Cantonese",
    "zh": "Chinese",
}

# Subset of Whisper's 99 languages offered in the language picker.
WHISPER_LANGUAGES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "no": "Norwegian",
    "sv": "Swedish",
    "pl": "Polish",
    "uk": "Ukrainian",
    "ru": "Russian",
    "tr": "Turkish",
    "zh": "Chinese",
    "yue": "Cantonese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
}


@dataclass(frozen=True)
class TranscriptionModel:
    """A selectable speech model and the languages it declares."""

    name: str
    provider: str
    display_name: str
    languages: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


PREDEFINED_MODELS = (
    TranscriptionModel("native", NATIVE_PROVIDER, "Apple Speech", NATIVE_LANGUAGES),
    TranscriptionModel("tiny", WHISPER_PROVIDER, "Whisper Tiny", WHISPER_LANGUAGES),
    TranscriptionModel("base", WHISPER_PROVIDER, "Whisper Base", WHISPER_LANGUAGES),
    TranscriptionModel("distil-small.en", WHISPER_PROVIDER, "Whisper Distil Small (English)", {"en": "English"}),
    TranscriptionModel("small", WHISPER_PROVIDER, "Whisper Small", WHISPER_LANGUAGES),
    TranscriptionModel("medium", WHISPER_PROVIDER, "Whisper Medium", WHISPER_LANGUAGES),
    TranscriptionModel("large-v3", WHISPER_PROVIDER, "Whisper Large v3", WHISPER_LANGUAGES),
)

DEFAULT_MODEL = "native"


class ModelRegistry:
    """Owns the known models and tracks which one is active."""

    def __init__(self, models=PREDEFINED_MODELS, active: str = DEFAULT_MODEL):
        self._models = {model.name: model for model in models}
        self._active = self.get(active)

    def get(self, name: str) -> TranscriptionModel:
        try:
            return self._models[name]
        except KeyError:
            raise KeyError(f"Unknown transcription model: {name}") from None

    @property
    def models(self) -> list[TranscriptionModel]:
        return list(self._models.values())

    @property
    def active_model(self) -> TranscriptionModel:
        return self._active

    def set_active_model(self, name: str) -> TranscriptionModel:
        """Switch the active model. Raises KeyError for unknown names."""
        model = self.get(name)
        if model is not self._active:
            LOG.info(f"Active transcription model: {self._active.name} -> {model.name}")
            self._active = model
        return model

    def all_languages(self) -> frozenset[str]:
        """Language codes supported by the active model."""
        return frozenset(self._active.languages)
