"""Lightning Whisper MLX transcription backend."""

from __future__ import annotations

import asyncio
import importlib.util
import logging
import platform
import sys
from pathlib import Path

from langsync.core.language import locale_language
from langsync.core.models import WHISPER_LANGUAGES, WHISPER_PROVIDER
from langsync.stt.errors import AssetAllocationFailed

LOG = logging.getLogger("langsync")

# Whisper takes plain language tags, so the locale is the code itself.
WHISPER_LOCALES = {code: code for code in WHISPER_LANGUAGES}

# Names lightning_whisper_mlx accepts; anything else raises in LightningWhisperMLX().
LIGHTNING_MODELS = frozenset({
    "tiny",
    "small",
    "distil-small.en",
    "base",
    "medium",
    "distil-medium.en",
    "large",
    "large-v2",
    "distil-large-v2",
    "large-v3",
    "distil-large-v3",
})

# lightning_whisper_mlx downloads weights under ./mlx_models of the working directory.
MODELS_DIR = Path("mlx_models")


class MlxTranscriptionBackend:
    """MLX-based speech-to-text backend."""

    provider = WHISPER_PROVIDER
    locale_table = WHISPER_LOCALES
    default_locale = "en"

    def __init__(self, model_name="base", batch_size=12):
        self.model_name = model_name
        self.batch_size = batch_size
        self.whisper = None

    def is_available(self):
        return (
            sys.platform == "darwin"
            and platform.machine() == "arm64"
            and importlib.util.find_spec("lightning_whisper_mlx") is not None
        )

    def select_model(self, model_name):
        """Switch models; the new weights load on the next transcription."""
        if model_name != self.model_name:
            self.model_name = model_name
            self.whisper = None

    def load_model(self, model_name=None):
        """Load the MLX Whisper model, downloading weights if needed."""
        from lightning_whisper_mlx import LightningWhisperMLX

        if model_name:
            self.select_model(model_name)
        if self.whisper is None:
            self.whisper = LightningWhisperMLX(
                model=self.model_name,
                batch_size=self.batch_size,
                quant=None,
            )

    def _model_on_disk(self):
        return (MODELS_DIR / self.model_name).exists()

    async def supported_locales(self):
        if self.model_name not in LIGHTNING_MODELS:
            return frozenset()
        if self.model_name.endswith(".en"):
            return frozenset({"en"})
        return frozenset(WHISPER_LOCALES.values())

    async def installed_locales(self):
        if self.whisper is None and not self._model_on_disk():
            return frozenset()
        return await self.supported_locales()

    async def transcribe(self, audio_file, locale):
        """Transcribe an audio file; yields the whole text as one fragment."""
        if self.whisper is None:
            try:
                await asyncio.to_thread(self.load_model)
            except Exception as exc:
                LOG.error(f"Failed to load whisper model {self.model_name}: {exc}", exc_info=True)
                raise AssetAllocationFailed(f"Could not load whisper model '{self.model_name}'.") from exc

        result = await asyncio.to_thread(
            self.whisper.transcribe,
            audio_file,
            language=locale_language(locale),
        )
        yield result.get("text", "")
