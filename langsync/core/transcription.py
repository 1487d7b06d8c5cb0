"""Transcription engine orchestration."""

from __future__ import annotations

import logging

from langsync.core.config import SELECTED_LANGUAGE_KEY
from langsync.core.events import LANGUAGE_DID_CHANGE, NotificationBus
from langsync.core.language import DEFAULT_LANGUAGE
from langsync.core.models import ModelRegistry, TranscriptionModel
from langsync.stt.base import TranscriptionBackend
from langsync.stt.errors import UnsupportedRuntime
from langsync.stt.negotiator import TranscriptionLocaleNegotiator

LOG = logging.getLogger("langsync")


class TranscriptionEngine:
    """Runs negotiated transcriptions with the backend of the active model."""

    def __init__(
        self,
        settings,
        registry: ModelRegistry,
        backends: list[TranscriptionBackend],
        negotiator: TranscriptionLocaleNegotiator | None = None,
    ):
        self.settings = settings
        self.registry = registry
        self.backends = {backend.provider: backend for backend in backends}
        self.negotiator = negotiator or TranscriptionLocaleNegotiator()
        self.language = settings.get(SELECTED_LANGUAGE_KEY) or DEFAULT_LANGUAGE

    def attach(self, bus: NotificationBus) -> None:
        bus.subscribe(LANGUAGE_DID_CHANGE, self._on_language_changed)

    def detach(self, bus: NotificationBus) -> None:
        bus.unsubscribe(LANGUAGE_DID_CHANGE, self._on_language_changed)

    def _on_language_changed(self, name):
        language = self.settings.get(SELECTED_LANGUAGE_KEY) or DEFAULT_LANGUAGE
        if language != self.language:
            LOG.info(f"Transcription language: {self.language} -> {language}")
            self.language = language

    def backend_for(self, model: TranscriptionModel) -> TranscriptionBackend:
        try:
            return self.backends[model.provider]
        except KeyError:
            raise UnsupportedRuntime(f"No {model.provider} backend is configured.") from None

    async def transcribe(self, audio_file, language=None):
        """Transcribe an audio file with the active model.

        Defaults to the language last announced on the bus. The language is
        fixed when the call starts; a preference change during negotiation
        does not affect this request.
        """
        language = language or self.language
        model = self.registry.active_model
        backend = self.backend_for(model)
        backend.select_model(model.name)
        return await self.negotiator.transcribe(audio_file, language, backend, model)
