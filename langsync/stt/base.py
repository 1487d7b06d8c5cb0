"""Transcription backend protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Protocol

from langsync.core.state import LocaleAvailability


class TranscriptionBackend(Protocol):
    """Platform/model-specific speech-to-text backend."""

    provider: str
    locale_table: dict[str, str]
    default_locale: str

    def is_available(self) -> bool:
        """Whether the backend can run on this machine at all."""

    def select_model(self, model_name: str) -> None:
        """Point the backend at the named model of its provider."""

    async def supported_locales(self) -> frozenset[str]:
        """BCP-47 locales the backend can transcribe."""

    async def installed_locales(self) -> frozenset[str]:
        """BCP-47 locales whose assets are already on disk."""

    def transcribe(self, audio_file: str, locale: str) -> AsyncIterator[str]:
        """Stream text fragments for an audio file."""


@dataclass(frozen=True)
class LocaleCapabilities:
    """A backend's supported/installed locale snapshot."""

    supported: frozenset[str]
    installed: frozenset[str]

    @property
    def available_for_download(self) -> frozenset[str]:
        return self.supported - self.installed


@dataclass(frozen=True)
class NegotiationResult:
    language: str
    locale: str
    status: LocaleAvailability
    capabilities: LocaleCapabilities
