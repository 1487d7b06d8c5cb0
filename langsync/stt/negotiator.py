"""Locale negotiation between the selected language and a speech backend."""

from __future__ import annotations

import logging

from langsync.core.language import to_backend_locale
from langsync.core.models import TranscriptionModel
from langsync.core.state import AVAILABILITY_DESCRIPTIONS, LocaleAvailability
from langsync.stt.base import LocaleCapabilities, NegotiationResult, TranscriptionBackend
from langsync.stt.errors import (
    InvalidModelSelection,
    LocaleNotSupported,
    NegotiationError,
    TranscriptionFailed,
    UnsupportedRuntime,
)

LOG = logging.getLogger("langsync")


def classify(locale: str, supported, installed) -> LocaleAvailability:
    """Classify a locale against a backend's supported/installed sets."""
    if locale in installed:
        return LocaleAvailability.INSTALLED
    if locale in supported:
        return LocaleAvailability.SUPPORTED_NOT_INSTALLED
    return LocaleAvailability.UNSUPPORTED


def _joined(locales) -> str:
    return ", ".join(sorted(locales))


class TranscriptionLocaleNegotiator:
    """Decides whether a backend can serve a language before transcribing.

    Holds no state: every call queries the backend afresh, and nothing is
    persisted, so a cancelled request leaves nothing behind.
    """

    async def negotiate(
        self,
        language: str,
        backend: TranscriptionBackend,
        model: TranscriptionModel | None = None,
    ) -> NegotiationResult:
        """Resolve the backend locale for language or raise a NegotiationError."""
        if model is not None and model.provider != backend.provider:
            raise InvalidModelSelection(
                f"Model '{model.name}' ({model.provider}) cannot run on the {backend.provider} backend."
            )

        if not backend.is_available():
            LOG.error(f"The {backend.provider} speech backend is not available on this system")
            raise UnsupportedRuntime()

        locale = to_backend_locale(language, backend.locale_table, backend.default_locale)
        capabilities = LocaleCapabilities(
            supported=frozenset(await backend.supported_locales()),
            installed=frozenset(await backend.installed_locales()),
        )
        status = classify(locale, capabilities.supported, capabilities.installed)

        LOG.info(
            "\n--- Speech Locale Negotiation ---\n"
            f"Selected Language: '{language}' -> Locale: '{locale}'\n"
            f"Status: {AVAILABILITY_DESCRIPTIONS[status]}\n"
            f"Supported Locales: [{_joined(capabilities.supported)}]\n"
            f"Installed Locales: [{_joined(capabilities.installed)}]\n"
            f"Available for Download: [{_joined(capabilities.available_for_download)}]\n"
            "---------------------------------"
        )

        if status is LocaleAvailability.UNSUPPORTED:
            LOG.error(f"Locale '{locale}' is not supported by the {backend.provider} backend")
            raise LocaleNotSupported(f"The locale '{locale}' is not supported by the {backend.provider} backend.")

        # Not-installed locales go ahead; the backend fetches its own assets.
        return NegotiationResult(language=language, locale=locale, status=status, capabilities=capabilities)

    async def transcribe(
        self,
        audio_file: str,
        language: str,
        backend: TranscriptionBackend,
        model: TranscriptionModel | None = None,
    ) -> str:
        """Negotiate a locale, then run the backend and return the trimmed transcript."""
        result = await self.negotiate(language, backend, model)

        fragments = []
        try:
            async for fragment in backend.transcribe(audio_file, result.locale):
                fragments.append(fragment)
        except NegotiationError:
            raise
        except Exception as exc:
            LOG.error(f"Transcription error: {exc}", exc_info=True)
            raise TranscriptionFailed(f"Transcription failed: {exc}") from exc

        text = "".join(fragments).strip()
        LOG.info(f"Transcription successful. Length: {len(text)} characters.")
        return text
