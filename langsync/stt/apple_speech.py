"""Apple Speech framework transcription backend."""

from __future__ import annotations

import asyncio
import logging
import platform
import sys

from langsync.core.language import APPLE_LOCALES, DEFAULT_LOCALE
from langsync.core.models import NATIVE_PROVIDER
from langsync.stt.errors import AssetAllocationFailed, TranscriptionFailed

try:
    import Speech
    from Foundation import NSLocale, NSOperationQueue, NSURL

    HAS_SPEECH = True
except ImportError:
    HAS_SPEECH = False

LOG = logging.getLogger("langsync")

MIN_MACOS_VERSION = (10, 15)

# SFSpeechRecognizerAuthorizationStatus
_AUTHORIZED = 3


def _macos_version():
    release = platform.mac_ver()[0]
    try:
        return tuple(int(part) for part in release.split(".")[:2])
    except ValueError:
        return ()


def _bcp47(ns_locale) -> str:
    return str(ns_locale.localeIdentifier()).replace("_", "-")


class AppleSpeechBackend:
    """On-device / server speech recognition through SFSpeechRecognizer."""

    provider = NATIVE_PROVIDER
    locale_table = APPLE_LOCALES
    default_locale = DEFAULT_LOCALE

    def is_available(self):
        return HAS_SPEECH and sys.platform == "darwin" and _macos_version() >= MIN_MACOS_VERSION

    def select_model(self, model_name):
        """The system owns the Apple speech model; nothing to select."""

    async def supported_locales(self):
        return await asyncio.to_thread(self._supported_locales)

    async def installed_locales(self):
        return await asyncio.to_thread(self._installed_locales)

    def _supported_locales(self):
        return frozenset(_bcp47(loc) for loc in Speech.SFSpeechRecognizer.supportedLocales())

    def _installed_locales(self):
        installed = set()
        for loc in Speech.SFSpeechRecognizer.supportedLocales():
            recognizer = Speech.SFSpeechRecognizer.alloc().initWithLocale_(loc)
            if recognizer is not None and recognizer.supportsOnDeviceRecognition():
                installed.add(_bcp47(loc))
        return frozenset(installed)

    async def _ensure_authorized(self, loop):
        status = Speech.SFSpeechRecognizer.authorizationStatus()
        if status == _AUTHORIZED:
            return
        decided = loop.create_future()

        def handler(new_status):
            loop.call_soon_threadsafe(decided.set_result, new_status)

        Speech.SFSpeechRecognizer.requestAuthorization_(handler)
        if await decided != _AUTHORIZED:
            raise TranscriptionFailed("Speech recognition permission was not granted.")

    async def transcribe(self, audio_file, locale):
        """Recognize an audio file and yield the final transcription."""
        loop = asyncio.get_running_loop()
        await self._ensure_authorized(loop)

        recognizer = Speech.SFSpeechRecognizer.alloc().initWithLocale_(
            NSLocale.localeWithLocaleIdentifier_(locale)
        )
        if recognizer is None or not recognizer.isAvailable():
            LOG.error(f"No speech recognizer available for {locale}")
            raise AssetAllocationFailed(f"Failed to allocate assets for '{locale}'.")

        # Keep result delivery off the main queue, which may be blocked on us.
        recognizer.setQueue_(NSOperationQueue.alloc().init())

        request = Speech.SFSpeechURLRecognitionRequest.alloc().initWithURL_(
            NSURL.fileURLWithPath_(str(audio_file))
        )
        request.setShouldReportPartialResults_(False)

        results = asyncio.Queue()

        def handler(result, error):
            if error is not None:
                loop.call_soon_threadsafe(results.put_nowait, (None, error))
            elif result is not None and result.isFinal():
                text = str(result.bestTranscription().formattedString())
                loop.call_soon_threadsafe(results.put_nowait, (text, None))

        task = recognizer.recognitionTaskWithRequest_resultHandler_(request, handler)
        try:
            text, error = await results.get()
        except asyncio.CancelledError:
            task.cancel()
            raise

        if error is not None:
            raise TranscriptionFailed(f"Speech recognition failed: {error.localizedDescription()}")
        yield text
