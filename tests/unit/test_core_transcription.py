import unittest

from langsync.core.config import SettingsStore
from langsync.core.events import LANGUAGE_DID_CHANGE, NotificationBus
from langsync.core.language import APPLE_LOCALES
from langsync.core.models import ModelRegistry
from langsync.core.transcription import TranscriptionEngine
from langsync.stt.errors import UnsupportedRuntime


class StubBackend:
    locale_table = APPLE_LOCALES
    default_locale = "en-US"

    def __init__(self, provider, text, locales=("en-US", "fr-FR")):
        self.provider = provider
        self._text = text
        self._locales = frozenset(locales)
        self.selected_model = None
        self.calls = []

    def is_available(self):
        return True

    def select_model(self, model_name):
        self.selected_model = model_name

    async def supported_locales(self):
        return self._locales

    async def installed_locales(self):
        return self._locales

    async def transcribe(self, audio_file, locale):
        self.calls.append((audio_file, locale))
        yield self._text


class CoreTranscriptionTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.settings = SettingsStore({"selected_language": "fr"})
        self.registry = ModelRegistry()
        self.native = StubBackend("native", " bonjour ")
        self.engine = TranscriptionEngine(self.settings, self.registry, [self.native])

    async def test_transcribe_uses_selected_language(self):
        text = await self.engine.transcribe("clip.wav")

        self.assertEqual(text, "bonjour")
        self.assertEqual(self.native.calls, [("clip.wav", "fr-FR")])
        self.assertEqual(self.native.selected_model, "native")

    async def test_explicit_language_overrides_selection(self):
        await self.engine.transcribe("clip.wav", language="en")
        self.assertEqual(self.native.calls, [("clip.wav", "en-US")])

    async def test_missing_backend_for_active_model(self):
        self.registry.set_active_model("small")
        with self.assertRaises(UnsupportedRuntime):
            await self.engine.transcribe("clip.wav")

    async def test_backend_follows_active_model(self):
        whisper = StubBackend("whisper", "hallo", locales=())
        whisper.locale_table = {"fr": "fr"}
        whisper.default_locale = "en"
        whisper._locales = frozenset({"fr"})
        engine = TranscriptionEngine(self.settings, self.registry, [self.native, whisper])
        self.registry.set_active_model("small")

        await engine.transcribe("clip.wav")

        self.assertEqual(whisper.selected_model, "small")
        self.assertEqual(whisper.calls, [("clip.wav", "fr")])

    def test_language_change_notification_updates_engine(self):
        bus = NotificationBus()
        self.engine.attach(bus)
        self.settings.set("selected_language", "ja")

        with self.assertLogs("langsync", level="INFO") as logs:
            bus.post(LANGUAGE_DID_CHANGE)

        self.assertEqual(self.engine.language, "ja")
        self.assertTrue(any("Transcription language: fr -> ja" in line for line in logs.output))

        self.engine.detach(bus)
        self.settings.set("selected_language", "de")
        bus.post(LANGUAGE_DID_CHANGE)
        self.assertEqual(self.engine.language, "ja")

    async def test_transcribe_follows_announced_language(self):
        self.native._locales = frozenset({"en-US", "fr-FR", "ja-JP"})
        bus = NotificationBus()
        self.engine.attach(bus)
        self.settings.set("selected_language", "ja")
        bus.post(LANGUAGE_DID_CHANGE)

        await self.engine.transcribe("clip.wav")

        self.assertEqual(self.native.calls, [("clip.wav", "ja-JP")])


if __name__ == "__main__":
    unittest.main()
