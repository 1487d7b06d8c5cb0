import unittest

from langsync.core.config import SettingsStore
from langsync.core.events import LANGUAGE_DID_CHANGE
from langsync.platform.base import InputSourceSnapshot
from langsync.service import LanguageSyncService


class ScriptedProvider:
    def __init__(self, snapshot):
        self.snapshot = snapshot

    def current_input_source(self):
        return self.snapshot


class StubNotifier:
    def __init__(self):
        self.callback = None

    def subscribe(self, callback):
        self.callback = callback

    def unsubscribe(self):
        self.callback = None


class LanguageSyncServiceTests(unittest.TestCase):
    def setUp(self):
        self.settings = SettingsStore({"auto_switch_language_by_keyboard": True, "selected_language": "en"})
        self.provider = ScriptedProvider(InputSourceSnapshot("en", "U.S."))
        self.notifier = StubNotifier()
        self.service = LanguageSyncService(
            self.settings,
            provider=self.provider,
            notifier=self.notifier,
            dispatch=lambda fn: fn(),
            backends=[],
        )

    def test_keyboard_change_flows_to_selected_language(self):
        changes = []
        self.service.bus.subscribe(LANGUAGE_DID_CHANGE, changes.append)
        self.service.start()

        self.provider.snapshot = InputSourceSnapshot("ja", "Hiragana")
        self.notifier.callback()

        self.assertEqual(self.settings.get("selected_language"), "ja")
        self.assertEqual(self.service.engine.language, "ja")
        self.assertEqual(changes, [LANGUAGE_DID_CHANGE])

    def test_stop_detaches_everything(self):
        self.service.start()
        self.service.start()
        self.service.stop()
        self.service.stop()

        self.assertIsNone(self.notifier.callback)
        self.assertFalse(self.service.watcher.is_monitoring)

    def test_set_model_persists_choice(self):
        self.service.set_model("base")
        self.assertEqual(self.settings.get("model"), "base")
        self.assertTrue(self.service.catalog.is_supported("nl"))

        with self.assertRaises(KeyError):
            self.service.set_model("unknown")


if __name__ == "__main__":
    unittest.main()
