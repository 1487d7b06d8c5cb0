import os
import sys
import tempfile
import types
import unittest
from pathlib import Path
from unittest.mock import patch

from langsync.core.models import PREDEFINED_MODELS, WHISPER_PROVIDER
from langsync.stt import mlx_backend
from langsync.stt.errors import AssetAllocationFailed
from langsync.stt.mlx_backend import MlxTranscriptionBackend


class FakeWhisper:
    instances = []

    def __init__(self, model, batch_size, quant):
        self.model = model
        self.calls = []
        FakeWhisper.instances.append(self)

    def transcribe(self, audio_file, language=None):
        self.calls.append((audio_file, language))
        return {"text": " hej verden "}


def fake_module(cls=FakeWhisper):
    module = types.ModuleType("lightning_whisper_mlx")
    module.LightningWhisperMLX = cls
    return module


class MlxBackendTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        FakeWhisper.instances = []
        self._tmp = tempfile.TemporaryDirectory()
        self._cwd = os.getcwd()
        os.chdir(self._tmp.name)

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()

    async def test_nothing_installed_before_load(self):
        backend = MlxTranscriptionBackend("base")
        self.assertIn("no", await backend.supported_locales())
        self.assertEqual(await backend.installed_locales(), frozenset())

    async def test_weights_in_working_directory_count_as_installed(self):
        (Path(self._tmp.name) / "mlx_models" / "base").mkdir(parents=True)
        backend = MlxTranscriptionBackend("base")
        self.assertEqual(await backend.installed_locales(), await backend.supported_locales())

    async def test_weights_in_home_directory_are_ignored(self):
        home = Path(self._tmp.name) / "home"
        (home / "mlx_models" / "base").mkdir(parents=True)

        with patch.object(Path, "home", return_value=home):
            backend = MlxTranscriptionBackend("base")
            self.assertEqual(await backend.installed_locales(), frozenset())

    async def test_english_only_model(self):
        backend = MlxTranscriptionBackend("distil-small.en")
        self.assertEqual(await backend.supported_locales(), frozenset({"en"}))

    async def test_unknown_model_supports_nothing(self):
        backend = MlxTranscriptionBackend("base.en")
        self.assertEqual(await backend.supported_locales(), frozenset())

    def test_predefined_whisper_models_are_loadable(self):
        names = [model.name for model in PREDEFINED_MODELS if model.provider == WHISPER_PROVIDER]
        self.assertTrue(names)
        self.assertEqual([name for name in names if name not in mlx_backend.LIGHTNING_MODELS], [])

    async def test_transcribe_loads_lazily_and_passes_language(self):
        backend = MlxTranscriptionBackend("small", batch_size=4)

        with patch.dict(sys.modules, {"lightning_whisper_mlx": fake_module()}):
            fragments = [f async for f in backend.transcribe("clip.wav", "no")]

        self.assertEqual(fragments, [" hej verden "])
        self.assertEqual(len(FakeWhisper.instances), 1)
        self.assertEqual(FakeWhisper.instances[0].model, "small")
        self.assertEqual(FakeWhisper.instances[0].calls, [("clip.wav", "no")])
        self.assertEqual(await backend.installed_locales(), await backend.supported_locales())

    async def test_load_failure_is_asset_error(self):
        def broken(model, batch_size, quant):
            raise OSError("download failed")

        backend = MlxTranscriptionBackend("medium")
        with patch.dict(sys.modules, {"lightning_whisper_mlx": fake_module(broken)}):
            with self.assertLogs("langsync", level="ERROR"):
                with self.assertRaises(AssetAllocationFailed):
                    async for _ in backend.transcribe("clip.wav", "en"):
                        pass

    def test_select_model_drops_loaded_weights(self):
        backend = MlxTranscriptionBackend("base")
        backend.whisper = object()

        backend.select_model("base")
        self.assertIsNotNone(backend.whisper)

        backend.select_model("small")
        self.assertIsNone(backend.whisper)
        self.assertEqual(backend.model_name, "small")

    def test_unavailable_off_apple_silicon(self):
        with patch.object(mlx_backend.sys, "platform", "linux"):
            self.assertFalse(MlxTranscriptionBackend().is_available())


if __name__ == "__main__":
    unittest.main()
