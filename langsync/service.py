"""Wires the language sync components together."""

from __future__ import annotations

import logging

from langsync.core.autosync import AutoSyncPolicy
from langsync.core.catalog import LanguageSupportCatalog
from langsync.core.config import SettingsStore
from langsync.core.events import NotificationBus
from langsync.core.models import ModelRegistry
from langsync.core.transcription import TranscriptionEngine
from langsync.core.watcher import InputSourceWatcher
from langsync.platform.base import Dispatcher, InputSourceNotifier, InputSourceProvider
from langsync.stt.base import TranscriptionBackend

LOG = logging.getLogger("langsync")


class LanguageSyncService:
    """Owns one instance of each component for the lifetime of the app.

    Construct it at startup, call ``start()``, and ``stop()`` on teardown.
    """

    def __init__(
        self,
        settings: SettingsStore,
        provider: InputSourceProvider,
        notifier: InputSourceNotifier,
        dispatch: Dispatcher,
        backends: list[TranscriptionBackend],
    ):
        self.settings = settings
        self.bus = NotificationBus()
        self.registry = ModelRegistry(active=settings.get("model"))
        self.catalog = LanguageSupportCatalog(self.registry)
        self.watcher = InputSourceWatcher(provider, notifier, dispatch)
        self.policy = AutoSyncPolicy(settings, self.catalog, self.bus, self.watcher)
        self.engine = TranscriptionEngine(settings, self.registry, backends)
        self._started = False

    def start(self):
        if self._started:
            return
        self._started = True
        self.engine.attach(self.bus)
        self.watcher.add_listener(self.policy.on_input_source_changed)
        self.watcher.start()
        LOG.info(
            f"Language sync started (keyboard: {self.watcher.current_display_name or 'unknown'}, "
            f"auto-switch: {self.policy.state.value})"
        )

    def stop(self):
        if not self._started:
            return
        self._started = False
        self.watcher.stop()
        self.watcher.remove_listener(self.policy.on_input_source_changed)
        self.engine.detach(self.bus)

    def set_model(self, name):
        """Switch the active model and persist the choice."""
        model = self.registry.set_active_model(name)
        self.settings.set("model", model.name)
        return model


def create_macos_service(settings: SettingsStore | None = None) -> LanguageSyncService:
    """Build the service with the macOS adapters and both speech backends."""
    from langsync.platform.macos import MacOSInputSourceNotifier, MacOSInputSourceProvider, main_thread_dispatch
    from langsync.stt import AppleSpeechBackend, MlxTranscriptionBackend

    settings = settings or SettingsStore(persist=True)
    return LanguageSyncService(
        settings,
        provider=MacOSInputSourceProvider(),
        notifier=MacOSInputSourceNotifier(),
        dispatch=main_thread_dispatch,
        backends=[
            AppleSpeechBackend(),
            MlxTranscriptionBackend(batch_size=settings.get("whisper_batch_size", 12)),
        ],
    )
