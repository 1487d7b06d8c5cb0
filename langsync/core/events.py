"""In-process notification bus for settings change events."""

from __future__ import annotations

import logging
import threading
from typing import Callable

LOG = logging.getLogger("langsync")

LANGUAGE_DID_CHANGE = "languageDidChange"
APP_SETTINGS_DID_CHANGE = "AppSettingsDidChange"


class NotificationBus:
    """Fire-and-forget named notifications with independent subscribers.

    Subscribers run synchronously on the posting thread. A subscriber that
    raises is logged and skipped so the others still get the notification.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable[[str], None]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, name: str, callback: Callable[[str], None]) -> None:
        with self._lock:
            callbacks = self._subscribers.setdefault(name, [])
            if callback not in callbacks:
                callbacks.append(callback)

    def unsubscribe(self, name: str, callback: Callable[[str], None]) -> None:
        with self._lock:
            callbacks = self._subscribers.get(name, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def post(self, name: str) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(name, ()))
        LOG.debug(f"Posting {name} to {len(callbacks)} subscriber(s)")
        for callback in callbacks:
            try:
                callback(name)
            except Exception as exc:
                LOG.error(f"Subscriber for {name} failed: {exc}", exc_info=True)
