"""Keyboard input source watcher."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable

from langsync.platform.base import Dispatcher, InputSourceNotifier, InputSourceProvider, InputSourceSnapshot

LOG = logging.getLogger("langsync")


class SerialDispatcher:
    """Runs submitted callables one at a time, in arrival order, on one thread.

    Stands in for the Cocoa main thread when there is no run loop.
    """

    def __init__(self, maxsize=64):
        self._queue = queue.Queue(maxsize=maxsize)
        self._thread = None

    def start(self):
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="langsync-main", daemon=True)
        self._thread.start()

    def stop(self):
        """Drain pending work and stop the worker thread."""
        if self._thread is None:
            return
        self._queue.put(None)
        self._thread.join()
        self._thread = None

    def __call__(self, fn: Callable[[], None]) -> None:
        if self._thread is None:
            raise RuntimeError("SerialDispatcher is not running")
        self._queue.put(fn)

    def _run(self):
        while True:
            fn = self._queue.get()
            if fn is None:
                return
            try:
                fn()
            except Exception as exc:
                LOG.error(f"Dispatched call failed: {exc}", exc_info=True)


class InputSourceWatcher:
    """Tracks the active keyboard input source and tells listeners when it changes."""

    def __init__(
        self,
        provider: InputSourceProvider,
        notifier: InputSourceNotifier,
        dispatch: Dispatcher,
    ):
        self.provider = provider
        self.notifier = notifier
        self.dispatch = dispatch
        self._snapshot = InputSourceSnapshot()
        self._listeners: list[Callable[[InputSourceSnapshot], None]] = []
        self._monitoring = False

    @property
    def snapshot(self) -> InputSourceSnapshot:
        return self._snapshot

    @property
    def current_language(self) -> str:
        return self._snapshot.language

    @property
    def current_display_name(self) -> str:
        return self._snapshot.display_name

    @property
    def is_monitoring(self) -> bool:
        return self._monitoring

    def add_listener(self, listener: Callable[[InputSourceSnapshot], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[InputSourceSnapshot], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> None:
        """Read the current input source and subscribe to changes (once)."""
        if self._monitoring:
            return
        self._monitoring = True
        self.refresh()
        self.notifier.subscribe(self._on_notification)

    def stop(self) -> None:
        if not self._monitoring:
            return
        self._monitoring = False
        self.notifier.unsubscribe()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def refresh(self) -> bool:
        """Re-query the OS. Returns False and keeps prior values on failure."""
        try:
            current = self.provider.current_input_source()
        except Exception as exc:
            LOG.warning(f"Keyboard input source query failed: {exc}", exc_info=True)
            return False
        if current is None:
            LOG.warning("Could not get current keyboard input source; keeping previous values")
            return False

        # A source missing one property keeps the last known value for it.
        self._snapshot = InputSourceSnapshot(
            language=current.language or self._snapshot.language,
            display_name=current.display_name or self._snapshot.display_name,
        )
        LOG.debug(f"Keyboard changed to: {self.current_display_name} ({self.current_language})")
        return True

    def _on_notification(self) -> None:
        # May fire on any thread; listeners may touch UI-bound state.
        self.dispatch(self._handle_change)

    def _handle_change(self) -> None:
        # Work queued before stop() must not reach listeners.
        if not self._monitoring:
            return
        if not self.refresh():
            return
        snapshot = self._snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                LOG.error(f"Input source listener failed: {exc}", exc_info=True)
