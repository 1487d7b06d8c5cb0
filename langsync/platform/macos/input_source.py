"""macOS keyboard input source adapters (HIToolbox + distributed notifications)."""

from __future__ import annotations

import logging
from typing import Callable

from langsync.platform.base import InputSourceSnapshot

try:
    import objc
    from Foundation import NSBundle, NSDistributedNotificationCenter, NSObject
    from PyObjCTools import AppHelper

    HAS_FOUNDATION = True
except ImportError:
    HAS_FOUNDATION = False

LOG = logging.getLogger("langsync")

# kTISNotifySelectedKeyboardInputSourceChanged
TIS_SELECTED_INPUT_SOURCE_CHANGED = "com.apple.Carbon.TISNotifySelectedKeyboardInputSourceChanged"

_HITOOLBOX_ID = "com.apple.HIToolbox"
_TIS_FUNCTIONS = [
    ("TISCopyCurrentKeyboardInputSource", b"@", "", {"retval": {"already_cfretained": True}}),
    ("TISGetInputSourceProperty", b"@@@"),
]
_TIS_VARIABLES = [
    ("kTISPropertyInputSourceLanguages", b"@"),
    ("kTISPropertyLocalizedName", b"@"),
]


def _load_hitoolbox():
    """Bind the Text Input Source functions from HIToolbox."""
    bundle = NSBundle.bundleWithIdentifier_(_HITOOLBOX_ID)
    if bundle is None:
        raise RuntimeError(f"{_HITOOLBOX_ID} bundle not found")
    namespace = {}
    objc.loadBundleFunctions(bundle, namespace, _TIS_FUNCTIONS)
    objc.loadBundleVariables(bundle, namespace, _TIS_VARIABLES)
    return namespace


class MacOSInputSourceProvider:
    """Reads the active keyboard input source through TIS."""

    def __init__(self):
        self._tis = None

    def _functions(self):
        if self._tis is None:
            self._tis = _load_hitoolbox()
        return self._tis

    def current_input_source(self) -> InputSourceSnapshot | None:
        if not HAS_FOUNDATION:
            return None
        try:
            tis = self._functions()
            source = tis["TISCopyCurrentKeyboardInputSource"]()
            if source is None:
                LOG.warning("Could not get current keyboard input source")
                return None
            languages = tis["TISGetInputSourceProperty"](source, tis["kTISPropertyInputSourceLanguages"])
            name = tis["TISGetInputSourceProperty"](source, tis["kTISPropertyLocalizedName"])
        except Exception as exc:
            LOG.warning(f"Failed to query keyboard input source: {exc}")
            return None

        language = str(languages[0]) if languages else ""
        return InputSourceSnapshot(language=language, display_name=str(name) if name else "")


if HAS_FOUNDATION:

    class InputSourceObserver(NSObject):
        """Receives the distributed notification and forwards it to Python."""

        def initWithCallback_(self, callback):
            self = objc.super(InputSourceObserver, self).init()
            if self is None:
                return None
            self._callback = callback
            return self

        def inputSourceChanged_(self, notification):
            self._callback()


class MacOSInputSourceNotifier:
    """Single subscription to keyboard input source change notifications."""

    def __init__(self):
        self._observer = None

    def subscribe(self, callback: Callable[[], None]) -> None:
        if self._observer is not None:
            return
        if not HAS_FOUNDATION:
            LOG.warning("Foundation not available; keyboard changes will not be observed")
            return
        self._observer = InputSourceObserver.alloc().initWithCallback_(callback)
        NSDistributedNotificationCenter.defaultCenter().addObserver_selector_name_object_(
            self._observer,
            "inputSourceChanged:",
            TIS_SELECTED_INPUT_SOURCE_CHANGED,
            None,
        )
        LOG.debug("Started monitoring keyboard input source changes")

    def unsubscribe(self) -> None:
        if self._observer is None:
            return
        NSDistributedNotificationCenter.defaultCenter().removeObserver_name_object_(
            self._observer,
            TIS_SELECTED_INPUT_SOURCE_CHANGED,
            None,
        )
        self._observer = None
        LOG.debug("Stopped monitoring keyboard input source changes")


def main_thread_dispatch(fn: Callable[[], None]) -> None:
    """Run fn on the Cocoa main thread."""
    AppHelper.callAfter(fn)
