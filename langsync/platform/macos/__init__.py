"""macOS platform adapter implementations."""

from langsync.platform.macos.input_source import (
    HAS_FOUNDATION,
    TIS_SELECTED_INPUT_SOURCE_CHANGED,
    MacOSInputSourceNotifier,
    MacOSInputSourceProvider,
    main_thread_dispatch,
)

__all__ = [
    "MacOSInputSourceNotifier",
    "MacOSInputSourceProvider",
    "main_thread_dispatch",
    "TIS_SELECTED_INPUT_SOURCE_CHANGED",
    "HAS_FOUNDATION",
]
