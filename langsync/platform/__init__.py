"""Platform adapters."""

from langsync.platform.base import Dispatcher, InputSourceNotifier, InputSourceProvider, InputSourceSnapshot

__all__ = ["Dispatcher", "InputSourceNotifier", "InputSourceProvider", "InputSourceSnapshot"]
