"""Keep the dictation language in sync with the macOS keyboard input source."""

__version__ = "0.1.0"
