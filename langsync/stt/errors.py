"""Transcription negotiation failures."""

from __future__ import annotations


class NegotiationError(Exception):
    """Terminal failure for one transcription request."""

    default_message = "Transcription request failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class UnsupportedRuntime(NegotiationError):
    default_message = "The speech backend is not available on this system."


class InvalidModelSelection(NegotiationError):
    default_message = "Invalid model type provided for this speech backend."


class LocaleNotSupported(NegotiationError):
    default_message = "The selected language is not supported by the speech backend."


class AssetAllocationFailed(NegotiationError):
    default_message = "Failed to allocate assets for the selected locale."


class TranscriptionFailed(NegotiationError):
    default_message = "Transcription failed."
