"""Speech-to-text backend abstractions and implementations."""

from langsync.stt.apple_speech import AppleSpeechBackend
from langsync.stt.base import LocaleCapabilities, NegotiationResult, TranscriptionBackend
from langsync.stt.errors import (
    AssetAllocationFailed,
    InvalidModelSelection,
    LocaleNotSupported,
    NegotiationError,
    TranscriptionFailed,
    UnsupportedRuntime,
)
from langsync.stt.mlx_backend import MlxTranscriptionBackend
from langsync.stt.negotiator import TranscriptionLocaleNegotiator, classify

__all__ = [
    "TranscriptionBackend",
    "LocaleCapabilities",
    "NegotiationResult",
    "AppleSpeechBackend",
    "MlxTranscriptionBackend",
    "TranscriptionLocaleNegotiator",
    "classify",
    "NegotiationError",
    "UnsupportedRuntime",
    "InvalidModelSelection",
    "LocaleNotSupported",
    "AssetAllocationFailed",
    "TranscriptionFailed",
]
