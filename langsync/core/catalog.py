"""Language support lookups against the active model."""

from __future__ import annotations

from typing import Protocol


class LanguageSource(Protocol):
    """Anything that reports the languages of the active model."""

    def all_languages(self) -> frozenset[str]:
        """Return the supported language codes."""


class LanguageSupportCatalog:
    """Read-only view of which app language codes the active model supports."""

    def __init__(self, registry: LanguageSource):
        self.registry = registry

    def is_supported(self, code: str) -> bool:
        return code in self.registry.all_languages()

    def supported_languages(self) -> frozenset[str]:
        return self.registry.all_languages()
