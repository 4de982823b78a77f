"""
The table that maps provider ids to archive providers.
"""

import logging
from pathlib import Path

from gitbak.exceptions import UnsupportedProviderError
from gitbak.transfer.downloader import Downloader

from .base import ArchiveProvider

log = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[ArchiveProvider]] = {}


def register_provider(cls: type[ArchiveProvider]) -> type[ArchiveProvider]:
    """Class decorator that makes a provider available to new registries."""
    if not cls.provider_id:
        raise ValueError(f"{cls.__name__} does not define a provider_id.")
    PROVIDER_CLASSES[cls.provider_id] = cls
    return cls


class ProviderRegistry:
    """Looks up the provider responsible for a provider id."""

    def __init__(self) -> None:
        self._providers: dict[str, ArchiveProvider] = {}

    @classmethod
    def from_classes(
        cls, backups_dir: Path, downloader: Downloader
    ) -> "ProviderRegistry":
        """Creates a registry with one instance of every registered provider class."""
        registry = cls()
        for provider_cls in PROVIDER_CLASSES.values():
            registry.register(provider_cls(backups_dir, downloader))
        return registry

    def register(self, provider: ArchiveProvider) -> None:
        if provider.provider_id in self._providers:
            log.debug(f"Replacing archive provider for '{provider.provider_id}'.")
        self._providers[provider.provider_id] = provider

    def get(self, provider_id: str) -> ArchiveProvider:
        """
        Raises:
            UnsupportedProviderError: If no provider is registered for the id.
        """
        try:
            return self._providers[provider_id]
        except KeyError:
            raise UnsupportedProviderError(provider_id) from None
