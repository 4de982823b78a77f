"""
Archive Providers.

Each provider knows how to fetch archives from one remote source and where to
store them. Importing this package registers the built-in providers.
"""

from .base import ArchiveProvider
from .github import GitHubProvider
from .registry import PROVIDER_CLASSES, ProviderRegistry, register_provider

__all__ = [
    "PROVIDER_CLASSES",
    "ArchiveProvider",
    "GitHubProvider",
    "ProviderRegistry",
    "register_provider",
]
