"""
In-memory representation of the manifest: which archives the user wants mirrored.
"""

import logging
from collections.abc import Iterator

from pydantic import BaseModel, Field
from rich.markup import escape

from gitbak.exceptions import (
    DuplicatePackageError,
    UnknownPackageError,
    UnknownProviderError,
    UnknownUserError,
)

from .reference import PackageReference

log = logging.getLogger(__name__)


class ManifestDocument(BaseModel):
    """Schema of the manifest file as stored on disk."""

    archives: dict[str, dict[str, list[str]]] = Field(default_factory=dict)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


class Manifest:
    """
    An ordered mapping of provider -> user -> ordered set of repo ids.

    Insertion order is kept at every level and is the order in which
    references are flattened. Repo ids are unique per (provider, user);
    the ordered set is a dict with ``None`` values.
    """

    def __init__(self) -> None:
        self._archives: dict[str, dict[str, dict[str, None]]] = {}

    @classmethod
    def from_document(cls, document: ManifestDocument) -> "Manifest":
        """Builds a manifest from a validated document, dropping duplicate repos."""
        manifest = cls()
        for provider_id, users in document.archives.items():
            provider = manifest._archives.setdefault(provider_id, {})
            for user_id, repos in users.items():
                repo_set = provider.setdefault(user_id, {})
                for repo_id in repos:
                    if repo_id in repo_set:
                        ref = PackageReference(provider_id, user_id, repo_id)
                        log.warning(
                            f"[yellow]Duplicate entry '{escape(str(ref))}' in "
                            "manifest ignored.[/yellow]"
                        )
                        continue
                    repo_set[repo_id] = None
        return manifest

    def to_document(self) -> ManifestDocument:
        return ManifestDocument(
            archives={
                provider_id: {
                    user_id: list(repos) for user_id, repos in users.items()
                }
                for provider_id, users in self._archives.items()
            }
        )

    def references(self) -> Iterator[PackageReference]:
        """Yields every tracked reference in manifest order."""
        for provider_id, users in self._archives.items():
            for user_id, repos in users.items():
                for repo_id in repos:
                    yield PackageReference(provider_id, user_id, repo_id)

    def add(self, ref: PackageReference) -> None:
        """
        Tracks a reference, creating the provider and user entries as needed.

        Raises:
            DuplicatePackageError: If the reference is already tracked. The
            manifest is left unchanged.
        """
        if ref in self:
            raise DuplicatePackageError(f"{ref} is already included.")
        users = self._archives.setdefault(ref.provider_id, {})
        users.setdefault(ref.user_id, {})[ref.repo_id] = None

    def remove(self, ref: PackageReference) -> None:
        """
        Stops tracking a reference.

        Empty user and provider entries are kept after their last repo is removed.

        Raises:
            UnknownProviderError, UnknownUserError, UnknownPackageError: If the
            corresponding level of the reference is not in the manifest.
        """
        users = self._archives.get(ref.provider_id)
        if users is None:
            raise UnknownProviderError(
                f"No provider exists for '{ref.provider_id}', nothing to remove."
            )
        repos = users.get(ref.user_id)
        if repos is None:
            raise UnknownUserError(
                f"No user '{ref.user_id}' found under provider "
                f"'{ref.provider_id}', nothing to remove."
            )
        if ref.repo_id not in repos:
            raise UnknownPackageError(f"{ref} is not tracked, nothing to remove.")
        del repos[ref.repo_id]

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, PackageReference):
            return False
        users = self._archives.get(ref.provider_id, {})
        return ref.repo_id in users.get(ref.user_id, {})

    def __len__(self) -> int:
        return sum(
            len(repos) for users in self._archives.values() for repos in users.values()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manifest):
            return NotImplemented
        return self.to_document() == other.to_document()

    def __repr__(self) -> str:
        return f"Manifest({self.to_document().archives!r})"
