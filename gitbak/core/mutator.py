"""
Adds and removes manifest entries.
"""

import logging

from rich.markup import escape

from gitbak.exceptions import MissingArgumentError
from gitbak.models.manifest import Manifest
from gitbak.models.reference import PackageReference
from gitbak.storage.manifest_store import ManifestStore
from gitbak.utils.path import validate_path_component

log = logging.getLogger(__name__)


def build_reference(
    provider_id: str | None, user_id: str | None, repo_id: str | None
) -> PackageReference:
    """
    Builds a reference from command arguments.

    The provider id is lowercased. User and repo ids are kept exactly as written.

    Raises:
        MissingArgumentError: If any argument is missing or blank.
    """
    for label, value in (
        ("provider", provider_id),
        ("user", user_id),
        ("repository", repo_id),
    ):
        if not value or not value.strip():
            raise MissingArgumentError(f"No {label} given.")
    return PackageReference(provider_id.lower(), user_id, repo_id)


def validate_reference(ref: PackageReference) -> PackageReference:
    """
    Raises:
        InvalidReferenceError: If a part of the reference cannot be stored as a
        single path component under the backup directory.
    """
    validate_path_component(ref.provider_id, "provider")
    validate_path_component(ref.user_id, "user")
    validate_path_component(ref.repo_id, "repository")
    return ref


class ManifestMutator:
    """
    Applies add/remove operations to the manifest file.

    The manifest is reloaded before every operation and only written back when
    the operation succeeds.
    """

    def __init__(self, store: ManifestStore):
        self.store = store

    def add(
        self, provider_id: str | None, user_id: str | None, repo_id: str | None
    ) -> Manifest:
        """
        Raises:
            InvalidReferenceError: If the user or repo id is not a usable file name.
            DuplicatePackageError: If the reference is already tracked.
        """
        ref = validate_reference(build_reference(provider_id, user_id, repo_id))
        manifest = self.store.load()
        manifest.add(ref)
        self.store.save(manifest)

        if "." in ref.repo_id:
            log.warning(
                f"[yellow]'{escape(ref.repo_id)}' contains a '.'; installed archives "
                "are matched by the text before the first '.', so it will always be "
                "reported as missing.[/yellow]"
            )
        log.info(f"[green]✓ Added[/green] {escape(str(ref))}")
        return manifest

    def remove(
        self, provider_id: str | None, user_id: str | None, repo_id: str | None
    ) -> Manifest:
        """
        Empty user and provider entries are left in place. Entries are matched
        exactly as stored, so hand-edited ids can always be removed.

        Raises:
            UnknownProviderError, UnknownUserError, UnknownPackageError: If the
            reference is not tracked.
        """
        ref = build_reference(provider_id, user_id, repo_id)
        manifest = self.store.load()
        manifest.remove(ref)
        self.store.save(manifest)
        log.info(f"[green]✓ Removed[/green] {escape(str(ref))}")
        return manifest
