"""
Compares the manifest with the backup tree.
"""

from collections.abc import Collection

from gitbak.models.manifest import Manifest
from gitbak.models.reference import PackageReference


def flatten(manifest: Manifest) -> list[PackageReference]:
    """Lists tracked references by provider, then user, then repo, in manifest order."""
    return list(manifest.references())


def missing(
    manifest: Manifest, installed: Collection[PackageReference]
) -> list[PackageReference]:
    """
    Returns the tracked references that are not installed, in manifest order.

    The difference is one-way: installed archives that are not tracked are
    never reported.
    """
    installed_set = set(installed)
    return [ref for ref in flatten(manifest) if ref not in installed_set]
