"""
Core application engine.

The reconciler compares the manifest with the backup tree, the `Installer`
downloads whatever is missing, and the `ManifestMutator` edits the manifest.
"""

from .installer import Installer
from .mutator import ManifestMutator, build_reference
from .reconciler import flatten, missing

__all__ = ["Installer", "ManifestMutator", "build_reference", "flatten", "missing"]
