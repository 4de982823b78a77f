"""
Data Models Layer.

This package contains the core data structures used throughout the application:
package references, the manifest, configuration, and install results.
"""

from .config import GitbakConfig
from .manifest import Manifest, ManifestDocument
from .reference import PackageReference
from .report import InstallReport, InstallResult

__all__ = [
    "GitbakConfig",
    "InstallReport",
    "InstallResult",
    "Manifest",
    "ManifestDocument",
    "PackageReference",
]
