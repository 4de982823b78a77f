"""
Storage Layer.

This package handles all data persistence: the manifest file, the on-disk
backup tree, and the configuration file.
"""

from .config_manager import ConfigManager
from .inventory import LocalInventory
from .manifest_store import ManifestStore

__all__ = ["ConfigManager", "LocalInventory", "ManifestStore"]
