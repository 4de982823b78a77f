"""
Scans the backup tree to find which archives are already installed.
"""

import logging
from pathlib import Path

from gitbak.models.reference import PackageReference

log = logging.getLogger(__name__)


def repo_id_from_filename(filename: str) -> str:
    """
    Derives a repo id from an archive filename by cutting at the first '.'.

    A name with no '.', or whose only '.' is the leading character, is used as-is.
    """
    index = filename.find(".")
    if index > 0:
        return filename[:index]
    return filename


def _sorted_entries(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


class LocalInventory:
    """
    Infers installed references from ``<root>/<provider>/<user>/<file>``.

    Exactly three levels are read. Anything that is not a directory at the
    provider or user level, or not a file at the leaf level, is ignored. The
    presence of a file is taken as proof of installation.
    """

    def __init__(self, backups_dir: Path):
        self.root = Path(backups_dir)

    def scan_sorted(self) -> list[PackageReference]:
        """Returns installed references in a stable, name-sorted order."""
        if not self.root.is_dir():
            log.debug(f"Backup directory '{self.root}' does not exist yet.")
            return []

        found: list[PackageReference] = []
        for provider_dir in _sorted_entries(self.root):
            if not provider_dir.is_dir():
                continue
            for user_dir in _sorted_entries(provider_dir):
                if not user_dir.is_dir():
                    continue
                for entry in _sorted_entries(user_dir):
                    if not entry.is_file():
                        continue
                    found.append(
                        PackageReference(
                            provider_dir.name,
                            user_dir.name,
                            repo_id_from_filename(entry.name),
                        )
                    )
        return list(dict.fromkeys(found))

    def scan(self) -> set[PackageReference]:
        """Returns the set of installed references."""
        return set(self.scan_sorted())
