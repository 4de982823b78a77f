"""
The interface every remote archive source implements.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from gitbak.transfer.downloader import Downloader
from gitbak.utils.path import validate_path_component


class ArchiveProvider(ABC):
    """
    Knows where a provider's archives live remotely and where they go on disk.

    Subclasses set ``provider_id`` (the manifest key and backup directory name)
    and ``extension``, and build the download URL.
    """

    provider_id: str = ""
    extension: str = ""

    def __init__(self, backups_dir: Path, downloader: Downloader):
        self.backups_dir = Path(backups_dir)
        self.downloader = downloader

    @abstractmethod
    def archive_url(self, user_id: str, repo_id: str) -> str:
        """Returns the URL of the archive to download."""

    def destination_path(self, user_id: str, repo_id: str) -> Path:
        """Returns ``<backups>/<provider>/<user>/<repo>.<ext>``."""
        validate_path_component(user_id, "user")
        validate_path_component(repo_id, "repository")
        filename = f"{repo_id}.{self.extension}"
        return self.backups_dir / self.provider_id / user_id / filename

    async def fetch(self, user_id: str, repo_id: str) -> bytes:
        """Downloads the archive body. The bytes are not inspected."""
        return await self.downloader.fetch(self.archive_url(user_id, repo_id))

    async def persist(self, user_id: str, repo_id: str, data: bytes) -> Path:
        """Writes a fetched archive to its destination and returns the path."""
        destination = self.destination_path(user_id, repo_id)
        await self.downloader.save(destination, data)
        return destination

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backups_dir={str(self.backups_dir)!r})"
