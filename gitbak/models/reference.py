"""
The canonical identity of a tracked or installed archive.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class PackageReference:
    """A (provider, user, repo) triple, rendered as ``provider@user/repo``."""

    provider_id: str
    user_id: str
    repo_id: str

    def __str__(self) -> str:
        return f"{self.provider_id}@{self.user_id}/{self.repo_id}"
