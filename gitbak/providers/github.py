"""
Archive provider for GitHub repositories.
"""

from .base import ArchiveProvider
from .registry import register_provider

GITHUB_ARCHIVE_URL = "https://github.com/{user_id}/{repo_id}/archive/master.zip"


@register_provider
class GitHubProvider(ArchiveProvider):
    """Downloads the zip archive of a repository's ``master`` branch."""

    provider_id = "github"
    extension = "zip"

    def archive_url(self, user_id: str, repo_id: str) -> str:
        return GITHUB_ARCHIVE_URL.format(user_id=user_id, repo_id=repo_id)
