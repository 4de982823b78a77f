"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class GitbakError(Exception):
    """Base exception for all application-specific errors."""

    @property
    def kind(self) -> str:
        """The error kind reported for a failed item."""
        return type(self).__name__


class ConfigurationError(GitbakError):
    """Raised for issues related to configuration loading or validation."""


class ManifestParseError(GitbakError):
    """Raised when the manifest file is missing or is not a valid manifest."""


class MissingArgumentError(GitbakError):
    """Raised when a command is invoked without a required argument."""


class InvalidReferenceError(GitbakError):
    """Raised when a package reference names something that is not a single path component."""


class DuplicatePackageError(GitbakError):
    """Raised when adding a package that the manifest already tracks."""


class UnknownReferenceError(GitbakError):
    """Base for lookups of a manifest entry that does not exist."""


class UnknownProviderError(UnknownReferenceError):
    """Raised when the manifest has no entry for a provider."""


class UnknownUserError(UnknownReferenceError):
    """Raised when a provider in the manifest has no entry for a user."""


class UnknownPackageError(UnknownReferenceError):
    """Raised when a user in the manifest does not track a repository."""


class UnsupportedProviderError(GitbakError):
    """Raised when no archive provider is registered for a provider id."""

    def __init__(self, provider_id: str):
        super().__init__(f"No archive provider is registered for '{provider_id}'.")
        self.provider_id = provider_id


class FetchError(GitbakError):
    """
    Raised when an archive cannot be downloaded, either because the server
    answered with a non-success status or because the request itself failed.
    """

    def __init__(self, message: str, url: str, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class FilesystemError(GitbakError):
    """Raised when writing an archive or the manifest to disk fails."""
