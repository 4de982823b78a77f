"""
Per-reference outcomes of an install session.
"""

from dataclasses import dataclass, field
from pathlib import Path

from gitbak.exceptions import GitbakError

from .reference import PackageReference


@dataclass
class InstallResult:
    """The outcome of installing a single reference."""

    reference: PackageReference
    destination: Path | None = None
    size_bytes: int = 0
    error: GitbakError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> str | None:
        return self.error.kind if self.error else None


@dataclass
class InstallReport:
    """Tracks the results of an install session, in the order they were requested."""

    results: list[InstallResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[InstallResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[InstallResult]:
        return [r for r in self.results if not r.ok]

    @property
    def total_bytes(self) -> int:
        return sum(r.size_bytes for r in self.succeeded)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed
