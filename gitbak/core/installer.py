"""
Installs tracked archives that are missing from the backup tree.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from rich.markup import escape

from gitbak.exceptions import GitbakError
from gitbak.models.reference import PackageReference
from gitbak.models.report import InstallReport, InstallResult
from gitbak.providers.registry import ProviderRegistry

log = logging.getLogger(__name__)


class Installer:
    """
    Dispatches each reference to its provider as its own task and waits for all
    of them. A failed reference never stops the others; every outcome ends up in
    the returned report.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        max_workers: int = 4,
        on_result: Callable[[InstallResult], None] | None = None,
    ):
        self.registry = registry
        self.max_workers = max_workers
        self.on_result = on_result

    async def install(self, references: Sequence[PackageReference]) -> InstallReport:
        """Installs the given references, returning results in the same order."""
        if not references:
            return InstallReport()

        semaphore = asyncio.Semaphore(self.max_workers)
        tasks = [
            asyncio.create_task(self._install_one(ref, semaphore))
            for ref in references
        ]
        results = await asyncio.gather(*tasks)
        return InstallReport(list(results))

    async def _install_one(
        self, ref: PackageReference, semaphore: asyncio.Semaphore
    ) -> InstallResult:
        try:
            provider = self.registry.get(ref.provider_id)
            async with semaphore:
                log.debug(f"Fetching {escape(str(ref))} from {provider.provider_id}")
                data = await provider.fetch(ref.user_id, ref.repo_id)
                destination = await provider.persist(ref.user_id, ref.repo_id, data)
            result = InstallResult(ref, destination=destination, size_bytes=len(data))
            log.info(
                f"  [green]✓ Installed:[/] {escape(str(ref))} "
                f"[dim]→ {escape(str(destination))}[/dim]"
            )
        except GitbakError as e:
            result = InstallResult(ref, error=e)
            log.error(f"  [red]✗ Failed:[/] {escape(str(ref))} ({escape(str(e))})")

        if self.on_result:
            self.on_result(result)
        return result
