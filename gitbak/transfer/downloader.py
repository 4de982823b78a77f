"""
Handles the low-level downloading of archives over HTTP and writing them to disk.
"""

import asyncio
import logging
from contextlib import suppress
from pathlib import Path

import aiofiles
import aiofiles.os
import aiohttp

from gitbak import __version__
from gitbak.exceptions import FetchError, FilesystemError
from gitbak.utils.path import create_dir

log = logging.getLogger(__name__)

USER_AGENT = f"gitbak/{__version__}"


def open_session(max_workers: int, timeout: float) -> aiohttp.ClientSession:
    """Creates the HTTP session used by every download of one install run."""
    return aiohttp.ClientSession(
        connector=aiohttp.TCPConnector(limit_per_host=max_workers, ttl_dns_cache=600),
        timeout=aiohttp.ClientTimeout(total=timeout, sock_connect=min(timeout, 15)),
        headers={"User-Agent": USER_AGENT},
    )


class Downloader:
    """
    Fetches archive bodies with retry logic and persists them atomically.

    The HTTP session is opened on the first fetch and closed by `close` or on
    leaving an `async with` block.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.5,
        timeout: float = 60.0,
        max_workers: int = 4,
    ):
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.timeout = timeout
        self.max_workers = max_workers
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "Downloader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
            log.debug("Download session closed.")
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = open_session(self.max_workers, self.timeout)
        return self._session

    async def _get(self, url: str) -> bytes:
        async with self._get_session().get(url, allow_redirects=True) as response:
            if 400 <= response.status < 500:
                raise FetchError(
                    f"'{url}' returned HTTP {response.status}.", url, response.status
                )
            # 5xx surfaces as ClientResponseError and is retried
            response.raise_for_status()
            if not 200 <= response.status < 300:
                raise FetchError(
                    f"'{url}' returned HTTP {response.status}.", url, response.status
                )
            return await response.read()

    async def fetch(self, url: str) -> bytes:
        """
        Downloads the full response body of a URL.

        Connection errors, timeouts and server errors are retried with exponential
        backoff. Client errors (4xx) fail immediately.

        Raises:
            FetchError: If the response is not a success or every attempt failed.
        """
        last_exception: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._get(url)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                log.debug(
                    f"Download attempt {attempt}/{self.max_attempts} for '{url}'"
                    f" failed: {e!r}."
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))

        status = getattr(last_exception, "status", None)
        if isinstance(last_exception, asyncio.TimeoutError):
            reason = f"timed out after {self.timeout:g}s"
        else:
            reason = str(last_exception) or type(last_exception).__name__
        raise FetchError(
            f"Failed to download '{url}' after {self.max_attempts} attempt(s):"
            f" {reason}",
            url,
            status,
        ) from last_exception

    async def save(self, destination: Path, data: bytes) -> int:
        """
        Writes data to destination through a hidden temporary file and a rename.

        Returns:
            The number of bytes written.

        Raises:
            FilesystemError: If the directory or file cannot be written.
        """
        temp_path = destination.with_name(f".{destination.name}.part")
        try:
            await asyncio.to_thread(create_dir, destination.parent)
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(temp_path, destination)
        except OSError as e:
            with suppress(OSError):
                await aiofiles.os.remove(temp_path)
            raise FilesystemError(f"Failed to write '{destination}': {e}") from e
        return len(data)
