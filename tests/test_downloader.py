"""Tests for fetching archives over HTTP and writing them to disk."""

import asyncio

import aiohttp
import pytest

from gitbak.exceptions import FetchError, FilesystemError
from gitbak.transfer import downloader as downloader_mod
from gitbak.transfer.downloader import Downloader
from tests.fakes import FakeResponse, FakeSession

pytestmark = pytest.mark.unit

URL = "https://example.test/archive.zip"


class TestFetch:
    """Tests for Downloader.fetch."""

    async def test_success_returns_body(self, fake_session, downloader):
        fake_session.outcomes[URL] = FakeResponse(200, b"PK\x03\x04")

        assert await downloader.fetch(URL) == b"PK\x03\x04"
        assert fake_session.requests == [URL]

    async def test_client_error_is_not_retried(self, fake_session, downloader):
        fake_session.outcomes[URL] = FakeResponse(404, b"Not Found")

        with pytest.raises(FetchError) as exc_info:
            await downloader.fetch(URL)

        assert exc_info.value.status == 404
        assert exc_info.value.url == URL
        assert fake_session.requests == [URL]

    async def test_server_error_is_retried(self, fake_session, downloader):
        fake_session.outcomes[URL] = [FakeResponse(503), FakeResponse(200, b"ok")]

        assert await downloader.fetch(URL) == b"ok"
        assert len(fake_session.requests) == 2

    async def test_persistent_server_error(self, fake_session, downloader):
        fake_session.outcomes[URL] = [FakeResponse(500), FakeResponse(502)]

        with pytest.raises(FetchError) as exc_info:
            await downloader.fetch(URL)

        assert exc_info.value.status == 502

    async def test_connection_error_becomes_fetch_error(self, fake_session, downloader):
        fake_session.outcomes[URL] = [
            aiohttp.ClientConnectionError("refused"),
            aiohttp.ClientConnectionError("refused"),
        ]

        with pytest.raises(FetchError, match="refused"):
            await downloader.fetch(URL)
        assert len(fake_session.requests) == 2

    async def test_timeout_becomes_fetch_error(self, fake_session):
        fake_session.outcomes[URL] = asyncio.TimeoutError()
        downloader = Downloader(max_attempts=1, base_delay=0, timeout=7)

        with pytest.raises(FetchError, match="timed out after 7s"):
            await downloader.fetch(URL)

    async def test_redirect_status_is_rejected(self, fake_session, downloader):
        fake_session.outcomes[URL] = FakeResponse(304)

        with pytest.raises(FetchError):
            await downloader.fetch(URL)


class TestSave:
    """Tests for Downloader.save."""

    async def test_creates_directories_and_writes(self, tmp_path, downloader):
        destination = tmp_path / "github" / "alice" / "repoA.zip"

        written = await downloader.save(destination, b"data")

        assert written == 4
        assert destination.read_bytes() == b"data"
        assert [p.name for p in destination.parent.iterdir()] == ["repoA.zip"]

    async def test_existing_directory_is_fine(self, tmp_path, downloader):
        destination = tmp_path / "repoA.zip"
        await downloader.save(destination, b"one")
        await downloader.save(destination, b"two")
        assert destination.read_bytes() == b"two"

    async def test_write_failure_raises_filesystem_error(self, tmp_path, downloader):
        blocker = tmp_path / "github"
        blocker.write_text("not a directory")

        with pytest.raises(FilesystemError):
            await downloader.save(blocker / "alice" / "repoA.zip", b"data")


class TestSession:
    """Tests for the HTTP session owned by a downloader."""

    async def test_session_is_shared_and_closed_on_exit(self, monkeypatch):
        opened = []

        def _open(max_workers, timeout):
            session = FakeSession({URL: FakeResponse(200, b"ok")})
            opened.append((session, max_workers, timeout))
            return session

        monkeypatch.setattr(downloader_mod, "open_session", _open)

        async with Downloader(max_workers=3, timeout=9) as downloader:
            await downloader.fetch(URL)
            await downloader.fetch(URL)

        assert len(opened) == 1
        session, max_workers, timeout = opened[0]
        assert (max_workers, timeout) == (3, 9)
        assert session.requests == [URL, URL]
        assert session.closed

    async def test_close_without_fetch_is_a_no_op(self):
        downloader = Downloader()
        await downloader.close()
        await downloader.close()
