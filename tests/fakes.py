"""Test doubles for the aiohttp session used by the downloader."""

from unittest.mock import MagicMock

import aiohttp


class FakeResponse:
    """Stands in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, body: bytes = b""):
        self.status = status
        self.body = body

    async def read(self) -> bytes:
        return self.body

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(),
                history=(),
                status=self.status,
                message="error",
            )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """
    Serves canned outcomes per URL. An outcome is a FakeResponse, an exception
    to raise, or a list of those consumed one request at a time. Unknown URLs
    answer 404.
    """

    def __init__(self, outcomes: dict | None = None):
        self.outcomes = outcomes or {}
        self.requests: list[str] = []
        self.closed = False

    def get(self, url: str, **kwargs):
        self.requests.append(url)
        outcome = self.outcomes.get(url, FakeResponse(404, b"Not Found"))
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True
