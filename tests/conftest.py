"""Pytest fixtures for gitbak tests."""

import json

import pytest

from gitbak.transfer import downloader as downloader_mod
from gitbak.transfer.downloader import Downloader
from tests.fakes import FakeSession

SCENARIO_MANIFEST = {"archives": {"github": {"alice": ["repoA"]}}}


@pytest.fixture
def fake_session(monkeypatch):
    """Routes all downloads through a FakeSession."""
    session = FakeSession()
    monkeypatch.setattr(downloader_mod, "open_session", lambda *args: session)
    return session


@pytest.fixture
def downloader():
    """A downloader that does not sleep between attempts."""
    return Downloader(max_attempts=2, base_delay=0, timeout=5)


@pytest.fixture
def manifest_path(tmp_path):
    """A manifest tracking github@alice/repoA."""
    path = tmp_path / "backups.json"
    path.write_text(json.dumps(SCENARIO_MANIFEST), encoding="utf-8")
    return path


@pytest.fixture
def backups_dir(tmp_path):
    """An empty backup tree."""
    path = tmp_path / "backups"
    path.mkdir()
    return path
