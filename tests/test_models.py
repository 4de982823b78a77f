"""Tests for package references and the in-memory manifest."""

import logging

import pytest

from gitbak.exceptions import (
    DuplicatePackageError,
    UnknownPackageError,
    UnknownProviderError,
    UnknownUserError,
)
from gitbak.models import InstallReport, InstallResult, Manifest, ManifestDocument
from gitbak.models.reference import PackageReference

pytestmark = pytest.mark.unit


def _manifest(archives: dict) -> Manifest:
    return Manifest.from_document(ManifestDocument(archives=archives))


class TestPackageReference:
    """Tests for the canonical provider@user/repo form."""

    def test_str_is_canonical_form(self):
        ref = PackageReference("github", "alice", "repoA")
        assert str(ref) == "github@alice/repoA"

    def test_references_are_hashable(self):
        refs = {
            PackageReference("github", "alice", "repoA"),
            PackageReference("github", "alice", "repoA"),
        }
        assert len(refs) == 1


class TestManifest:
    """Tests for the ordered provider/user/repo mapping."""

    def test_references_follow_insertion_order(self):
        manifest = _manifest(
            {
                "github": {"zed": ["b", "a"], "alice": ["c"]},
                "gitlab": {"bob": ["d"]},
            }
        )
        assert [str(r) for r in manifest.references()] == [
            "github@zed/b",
            "github@zed/a",
            "github@alice/c",
            "gitlab@bob/d",
        ]

    def test_add_creates_provider_and_user(self):
        manifest = Manifest()
        manifest.add(PackageReference("github", "bob", "foo"))
        assert manifest.to_document().archives == {"github": {"bob": ["foo"]}}

    def test_add_appends_in_order(self):
        manifest = _manifest({"github": {"bob": ["foo"]}})
        manifest.add(PackageReference("github", "bob", "bar"))
        assert manifest.to_document().archives == {"github": {"bob": ["foo", "bar"]}}

    def test_add_duplicate_raises_and_leaves_manifest_unchanged(self):
        manifest = _manifest({"github": {"bob": ["foo"]}})
        before = manifest.to_document()

        with pytest.raises(DuplicatePackageError):
            manifest.add(PackageReference("github", "bob", "foo"))

        assert manifest.to_document() == before

    def test_remove_unknown_levels(self):
        manifest = _manifest({"github": {"bob": ["foo"]}})

        with pytest.raises(UnknownProviderError):
            manifest.remove(PackageReference("gitlab", "bob", "foo"))
        with pytest.raises(UnknownUserError):
            manifest.remove(PackageReference("github", "carol", "foo"))
        with pytest.raises(UnknownPackageError):
            manifest.remove(PackageReference("github", "bob", "bar"))

    def test_remove_last_repo_keeps_empty_entries(self):
        manifest = _manifest({"github": {"bob": ["foo"]}})
        manifest.remove(PackageReference("github", "bob", "foo"))
        assert manifest.to_document().archives == {"github": {"bob": []}}
        assert len(manifest) == 0

    def test_duplicates_in_document_are_collapsed(self):
        manifest = _manifest({"github": {"bob": ["foo", "bar", "foo"]}})
        assert manifest.to_document().archives == {"github": {"bob": ["foo", "bar"]}}

    def test_duplicate_warning_escapes_markup(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gitbak"):
            _manifest({"github": {"bob": ["x[bold]", "x[bold]"]}})
        assert "github@bob/x\\[bold]" in caplog.text

    def test_contains(self):
        manifest = _manifest({"github": {"bob": ["foo"]}})
        assert PackageReference("github", "bob", "foo") in manifest
        assert PackageReference("github", "bob", "bar") not in manifest
        assert "github@bob/foo" not in manifest

    def test_equality_ignores_key_order(self):
        first = _manifest({"github": {"a": ["x"], "b": ["y"]}})
        second = _manifest({"github": {"b": ["y"], "a": ["x"]}})
        assert first == second

    def test_equality_respects_repo_order(self):
        first = _manifest({"github": {"a": ["x", "y"]}})
        second = _manifest({"github": {"a": ["y", "x"]}})
        assert first != second


class TestInstallReport:
    """Tests for aggregating install results."""

    def test_split_by_outcome(self):
        ok = InstallResult(PackageReference("github", "a", "x"), size_bytes=10)
        bad = InstallResult(
            PackageReference("github", "a", "y"),
            error=UnknownPackageError("gone"),
        )
        report = InstallReport([ok, bad])

        assert report.succeeded == [ok]
        assert report.failed == [bad]
        assert report.total_bytes == 10
        assert report.all_succeeded is False
        assert bad.error_kind == "UnknownPackageError"
        assert ok.error_kind is None

    def test_empty_report_succeeds(self):
        assert InstallReport().all_succeeded is True
