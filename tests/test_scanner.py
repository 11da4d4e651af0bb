"""Tests for the manifest scanner."""

from extension_finder.config import FinderConfig
from extension_finder.scanner import ManifestScanner

from tests.conftest import FOO_CLASS, extension_manifest, write_manifest


def scanned(config):
    return [p.relative_to(config.root).as_posix() for p in ManifestScanner(config).scan()]


class TestManifestScanner:
    """Tests for ManifestScanner.scan."""

    def test_finds_manifests_in_both_roots(self, config):
        """Managed root results come before local root results."""
        write_manifest(config.root, "local/acme/bar", extension_manifest("acme/bar", FOO_CLASS))
        write_manifest(config.root, "vendor/acme/foo", extension_manifest("acme/foo", FOO_CLASS))

        assert scanned(config) == [
            "vendor/acme/foo/composer.json",
            "local/acme/bar/composer.json",
        ]

    def test_missing_roots_yield_nothing(self, config):
        """Neither root exists: empty result, no error."""
        assert scanned(config) == []

    def test_missing_managed_root_still_scans_local(self, config):
        write_manifest(config.root, "local/acme/foo", extension_manifest("acme/foo", FOO_CLASS))

        assert scanned(config) == ["local/acme/foo/composer.json"]

    def test_only_depth_two_is_included(self, config):
        """Manifests directly in the root, one level down, or three down are ignored."""
        data = extension_manifest("acme/foo", FOO_CLASS)
        write_manifest(config.root, "local", data)
        write_manifest(config.root, "local/acme", data)
        write_manifest(config.root, "local/acme/foo/nested", data)
        write_manifest(config.root, "local/acme/foo", data)

        assert scanned(config) == ["local/acme/foo/composer.json"]

    def test_excluded_subtree_is_skipped(self, config):
        """vendor/composer holds the runtime's own metadata, never extensions."""
        data = extension_manifest("acme/foo", FOO_CLASS)
        write_manifest(config.root, "vendor/composer/installed", data)
        write_manifest(config.root, "vendor/acme/foo", data)

        assert scanned(config) == ["vendor/acme/foo/composer.json"]

    def test_manifest_without_marker_is_skipped(self, config):
        """Well-formed manifests that never mention the marker key are not extensions."""
        write_manifest(config.root, "vendor/symfony/yaml", {"name": "symfony/yaml", "extra": {}})
        write_manifest(config.root, "vendor/acme/foo", extension_manifest("acme/foo", FOO_CLASS))

        assert scanned(config) == ["vendor/acme/foo/composer.json"]

    def test_marker_must_be_quoted_key(self, config):
        """The bare word without quotes does not pass the pre-filter."""
        write_manifest(
            config.root,
            "vendor/acme/docs",
            {"name": "acme/docs", "description": "mentions extension-class in prose"},
        )

        assert scanned(config) == []

    def test_other_filenames_are_ignored(self, config):
        directory = config.root / "vendor" / "acme" / "foo"
        directory.mkdir(parents=True)
        (directory / "package.json").write_text('{"extension-class": "x"}')

        assert scanned(config) == []

    def test_custom_marker_key(self, config):
        config.marker_key = "bolt-class"
        write_manifest(
            config.root, "vendor/acme/foo", {"name": "acme/foo", "extra": {"bolt-class": FOO_CLASS}}
        )
        write_manifest(config.root, "vendor/acme/bar", extension_manifest("acme/bar", FOO_CLASS))

        assert scanned(config) == ["vendor/acme/foo/composer.json"]

    def test_hidden_directories_are_skipped(self, config):
        """Dot-directories such as caches never hold installed extensions."""
        data = extension_manifest("acme/foo", FOO_CLASS)
        write_manifest(config.root, "vendor/.cache/foo", data)
        write_manifest(config.root, "local/acme/.git", data)
        write_manifest(config.root, "vendor/acme/foo", data)

        assert scanned(config) == ["vendor/acme/foo/composer.json"]

    def test_hidden_finder_root_is_allowed(self, tmp_path):
        """Only parts below the search root count as hidden."""
        config = FinderConfig(root=tmp_path / ".site")
        write_manifest(config.root, "local/acme/foo", extension_manifest("acme/foo", FOO_CLASS))

        assert scanned(config) == ["local/acme/foo/composer.json"]
